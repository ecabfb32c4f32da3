"""Domain models describing build configurations and tool invocations."""
from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..utils.constants import (
    DEFAULT_BUILD_CONFIG,
    DEFAULT_TARGET_ARCH,
    GN_EXECUTABLE,
    OUTPUT_ROOT,
    PYTHON_EXECUTABLE,
)


class StdioMode(str, Enum):
    INHERIT = "inherit"
    CAPTURE = "capture"


def detect_host_os() -> str:
    if sys.platform.startswith("darwin"):
        return "mac"
    if sys.platform.startswith("win"):
        return "win"
    return "linux"


@dataclass(frozen=True)
class ProcessOptions:
    """How child processes are spawned: working directory, environment, stdio."""

    cwd: Optional[Path] = None
    env: Mapping[str, str] = field(default_factory=dict)
    stdio: StdioMode = StdioMode.INHERIT


@dataclass
class BuildConfig:
    """A build configuration as seen by the build commands.

    ``output_dir`` is derived from the build type name and the target platform
    unless ``output_dir_override`` pins it. ``default_options`` carries the
    process settings forwarded to every external tool.
    """

    name: str = DEFAULT_BUILD_CONFIG
    root_dir: Path = field(default_factory=Path.cwd)
    target_os: Optional[str] = None
    target_arch: Optional[str] = None
    host_os: str = field(default_factory=detect_host_os)
    output_dir_override: Optional[str] = None
    gn_executable: str = GN_EXECUTABLE
    python_executable: str = PYTHON_EXECUTABLE
    env: Dict[str, str] = field(default_factory=dict)
    stdio: StdioMode = StdioMode.INHERIT
    extras: Dict[str, Any] = field(default_factory=dict)

    @property
    def output_dir_name(self) -> str:
        dirname = self.name
        if self.target_arch and self.target_arch != DEFAULT_TARGET_ARCH:
            dirname = f"{dirname}_{self.target_arch}"
        if self.target_os and self.target_os != self.host_os:
            dirname = f"{self.target_os}_{dirname}"
        return dirname

    @property
    def output_dir(self) -> str:
        if self.output_dir_override is not None:
            return self.output_dir_override
        if not self.name:
            return ""
        return f"{OUTPUT_ROOT}/{self.output_dir_name}"

    @property
    def default_options(self) -> ProcessOptions:
        return ProcessOptions(cwd=self.root_dir, env=dict(self.env), stdio=self.stdio)


@dataclass(frozen=True)
class ToolCommand:
    label: str
    executable: str
    args: Tuple[str, ...] = ()

    @property
    def argv(self) -> List[str]:
        return [self.executable, *self.args]

    def describe(self) -> str:
        return " ".join(self.argv)


@dataclass
class ToolResult:
    command: ToolCommand
    returncode: int
    stdout: Optional[str] = None
    stderr: Optional[str] = None
