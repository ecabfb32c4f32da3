"""Blocking execution of external build tools."""
from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path
from typing import Dict, Optional

from ..domain.models import ProcessOptions, StdioMode, ToolCommand, ToolResult
from .errors import ToolInvocationError
from .logging import get_logger

LOG = get_logger()


def _effective_env(options: ProcessOptions) -> Optional[Dict[str, str]]:
    if not options.env:
        return None
    env = dict(os.environ)
    env.update({str(key): str(value) for key, value in options.env.items()})
    return env


def _resolve_executable(
    command: ToolCommand,
    options: ProcessOptions,
    env: Optional[Dict[str, str]],
) -> str:
    executable = command.executable
    # Relative tool paths are relative to the child's working directory.
    if options.cwd is not None and not os.path.isabs(executable) and (
        os.sep in executable or (os.altsep is not None and os.altsep in executable)
    ):
        executable = str(Path(options.cwd) / executable)
    search_path = env.get("PATH") if env is not None else None
    exe = shutil.which(executable, path=search_path)
    if exe is None:
        LOG.error("%s not found in PATH", command.executable)
        raise ToolInvocationError(
            f"{command.label}: executable '{command.executable}' not found",
            command=command.argv,
        )
    return exe


def run_tool(command: ToolCommand, options: ProcessOptions) -> ToolResult:
    """Run ``command`` to completion and fail on a non-zero exit status."""

    env = _effective_env(options)
    exe = _resolve_executable(command, options, env)
    cmd = [exe, *command.args]
    capture = options.stdio is StdioMode.CAPTURE

    LOG.info("%s: %s", command.label, command.describe())
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(options.cwd) if options.cwd is not None else None,
            env=env,
            capture_output=capture,
            text=True,
            check=True,
            encoding="utf-8",
        )
    except subprocess.CalledProcessError as exc:
        if exc.stdout:
            LOG.error("[%s STDOUT]\n%s", command.label, exc.stdout)
        if exc.stderr:
            LOG.error("[%s STDERR]\n%s", command.label, exc.stderr)
        raise ToolInvocationError(
            f"{command.label} failed with rc={exc.returncode}",
            command=command.argv,
            returncode=exc.returncode,
        ) from exc
    except OSError as exc:
        LOG.error("Failed to start %s: %s", command.label, exc)
        raise ToolInvocationError(
            f"{command.label} could not be started: {exc}",
            command=command.argv,
        ) from exc

    LOG.info("[%s] rc=%d", command.label, proc.returncode)
    if capture:
        if proc.stdout:
            LOG.info("[%s STDOUT]\n%s", command.label, proc.stdout)
        if proc.stderr:
            LOG.info("[%s STDERR]\n%s", command.label, proc.stderr)
    return ToolResult(
        command=command,
        returncode=proc.returncode,
        stdout=proc.stdout if capture else None,
        stderr=proc.stderr if capture else None,
    )
