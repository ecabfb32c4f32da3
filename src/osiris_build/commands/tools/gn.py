"""Integration with GN's ``check`` subcommand."""
from __future__ import annotations

from ..domain.models import BuildConfig, ToolCommand
from ..utils.constants import GN_CHECK_LABEL_PATTERN


def gn_check_command(config: BuildConfig) -> ToolCommand:
    """Verify include and dependency rules for the osiris targets."""

    return ToolCommand(
        label="gn check",
        executable=config.gn_executable,
        args=("check", config.output_dir, GN_CHECK_LABEL_PATTERN),
    )


__all__ = ["gn_check_command"]
