"""Integration with Chromium's ``checkdeps.py`` DEPS rule checker."""
from __future__ import annotations

from ..domain.models import BuildConfig, ToolCommand
from ..utils.constants import CHECK_PROJECT, CHECKDEPS_EXTRA_REPOS, CHECKDEPS_SCRIPT


def checkdeps_command(config: BuildConfig) -> ToolCommand:
    # ``..`` segments in #include paths are checked literally.
    return ToolCommand(
        label="checkdeps",
        executable=config.python_executable,
        args=(
            CHECKDEPS_SCRIPT,
            CHECK_PROJECT,
            f"--extra-repos={CHECKDEPS_EXTRA_REPOS}",
            "--no-resolve-dotdot",
        ),
    )


__all__ = ["checkdeps_command"]
