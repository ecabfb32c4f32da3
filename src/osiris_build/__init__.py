"""Top-level package for the osiris build command wrappers."""
from __future__ import annotations

from . import commands
from .commands import (
    BuildConfig,
    ConfigContext,
    load_build_config,
    run_gn_check,
)

__all__ = [
    "commands",
    "BuildConfig",
    "ConfigContext",
    "load_build_config",
    "run_gn_check",
]
