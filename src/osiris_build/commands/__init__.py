"""Public API for the osiris build commands."""
from .config.context import ConfigContext, apply_options
from .config.loader import load_build_config
from .domain.models import BuildConfig, ProcessOptions, StdioMode
from .gn_check import run_gn_check
from .utils.errors import BuildError, ConfigurationError, ToolInvocationError

__all__ = [
    "run_gn_check",
    "load_build_config",
    "apply_options",
    "ConfigContext",
    "BuildConfig",
    "ProcessOptions",
    "StdioMode",
    "BuildError",
    "ConfigurationError",
    "ToolInvocationError",
]
