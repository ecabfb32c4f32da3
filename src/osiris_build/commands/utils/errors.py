"""Exception hierarchy shared across the build commands."""
from __future__ import annotations

from typing import Optional, Sequence


class BuildError(Exception):
    """Base class for all build related failures."""


class ConfigurationError(BuildError):
    """Required configuration is missing or unusable."""


class InvalidConfigurationError(ConfigurationError):
    pass


class ConfigFileNotFound(ConfigurationError):
    pass


class SchemaFileNotFound(ConfigurationError):
    pass


class SchemaValidationError(ConfigurationError):
    pass


class ToolInvocationError(BuildError):
    """An external tool could not be started or exited with a non-zero status."""

    def __init__(
        self,
        message: str,
        *,
        command: Optional[Sequence[str]] = None,
        returncode: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.command = list(command) if command is not None else None
        self.returncode = returncode
