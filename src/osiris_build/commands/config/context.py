"""The current build configuration and the option merge rules."""
from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from ..domain.models import BuildConfig, ProcessOptions, StdioMode
from ..utils.errors import InvalidConfigurationError
from ..utils.logging import get_logger

LOG = get_logger()

OptionsMapping = Mapping[str, Any]

_ALIASES = {
    "build_config": "name",
    "c": "output_dir_override",
    "output_dir": "output_dir_override",
    "root": "root_dir",
    "src_dir": "root_dir",
    "gn": "gn_executable",
    "python": "python_executable",
}
_STRING_FIELDS = {
    "name",
    "target_os",
    "target_arch",
    "host_os",
    "gn_executable",
    "python_executable",
}


def normalize_option_key(key: str) -> str:
    normalized = str(key).strip().lstrip("-").replace("-", "_").lower()
    return _ALIASES.get(normalized, normalized)


def _coerce_stdio(value: Any) -> StdioMode:
    if isinstance(value, StdioMode):
        return value
    if isinstance(value, bool):
        return StdioMode.CAPTURE if value else StdioMode.INHERIT
    try:
        return StdioMode(str(value).strip().lower())
    except ValueError as exc:
        choices = ", ".join(mode.value for mode in StdioMode)
        raise InvalidConfigurationError(f"stdio must be one of {choices} (got: {value!r})") from exc


def _coerce_env(value: Any) -> Dict[str, str]:
    if not isinstance(value, Mapping):
        raise InvalidConfigurationError(f"env must be a mapping (got: {type(value).__name__})")
    return {str(key): str(item) for key, item in value.items()}


def apply_options(config: BuildConfig, options: Optional[OptionsMapping]) -> BuildConfig:
    """Return ``config`` with ``options`` merged in, last write wins.

    Known keys replace the matching field, ``env`` is merged key by key and
    anything unrecognised is kept under ``extras``.
    """

    if not options:
        return config

    changes: Dict[str, Any] = {}
    env = dict(config.env)
    extras = dict(config.extras)
    for raw_key, value in options.items():
        key = normalize_option_key(raw_key)
        if key in _STRING_FIELDS:
            changes[key] = None if value is None else str(value)
        elif key == "output_dir_override":
            # Kept verbatim; an empty value is rejected before any tool runs.
            changes[key] = None if value is None else str(value)
        elif key == "root_dir":
            if value is not None:
                changes[key] = Path(value)
        elif key == "env":
            env.update(_coerce_env(value))
        elif key in ("stdio", "capture_output"):
            changes["stdio"] = _coerce_stdio(value)
        else:
            LOG.debug("keeping unrecognised option %s=%r", raw_key, value)
            extras[key] = value

    return replace(config, env=env, extras=extras, **changes)


class ConfigContext:
    """Holds the build configuration shared by the commands of one run."""

    def __init__(self, default: Optional[BuildConfig] = None) -> None:
        self.default = default if default is not None else BuildConfig()
        self.current = self.default

    def activate(self, build_config: Union[BuildConfig, str, None] = None) -> BuildConfig:
        if build_config is None:
            self.current = self.default
        elif isinstance(build_config, BuildConfig):
            self.current = build_config
        else:
            self.current = replace(self.default, name=str(build_config))
        LOG.debug("build config: %s", self.current.name)
        return self.current

    def update(self, options: Optional[OptionsMapping] = None) -> BuildConfig:
        self.current = apply_options(self.current, options)
        return self.current

    @property
    def output_dir(self) -> str:
        return self.current.output_dir

    @property
    def default_options(self) -> ProcessOptions:
        return self.current.default_options
