"""Load and validate ``osiris_build.json`` configuration files."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Optional

from jsonschema import Draft7Validator

from ..domain.models import BuildConfig
from ..utils.constants import CONFIG_FILE_NAME, CONFIG_SCHEMA_PATH
from ..utils.errors import (
    ConfigFileNotFound,
    InvalidConfigurationError,
    SchemaFileNotFound,
    SchemaValidationError,
)
from ..utils.logging import get_logger
from .context import apply_options

LOG = get_logger()


def load_config_file(config_path: Path) -> Dict:
    if not config_path.exists():
        raise ConfigFileNotFound(f"config not found: {config_path}")
    with config_path.open("r", encoding="utf-8") as f:
        try:
            config_json = json.load(f)
        except json.JSONDecodeError as exc:
            raise InvalidConfigurationError(f"{config_path}: invalid JSON ({exc})") from exc
    LOG.info("loaded config: %s", config_path)
    return config_json


def load_schema_file(schema_path: Path) -> Dict:
    if not schema_path.exists():
        raise SchemaFileNotFound(f"Schema not found: {schema_path}")
    with schema_path.open("r", encoding="utf-8") as f:
        schema_json = json.load(f)
    LOG.debug("loaded schema: %s", schema_path)
    return schema_json


def _format_json_path(path_iterable) -> str:
    parts: List[str] = ["root"]
    for p in path_iterable:
        if isinstance(p, int):
            parts[-1] = parts[-1] + f"[{p}]"
        else:
            parts.append(str(p))
    return ".".join(parts)


def validate_config_schema(config_json: Dict, schema_json: Dict) -> None:
    validator = Draft7Validator(schema_json)
    errors = sorted(validator.iter_errors(config_json), key=lambda e: (list(e.path), list(e.schema_path)))
    if not errors:
        LOG.debug("config schema validation: PASSED")
        return
    LOG.error("[SCH] config schema validation: FAILED (count=%d)", len(errors))
    for i, err in enumerate(errors, start=1):
        LOG.error(
            "[SCH] #%d path=%s | msg=%s | validator=%s",
            i,
            _format_json_path(err.path),
            err.message,
            err.validator,
        )
    raise SchemaValidationError(f"config schema validation failed with {len(errors)} error(s)")


def load_build_config(
    root_dir: Optional[Path] = None,
    config_path: Optional[Path] = None,
    schema_path: Path = CONFIG_SCHEMA_PATH,
) -> BuildConfig:
    """Build the default configuration for ``root_dir``.

    Without an explicit ``config_path`` the file is looked up as
    ``<root_dir>/osiris_build.json`` and may be absent, in which case the
    built-in defaults apply.
    """

    root = root_dir if root_dir is not None else Path.cwd()
    default = BuildConfig(root_dir=root)

    if config_path is None:
        config_path = root / CONFIG_FILE_NAME
        if not config_path.exists():
            LOG.debug("no %s under %s, using defaults", CONFIG_FILE_NAME, root)
            return default

    config_json = load_config_file(config_path)
    if not isinstance(config_json, dict):
        raise InvalidConfigurationError(f"{config_path}: top-level value must be an object")
    validate_config_schema(config_json, load_schema_file(schema_path))
    return apply_options(default, config_json)
