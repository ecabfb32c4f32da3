"""Run ``gn check`` and ``checkdeps.py`` against the configured output directory."""
from __future__ import annotations

from typing import Optional, Union

from .config.context import ConfigContext, OptionsMapping
from .domain.models import BuildConfig
from .tools.checkdeps import checkdeps_command
from .tools.gn import gn_check_command
from .utils.errors import ConfigurationError
from .utils.logging import get_logger
from .utils.process import run_tool

LOG = get_logger()


def ensure_output_dir(config: BuildConfig) -> None:
    if not config.output_dir or not config.output_dir.strip():
        raise ConfigurationError(f"output directory is not set for build config {config.name!r}")


def run_gn_check(
    context: ConfigContext,
    build_config: Union[BuildConfig, str, None] = None,
    options: Optional[OptionsMapping] = None,
) -> None:
    """Activate ``build_config`` on ``context``, merge ``options`` and run both checks.

    The checks run one after the other and the first failure aborts the step
    with :class:`ToolInvocationError`.
    """

    context.activate(build_config)
    config = context.update(options)
    ensure_output_dir(config)
    LOG.info("gn_check: config=%s outdir=%s", config.name, config.output_dir)

    for command in (gn_check_command(config), checkdeps_command(config)):
        run_tool(command, config.default_options)

    LOG.info("gn_check: PASSED")
