"""Command line interface for the gn check build step."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Dict

from ..config.context import ConfigContext
from ..config.loader import load_build_config
from ..gn_check import run_gn_check
from ..utils.constants import BUILD_CONFIGS, CONFIG_SCHEMA_PATH
from ..utils.errors import ConfigurationError, ToolInvocationError
from ..utils.logging import configure_logger, get_logger

LOG = get_logger()

EXIT_CONFIGURATION_ERROR = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run gn check and checkdeps.py for the osiris targets",
    )
    parser.add_argument(
        "build_config",
        nargs="?",
        choices=BUILD_CONFIGS,
        help="Build configuration (default: Component or the config file value)",
    )
    parser.add_argument(
        "--root",
        "-r",
        type=Path,
        default=None,
        help="Source root used as working directory for the tools (default: current directory)",
    )
    parser.add_argument("--config", "-cf", type=Path, help="Path to an osiris_build.json config file")
    parser.add_argument(
        "--schema",
        "-sc",
        type=Path,
        default=CONFIG_SCHEMA_PATH,
        help="Path to the config JSON schema (default: bundled schema)",
    )
    parser.add_argument("--target-os", "-to", dest="target_os", help="Target OS, e.g. android")
    parser.add_argument("--target-arch", "-ta", dest="target_arch", help="Target CPU architecture, e.g. arm64")
    parser.add_argument(
        "--output-dir",
        "-C",
        dest="output_dir",
        help="Use this output directory verbatim instead of out/<config>",
    )
    parser.add_argument("--gn", dest="gn", help="gn executable (default: gn)")
    parser.add_argument("--python", dest="python", help="Python interpreter for checkdeps.py (default: python)")
    parser.add_argument(
        "--env",
        "-e",
        metavar="KEY=VALUE",
        action="append",
        help="Environment override for the tools; may be repeated",
    )
    parser.add_argument(
        "--capture-output",
        "-co",
        action="store_true",
        help="Capture tool output into the log instead of inheriting the terminal",
    )
    parser.add_argument("--log-file", "-lf", type=Path, help="Also write the log to this file")
    parser.add_argument("--no-console-log", "-nl", action="store_true", help="Disable console logging")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return _build_parser().parse_args(argv)


def _resolve_env(args: argparse.Namespace) -> Dict[str, str]:
    env: Dict[str, str] = {}
    for raw in args.env or []:
        key, sep, value = raw.partition("=")
        key = key.strip()
        if not sep or not key:
            raise SystemExit(f"Invalid --env '{raw}'. Expected KEY=VALUE.")
        env[key] = value
    return env


def _build_options(args: argparse.Namespace) -> Dict[str, Any]:
    options: Dict[str, Any] = {}
    for key in ("target_os", "target_arch", "output_dir", "gn", "python"):
        value = getattr(args, key)
        if value is not None:
            options[key] = value
    env = _resolve_env(args)
    if env:
        options["env"] = env
    if args.capture_output:
        options["stdio"] = "capture"
    return options


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    options = _build_options(args)
    configure_logger(
        args.log_file,
        console=not args.no_console_log,
        level=logging.DEBUG if args.verbose else logging.INFO,
    )

    try:
        default = load_build_config(args.root, args.config, schema_path=args.schema)
        run_gn_check(ConfigContext(default), args.build_config, options)
    except ConfigurationError as exc:
        LOG.error("configuration error: %s", exc)
        return EXIT_CONFIGURATION_ERROR
    except ToolInvocationError as exc:
        LOG.error("%s", exc)
        return exc.returncode or 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
