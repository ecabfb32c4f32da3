"""Shared constants for the build commands."""
from __future__ import annotations

from pathlib import Path

DEFAULT_BUILD_CONFIG = "Component"
BUILD_CONFIGS = ("Component", "Static", "Debug", "Release")
OUTPUT_ROOT = "out"
DEFAULT_TARGET_ARCH = "x64"

GN_EXECUTABLE = "gn"
PYTHON_EXECUTABLE = "python"

CHECK_PROJECT = "osiris"
GN_CHECK_LABEL_PATTERN = f"//{CHECK_PROJECT}/*"
CHECKDEPS_SCRIPT = "buildtools/checkdeps/checkdeps.py"
CHECKDEPS_EXTRA_REPOS = "brave"

CONFIG_FILE_NAME = "osiris_build.json"
CONFIG_SCHEMA_PATH = Path(__file__).resolve().parents[2] / "data" / "config_schema.json"
