"""
Configuration loader — reads hostspec.yml into a RunConfig.

Reads YAML, validates against the Pydantic schema, and returns a typed
RunConfig.  Environment variables are overlaid on top by
``apply_env_overrides``; CLI flags are applied last by main.py.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from hostspec.core.models.config import RunConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "hostspec.yml"

# Environment variables read by apply_env_overrides()
ENV_PACKAGE = "HOSTSPEC_PACKAGE"
ENV_LOG_LEVEL = "HOSTSPEC_LOG_LEVEL"
ENV_LOG_FILE = "HOSTSPEC_LOG_FILE"
ENV_LOG_FILE_LEVEL = "HOSTSPEC_LOG_FILE_LEVEL"


class ConfigError(Exception):
    """Raised when run configuration is invalid."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for hostspec.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to hostspec.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None) -> RunConfig:
    """Load and validate run configuration.

    Args:
        path: Explicit path to hostspec.yml. If None, searches upward and
            falls back to defaults when nothing is found.

    Returns:
        Validated RunConfig.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            logger.debug("No %s found, using defaults", CONFIG_FILE)
            return RunConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading run config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    # An empty file is a valid, all-defaults config
    if data is None:
        return RunConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        return RunConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid run configuration: {e}") from e


def apply_env_overrides(config: RunConfig, environ: dict[str, str] | None = None) -> RunConfig:
    """Return a copy of ``config`` with HOSTSPEC_* variables applied.

    Empty variables are ignored.  An invalid HOSTSPEC_PACKAGE raises
    ConfigError rather than silently falling back to detection.
    """
    env = os.environ if environ is None else environ
    updates: dict = {}

    package = env.get(ENV_PACKAGE, "").strip().lower()
    if package:
        updates["package"] = package
    if env.get(ENV_LOG_LEVEL):
        updates["log_level"] = env[ENV_LOG_LEVEL]
    if env.get(ENV_LOG_FILE):
        updates["log_file"] = env[ENV_LOG_FILE]
    if env.get(ENV_LOG_FILE_LEVEL):
        updates["log_file_level"] = env[ENV_LOG_FILE_LEVEL]

    if not updates:
        return config

    try:
        return RunConfig.model_validate({**config.model_dump(), **updates})
    except Exception as e:
        raise ConfigError(f"Invalid environment override: {e}") from e
