"""Configuration loading from TOML files and environment variables."""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import SecretStr

from facefortune.config.models import PROVIDER_ENV_VARS, FortuneConfig
from facefortune.config.paths import get_config_path

logger = logging.getLogger(__name__)


def _get_default_config_paths() -> list[Path]:
    """Get ordered list of default config file locations."""
    return [
        Path("config.toml"),  # Current directory
        get_config_path(),  # ~/.facefortune/config.toml (or FACEFORTUNE_HOME)
        Path("/etc/facefortune/config.toml"),  # System-wide
    ]


def _resolve_env_secrets(config: dict[str, Any]) -> dict[str, Any]:
    """Resolve API keys from environment variables where not set in config."""
    for provider, env_var in PROVIDER_ENV_VARS.items():
        section = config.get(provider)
        if section is None or section.get("api_key"):
            continue
        value = os.environ.get(env_var)
        if value:
            section["api_key"] = SecretStr(value)
    return config


def load_config(path: Path | None = None) -> FortuneConfig:
    """Load configuration from TOML file.

    Args:
        path: Explicit path to config file. If None, searches default locations
            and falls back to defaults when none exists.

    Returns:
        Validated FortuneConfig instance.

    Raises:
        FileNotFoundError: If an explicit config file does not exist.
        ValueError: If config file is invalid.
    """
    config_path: Path | None = None

    if path is not None:
        config_path = Path(path).expanduser()
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        for default_path in _get_default_config_paths():
            expanded = default_path.expanduser()
            if expanded.exists():
                config_path = expanded
                break

    if config_path is None:
        logger.debug("No config file found, using defaults")
        return get_default_config()

    with config_path.open("rb") as f:
        raw_config = tomllib.load(f)

    raw_config = _resolve_env_secrets(raw_config)

    return FortuneConfig.model_validate(raw_config)


def get_default_config() -> FortuneConfig:
    """Get a default configuration (keys come from the environment)."""
    return FortuneConfig()
