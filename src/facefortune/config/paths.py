"""Centralized path management for FaceFortune.

All local state (config, logs, history) is stored under a single base
directory. The base directory can be overridden with the FACEFORTUNE_HOME
environment variable.

Default locations:
- Linux/macOS: ~/.facefortune
- Windows: %USERPROFILE%\\.facefortune
"""

import os
from pathlib import Path

ENV_VAR = "FACEFORTUNE_HOME"


def get_facefortune_home() -> Path:
    """Get the base directory for all FaceFortune data.

    Resolution order:
    1. FACEFORTUNE_HOME environment variable (if set)
    2. Platform default (~/.facefortune)
    """
    if env_home := os.environ.get(ENV_VAR):
        return Path(env_home).expanduser().resolve()

    return Path.home() / ".facefortune"


def get_config_path() -> Path:
    """Get the default config file path."""
    return get_facefortune_home() / "config.toml"


def get_logs_path() -> Path:
    """Get the default logs directory path."""
    return get_facefortune_home() / "logs"


def get_storage_path() -> Path:
    """Get the client-local key/value storage file path."""
    return get_facefortune_home() / "local-storage.json"
