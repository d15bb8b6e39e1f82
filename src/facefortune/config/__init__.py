"""Configuration module."""

from facefortune.config.loader import get_default_config, load_config
from facefortune.config.models import (
    ConfigError,
    FortuneConfig,
    HistoryConfig,
    ImageConfig,
    ModelConfig,
    ProviderConfig,
    ServerConfig,
    ShellConfig,
)
from facefortune.config.paths import (
    get_config_path,
    get_facefortune_home,
    get_logs_path,
    get_storage_path,
)

__all__ = [
    "ConfigError",
    "FortuneConfig",
    "HistoryConfig",
    "ImageConfig",
    "ModelConfig",
    "ProviderConfig",
    "ServerConfig",
    "ShellConfig",
    "get_config_path",
    "get_default_config",
    "get_facefortune_home",
    "get_logs_path",
    "get_storage_path",
    "load_config",
]
