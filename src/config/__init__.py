"""Configuration loading for dircycle."""

from config.loader import (
    CONFIG_FILENAME,
    DEFAULT_EXTENSIONS,
    ConfigError,
    DircycleConfig,
    load_config,
)

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_EXTENSIONS",
    "ConfigError",
    "DircycleConfig",
    "load_config",
]
