from .loader import AppConfig, ConfigError, DatabaseConfig, default_config, load_config

__all__ = [
    "AppConfig",
    "ConfigError",
    "DatabaseConfig",
    "default_config",
    "load_config",
]
