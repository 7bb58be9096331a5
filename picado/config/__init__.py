"""
Configuration management for the Picado client.

Handles loading and validation of configuration files.
"""

from picado.config.settings import (
    ApiConfig,
    LoggingConfig,
    NavigationConfig,
    PicadoConfig,
    SessionConfig,
    get_default_config,
    get_default_config_path,
    load_config,
    resolve_base_url,
)

__all__ = [
    "ApiConfig",
    "LoggingConfig",
    "NavigationConfig",
    "PicadoConfig",
    "SessionConfig",
    "get_default_config",
    "get_default_config_path",
    "load_config",
    "resolve_base_url",
]
