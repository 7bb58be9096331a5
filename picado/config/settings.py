"""
Configuration management for the Picado client.

Loads YAML configuration from file with sensible defaults and validation.
Supports environment variable substitution using ${ENV_VAR} syntax.
The API base address can also come from PICADO_API_URL (or the legacy
PICADO_API_BASE_URL) and is resolved once when configuration is loaded.
"""

import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

from picado.exceptions import InvalidConfigurationError
from picado.logging_config import get_logger

logger = get_logger(__name__)

API_URL_ENV = "PICADO_API_URL"
LEGACY_API_URL_ENV = "PICADO_API_BASE_URL"

VALID_SESSION_STORES = ["file", "memory"]
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
VALID_LOG_FORMATS = ["console", "json"]


def _expand_env_vars(value: Any) -> Any:
    """
    Recursively expand environment variables in configuration values.

    Supports ${ENV_VAR} syntax with optional default values: ${ENV_VAR:default}

    Args:
        value: Configuration value (string, dict, list, or other)

    Returns:
        Value with environment variables expanded

    Examples:
        "${PICADO_HOST}" -> value of PICADO_HOST env var
        "${PICADO_HOST:localhost}" -> value of PICADO_HOST or "localhost" if not set
    """
    if isinstance(value, str):
        # Pattern matches ${VAR} or ${VAR:default}
        pattern = r'\$\{([^}:]+)(?::([^}]*))?\}'

        def replace_env_var(match):
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)

        return re.sub(pattern, replace_env_var, value)
    elif isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    else:
        return value


def resolve_base_url(configured: str = "") -> str:
    """
    Resolve the API base address.

    PICADO_API_URL wins, then PICADO_API_BASE_URL, then the configured
    value. Surrounding whitespace and trailing slashes are removed.
    """
    raw = os.environ.get(API_URL_ENV)
    if raw is None:
        raw = os.environ.get(LEGACY_API_URL_ENV)
    if raw is None:
        raw = configured or ""
    return raw.strip().rstrip("/")


@dataclass
class ApiConfig:
    """Backend API configuration."""

    base_url: str = ""
    timeout: float = 30.0
    debug_url_normalization: bool = False


@dataclass
class SessionConfig:
    """Session persistence configuration."""

    store: str = "file"  # "file" or "memory"
    path: str = "~/.picado/session.json"


@dataclass
class NavigationConfig:
    """Public destinations used by the session guard."""

    entry_point: str = "/login"
    public_paths: List[str] = field(
        default_factory=lambda: ["/login", "/register", "/forgot"]
    )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    file: str = ""
    format: str = "console"  # "console" or "json"


@dataclass
class PicadoConfig:
    """Main Picado client configuration."""

    api: ApiConfig = field(default_factory=ApiConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    navigation: NavigationConfig = field(default_factory=NavigationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_default_config_path() -> str:
    """Get the default configuration file path."""
    return os.path.expanduser("~/.picado/config.yaml")


def get_default_config() -> PicadoConfig:
    """
    Get default configuration with sensible defaults.

    Returns:
        PicadoConfig: Default configuration object
    """
    home_dir = os.path.expanduser("~/.picado")

    return PicadoConfig(
        api=ApiConfig(base_url=resolve_base_url()),
        session=SessionConfig(
            store="file",
            path=os.path.join(home_dir, "session.json"),
        ),
        navigation=NavigationConfig(),
        logging=LoggingConfig(),
    )


def load_config(config_path: Optional[str] = None) -> PicadoConfig:
    """
    Load configuration from YAML file with validation.

    If config file is not found, returns default configuration.
    If config file is malformed or invalid, raises InvalidConfigurationError.

    Args:
        config_path: Path to configuration file. If None, uses default path.

    Returns:
        PicadoConfig: Loaded and validated configuration

    Raises:
        InvalidConfigurationError: If configuration is invalid or malformed
    """
    if config_path is None:
        config_path = get_default_config_path()

    config_path = os.path.expanduser(config_path)

    if not os.path.exists(config_path):
        logger.info(f"Configuration file not found at {config_path}, using defaults")
        return get_default_config()

    try:
        with open(config_path, 'r') as f:
            config_data = yaml.safe_load(f)
        logger.debug(f"Loaded configuration from {config_path}")
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML configuration file '{config_path}': {e}", exc_info=True)
        raise InvalidConfigurationError(
            f"Failed to parse YAML configuration file '{config_path}': {e}"
        )
    except OSError as e:
        logger.error(f"Failed to read configuration file '{config_path}': {e}", exc_info=True)
        raise InvalidConfigurationError(
            f"Failed to read configuration file '{config_path}': {e}"
        )

    if config_data is None:
        logger.info(f"Configuration file {config_path} is empty, using defaults")
        return get_default_config()

    if not isinstance(config_data, dict):
        raise InvalidConfigurationError(
            f"Configuration file '{config_path}' must contain a mapping at the top level"
        )

    config_data = _expand_env_vars(config_data)
    logger.debug("Expanded environment variables in configuration")

    try:
        config = _build_config_from_dict(config_data)
        _validate_config(config)
        logger.info(f"Successfully loaded and validated configuration from {config_path}")
        return config
    except InvalidConfigurationError:
        raise
    except Exception as e:
        logger.error(f"Invalid configuration in '{config_path}': {e}", exc_info=True)
        raise InvalidConfigurationError(
            f"Invalid configuration in '{config_path}': {e}"
        )


def _build_config_from_dict(config_data: Dict[str, Any]) -> PicadoConfig:
    """
    Build PicadoConfig from dictionary loaded from YAML.

    Merges user configuration with defaults.

    Args:
        config_data: Dictionary loaded from YAML file

    Returns:
        PicadoConfig: Configuration object
    """
    default_config = get_default_config()

    api_data = config_data.get('api') or {}
    api = ApiConfig(
        base_url=resolve_base_url(api_data.get('base_url', "")),
        timeout=float(api_data.get('timeout', default_config.api.timeout)),
        debug_url_normalization=bool(
            api_data.get('debug_url_normalization', default_config.api.debug_url_normalization)
        ),
    )

    session_data = config_data.get('session') or {}
    session = SessionConfig(
        store=session_data.get('store', default_config.session.store),
        path=os.path.expanduser(
            session_data.get('path', default_config.session.path)
        ),
    )

    navigation_data = config_data.get('navigation') or {}
    navigation = NavigationConfig(
        entry_point=navigation_data.get('entry_point', default_config.navigation.entry_point),
        public_paths=list(
            navigation_data.get('public_paths', default_config.navigation.public_paths)
        ),
    )

    logging_data = config_data.get('logging') or {}
    logging = LoggingConfig(
        level=logging_data.get('level', default_config.logging.level),
        file=logging_data.get('file', default_config.logging.file),
        format=logging_data.get('format', default_config.logging.format),
    )

    return PicadoConfig(
        api=api,
        session=session,
        navigation=navigation,
        logging=logging,
    )


def _validate_config(config: PicadoConfig) -> None:
    """
    Validate configuration values.

    Args:
        config: Configuration to validate

    Raises:
        InvalidConfigurationError: If configuration is invalid
    """
    if config.api.timeout <= 0:
        raise InvalidConfigurationError(
            f"api timeout must be positive, got {config.api.timeout}"
        )

    if config.session.store not in VALID_SESSION_STORES:
        raise InvalidConfigurationError(
            f"session store must be one of {VALID_SESSION_STORES}, "
            f"got '{config.session.store}'"
        )
    if config.session.store == "file" and not config.session.path:
        logger.error("Configuration validation failed: session path cannot be empty")
        raise InvalidConfigurationError("session path cannot be empty for the file store")

    if not config.navigation.public_paths:
        raise InvalidConfigurationError("navigation public_paths cannot be empty")
    if config.navigation.entry_point not in config.navigation.public_paths:
        # Redirecting to a non-public destination would loop on the next 401
        raise InvalidConfigurationError(
            f"navigation entry_point '{config.navigation.entry_point}' "
            f"must be one of public_paths {config.navigation.public_paths}"
        )

    if config.logging.level.upper() not in VALID_LOG_LEVELS:
        raise InvalidConfigurationError(
            f"logging level must be one of {VALID_LOG_LEVELS}, "
            f"got '{config.logging.level}'"
        )
    if config.logging.format not in VALID_LOG_FORMATS:
        raise InvalidConfigurationError(
            f"logging format must be one of {VALID_LOG_FORMATS}, "
            f"got '{config.logging.format}'"
        )
