"""Configuration management module for the Build SMS Notifier."""

from .environment import GatewaySettings, load_gateway_settings
from .exceptions import ConfigurationError
from .loader import load_config, validate_config_file
from .models import (
    AdvancedConfig,
    AppConfig,
    EndpointConfig,
    LogFormat,
    LogLevel,
    LoggingConfig,
    NotifierConfig,
    NotifyFlag,
    parse_flag,
)
from .validators import validate_phone_number_list

__all__ = [
    # Main loader functions
    "load_config",
    "validate_config_file",
    "load_gateway_settings",
    # Configuration models
    "AppConfig",
    "NotifierConfig",
    "EndpointConfig",
    "LoggingConfig",
    "AdvancedConfig",
    "GatewaySettings",
    # Enums and helpers
    "NotifyFlag",
    "LogLevel",
    "LogFormat",
    "parse_flag",
    "validate_phone_number_list",
    # Exceptions
    "ConfigurationError",
]
