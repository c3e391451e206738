"""Configuration loader for the Build SMS Notifier."""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from .environment import GatewaySettings, load_gateway_settings
from .exceptions import ConfigurationError
from .models import AppConfig
from .validators import check_for_warnings, emit_warnings


def load_config(config_path: Optional[Path] = None) -> tuple[AppConfig, GatewaySettings]:
    """
    Load and validate configuration from a YAML file and environment variables.

    Config file lookup:
    1. Use provided config_path if given
    2. Try notifier.yaml in current directory
    3. Try ./config/notifier.yaml
    4. Fail with helpful error message

    Args:
        config_path: Optional path to configuration file

    Returns:
        Tuple of (AppConfig, GatewaySettings)

    Raises:
        ConfigurationError: If configuration is invalid or file not found
    """
    config_file = _find_config_file(config_path)
    config_dict = _read_yaml(config_file)

    warnings = check_for_warnings(config_dict)
    if warnings:
        emit_warnings(warnings)

    app_config = _validate(config_dict)

    try:
        gateway_settings = load_gateway_settings()
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(
            f"Failed to load environment configuration: {e}",
            suggestions=[
                "Copy .env.example to .env and fill in your mysms credentials",
            ],
        ) from e

    return app_config, gateway_settings


def _read_yaml(config_file: Path) -> dict:
    try:
        with open(config_file, "r") as f:
            config_dict = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(
            f"Configuration file not found: {config_file}",
            suggestions=[
                "Copy notifier.example.yaml to notifier.yaml",
                f"Ensure {config_file} exists and is readable",
            ],
        )
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML configuration: {e}",
            suggestions=[
                "Check YAML syntax in your config file",
                "Quote templates that contain ':' or '%' characters",
            ],
        )
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file: {e}",
            suggestions=[
                f"Ensure {config_file} is readable",
                "Check file permissions",
            ],
        )

    if not config_dict:
        raise ConfigurationError(
            "Configuration file is empty",
            suggestions=["Copy notifier.example.yaml to notifier.yaml"],
        )

    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Configuration file must contain a mapping, got {type(config_dict).__name__}",
        )

    return config_dict


def _validate(config_dict: dict) -> AppConfig:
    try:
        return AppConfig.model_validate(config_dict)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"])
            error_type = error["type"]

            if error_type == "missing":
                errors.append(f"Missing required field: {field_path}")
            elif error_type in ["string_type", "int_type", "bool_type"]:
                expected_type = error_type.replace("_type", "")
                errors.append(
                    f"Invalid type for '{field_path}': expected {expected_type}, got {error.get('input')}"
                )
            else:
                errors.append(f"{field_path}: {error['msg']}")

        raise ConfigurationError(
            "Configuration validation failed",
            errors=errors,
            suggestions=[
                "Review notifier.example.yaml for correct format",
                "Check that all required fields are present",
            ],
        ) from e


def _find_config_file(config_path: Optional[Path] = None) -> Path:
    """
    Find configuration file using fallback logic.

    Args:
        config_path: Optional explicit path to config file

    Returns:
        Path to configuration file

    Raises:
        ConfigurationError: If no config file is found
    """
    if config_path:
        if not config_path.exists():
            raise ConfigurationError(
                f"Specified configuration file not found: {config_path}",
                suggestions=[
                    f"Ensure {config_path} exists",
                    "Check the path and try again",
                ],
            )
        return config_path

    candidates = [
        Path("notifier.yaml"),
        Path("config") / "notifier.yaml",
    ]

    for candidate in candidates:
        if candidate.exists():
            return candidate

    raise ConfigurationError(
        "Configuration file not found",
        errors=[
            "Tried: notifier.yaml",
            "Tried: config/notifier.yaml",
        ],
        suggestions=[
            "Copy notifier.example.yaml to notifier.yaml",
            "Use --config flag to specify a custom location",
        ],
    )


def validate_config_file(config_path: Path) -> bool:
    """
    Validate a configuration file without loading environment variables.

    Args:
        config_path: Path to configuration file

    Returns:
        True if valid, False otherwise (errors printed to stdout)
    """
    try:
        config_dict = _read_yaml(config_path)
        _validate(config_dict)
        for message in check_for_warnings(config_dict):
            print(f"! {message}")
        print(f"✓ Configuration file {config_path} is valid")
        return True

    except ConfigurationError as e:
        print(f"✗ Configuration validation failed:\n{e}")
        return False
