"""Additional validation utilities for configuration."""

import re
import warnings
from typing import Any, Dict, List

from .models import NotifyFlag, parse_flag

PHONE_NUMBER_PATTERN = re.compile(r"^[0-9()/+ \-]*$")

FLAG_FIELDS = ("only_on_failure_or_recovery", "include_url", "send_to_culprits")


def validate_phone_number_list(to_list: str) -> bool:
    """
    Check a comma separated recipient list.

    Args:
        to_list: Comma separated phone numbers

    Returns:
        True if at least one number is given and every entry uses only
        digits, parentheses, slash, plus, space and hyphen
    """
    if not to_list or not to_list.strip():
        return False

    for number in to_list.split(","):
        if not PHONE_NUMBER_PATTERN.match(number):
            return False
    return True


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for likely mistakes and return warnings.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    notifier = config_dict.get("notifier", {})
    if not isinstance(notifier, dict):
        return warning_messages

    for field in FLAG_FIELDS:
        raw = notifier.get(field)
        if raw is not None and parse_flag(raw) is NotifyFlag.UNSET:
            warning_messages.append(
                f"Unrecognized value for '{field}' ({raw!r}) is treated as unset"
            )

    if parse_flag(notifier.get("only_on_failure_or_recovery")) is NotifyFlag.UNSET:
        warning_messages.append(
            "'only_on_failure_or_recovery' is not set; no notifications will be sent"
        )

    to_list = notifier.get("to_list")
    if isinstance(to_list, str) and to_list.strip():
        if not validate_phone_number_list(to_list):
            warning_messages.append(
                f"Recipient list '{to_list}' contains characters other than "
                "digits, parentheses, '/', '+', ' ' and '-'"
            )

    if parse_flag(notifier.get("send_to_culprits")).is_enabled:
        user_list = notifier.get("user_list")
        if not isinstance(user_list, str) or not user_list.strip():
            warning_messages.append(
                "'send_to_culprits' is enabled but 'user_list' is empty; culprits cannot be texted"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
