"""Build result notifications over SMS.

This module provides the notification flow:
- NotificationService: runs the notifier for one finished build
- should_notify / is_failure_or_recovery: notification policy
- parse_user_list: user id to phone number directory
- resolve_culprits / join_culprit_names: culprit resolution
- substitute: literal placeholder substitution for message templates
- build_substitution_map: placeholder values for a build
"""

from .culprits import CulpritResolution, join_culprit_names, resolve_culprits
from .directory import parse_user_list
from .models import DispatchResult, NotificationResult, UserEntry
from .payloads import build_substitution_map, format_artifacts
from .policy import is_failure_or_recovery, should_notify
from .service import NotificationService
from .templates import substitute

__all__ = [
    # Main service
    "NotificationService",
    # Models and results
    "NotificationResult",
    "DispatchResult",
    "UserEntry",
    "CulpritResolution",
    # Components
    "should_notify",
    "is_failure_or_recovery",
    "parse_user_list",
    "resolve_culprits",
    "join_culprit_names",
    "substitute",
    # Utilities
    "build_substitution_map",
    "format_artifacts",
]
