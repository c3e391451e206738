"""Data models for the notification service.

This module defines the value and result types used throughout the
notification flow.
"""

from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional


class UserEntry(NamedTuple):
    """A build-system user who can be texted."""

    display_name: str
    phone: str


@dataclass
class DispatchResult:
    """Outcome of sending one message to one recipient.

    Attributes:
        recipient: Phone number the message was addressed to
        kind: "direct" for configured recipients, "culprit" for change authors
        status: "sent", "failed" or "dry_run"
        message: Final message text, including any appended link
        error: Error description when status is "failed"
    """

    recipient: str
    kind: str  # "direct", "culprit"
    status: str  # "sent", "failed", "dry_run"
    message: Optional[str] = None
    error: Optional[str] = None

    def is_success(self) -> bool:
        return self.status in ("sent", "dry_run")


@dataclass
class NotificationResult:
    """Result of running the notifier for one build.

    Attributes:
        project: Project display name
        build: Build display name
        status: "skipped" (policy said no), "completed" or "failed"
        reason: Why notification was skipped, if it was
        culprit_ids: Author ids considered for this build
        dispatches: One entry per attempted message
        error: Error that aborted composition, if any
    """

    project: str
    build: str
    status: str  # "skipped", "completed", "failed"
    reason: Optional[str] = None
    culprit_ids: List[str] = field(default_factory=list)
    dispatches: List[DispatchResult] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def sent_count(self) -> int:
        return sum(1 for d in self.dispatches if d.is_success())

    @property
    def failed_count(self) -> int:
        return sum(1 for d in self.dispatches if not d.is_success())

    def has_failures(self) -> bool:
        """Check whether anything went wrong while notifying.

        Returns:
            True if composition failed or any dispatch failed
        """
        return self.status == "failed" or self.failed_count > 0
