"""Decides whether a build outcome is worth a text message."""

from build_notifier.config.models import NotifyFlag
from build_notifier.domain.models import BuildRecord, BuildResult


def is_failure_or_recovery(build: BuildRecord) -> bool:
    """Determine if this build represents a failure or recovery.

    A failure includes both failed and unstable builds. A recovery is a
    successful build that follows a build that was not successful. Aborted
    builds, builds that were not built and builds without a result are
    neither.

    Args:
        build: The finished build

    Returns:
        True if this build represents a failure or a recovery
    """
    if build.result in (BuildResult.FAILURE, BuildResult.UNSTABLE):
        return True

    if build.result is BuildResult.SUCCESS:
        previous = build.previous_build
        return previous is not None and previous.result is not BuildResult.SUCCESS

    return False


def should_notify(only_on_failure_or_recovery: NotifyFlag, build: BuildRecord) -> bool:
    """Determine if this build result should be sent.

    An unset flag never notifies; an explicit DISABLED notifies on every
    build; ENABLED notifies on failures and recoveries only.

    Args:
        only_on_failure_or_recovery: The notifier's failure-or-recovery flag
        build: The finished build

    Returns:
        True if recipients should be texted
    """
    if only_on_failure_or_recovery is NotifyFlag.ENABLED:
        return is_failure_or_recovery(build)
    if only_on_failure_or_recovery is NotifyFlag.DISABLED:
        return True
    return False
