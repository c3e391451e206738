"""Domain models for the Build SMS Notifier."""

from .events import BuildEventError, load_build_event
from .models import Artifact, BuildEvent, BuildRecord, BuildResult, PreviousBuild

__all__ = [
    "Artifact",
    "BuildEvent",
    "BuildRecord",
    "BuildResult",
    "PreviousBuild",
    "BuildEventError",
    "load_build_event",
]
