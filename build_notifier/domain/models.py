"""Core domain models for build completion events.

This module defines the read-only view of a finished build that the
notifier consumes from the host build system:
- BuildResult: outcome of a build
- BuildRecord: protocol the notifier depends on (host-agnostic)
- BuildEvent: concrete pydantic implementation loaded from event files
- Artifact, PreviousBuild: supporting value objects
"""

from enum import Enum
from typing import List, Optional, Protocol, Sequence, runtime_checkable

from pydantic import BaseModel, Field, field_validator


class BuildResult(str, Enum):
    """Outcome of a build as reported by the build system."""

    SUCCESS = "SUCCESS"
    UNSTABLE = "UNSTABLE"
    FAILURE = "FAILURE"
    NOT_BUILT = "NOT_BUILT"
    ABORTED = "ABORTED"


class Artifact(BaseModel):
    """A file archived by the build."""

    file_name: str = Field(..., description="Artifact file name")
    href: str = Field(..., description="Link to the artifact, relative to the build")

    model_config = {"frozen": True}


class PreviousBuild(BaseModel):
    """The build that ran immediately before the current one.

    A previous build may exist without a result (still running or never
    finished), which is different from there being no previous build.
    """

    display_name: Optional[str] = None
    result: Optional[BuildResult] = None

    model_config = {"frozen": True}


@runtime_checkable
class BuildRecord(Protocol):
    """Read-only contract the notifier needs from a finished build.

    Any object exposing these attributes can be notified about; the
    notification core never depends on a concrete build-system type.
    """

    project_display_name: str
    display_name: str
    result: Optional[BuildResult]
    previous_build: Optional[PreviousBuild]
    artifacts: Sequence[Artifact]
    culprits: Sequence[str]
    change_set_authors: Sequence[str]
    url: str


class BuildEvent(BaseModel):
    """A build completion event as delivered to the notifier.

    Attributes:
        project_display_name: Display name of the project/job
        display_name: Display name of the build (e.g. "#42")
        result: Build result, None when the build has no result yet
        previous_build: The preceding build, None when this is the first build
        artifacts: Archived artifacts in build order
        culprits: Author ids of every build since the last successful one
        change_set_authors: Author id of each change-set entry of this build
        url: Build URL relative to the build server root (e.g. "job/widget/42/")
    """

    project_display_name: str = Field(..., min_length=1)
    display_name: str = Field(..., min_length=1)
    result: Optional[BuildResult] = None
    previous_build: Optional[PreviousBuild] = None
    artifacts: List[Artifact] = Field(default_factory=list)
    culprits: List[str] = Field(default_factory=list)
    change_set_authors: List[str] = Field(default_factory=list)
    url: str = ""

    @field_validator("result", mode="before")
    @classmethod
    def normalize_result(cls, v):
        """Accept result names in any case; blank or NONE means no result."""
        if v is None or isinstance(v, BuildResult):
            return v
        if isinstance(v, str):
            name = v.strip().upper()
            if not name or name == "NONE":
                return None
            return name
        return v

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "project_display_name": "Widget",
                "display_name": "#42",
                "result": "FAILURE",
                "previous_build": {"display_name": "#41", "result": "SUCCESS"},
                "artifacts": [{"file_name": "widget.jar", "href": "artifact/target/widget.jar"}],
                "culprits": ["jdoe"],
                "change_set_authors": ["jdoe"],
                "url": "job/widget/42/",
            }
        },
    }
