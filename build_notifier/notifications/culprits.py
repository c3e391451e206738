"""Culprit resolution: who changed the code that broke the build."""

from dataclasses import dataclass, field
from typing import List, Mapping, Sequence

from build_notifier.domain.models import BuildRecord
from build_notifier.logging import get_logger

from .models import UserEntry

logger = get_logger(__name__, component="culprits")


@dataclass
class CulpritResolution:
    """Culprits of one build.

    Attributes:
        author_ids: Author ids taken from the build, in build order
        culprits: Directory entries for the authors that have one, same order
        display: Display names joined for the %CULPRITS% placeholder
    """

    author_ids: List[str] = field(default_factory=list)
    culprits: List[UserEntry] = field(default_factory=list)
    display: str = ""


def collect_author_ids(build: BuildRecord) -> List[str]:
    """Get the author ids implicated in a build.

    Uses the build's culprits (authors of every build since the last
    success); when there are none, falls back to the authors of this
    build's change set.
    """
    if build.culprits:
        return list(build.culprits)
    return list(build.change_set_authors or [])


def join_culprit_names(names: Sequence[str]) -> str:
    """Join names for display.

    One name is returned as-is, the last two are joined with " and ", and
    any earlier names are separated by a single space:
    ["William", "James", "Luke"] -> "William James and Luke".
    """
    if not names:
        return ""
    if len(names) == 1:
        return names[0]
    return " ".join(names[:-1]) + " and " + names[-1]


def resolve_culprits(build: BuildRecord, directory: Mapping[str, UserEntry]) -> CulpritResolution:
    """Resolve a build's culprits to directory entries.

    Authors without a directory entry cannot be texted and are left out of
    culprits and display, but remain in author_ids.

    Args:
        build: The finished build
        directory: User id to UserEntry mapping (see parse_user_list)

    Returns:
        CulpritResolution for the build
    """
    author_ids = collect_author_ids(build)
    culprits = [directory[author_id] for author_id in author_ids if author_id in directory]

    logger.info(
        f"Culprits: {len(author_ids)} ({len(culprits)} with phone numbers)",
        extra={
            "event": "culprits.resolved",
            "source": "culprits" if build.culprits else "change_set",
            "author_ids": author_ids,
            "culprit_count": len(author_ids),
            "reachable_count": len(culprits),
        },
    )

    return CulpritResolution(
        author_ids=author_ids,
        culprits=culprits,
        display=join_culprit_names([entry.display_name for entry in culprits]),
    )
