"""Substitution map construction for notification templates.

This module turns a build record into the placeholder values used when
expanding message templates.
"""

from typing import Dict, Iterable

from build_notifier.domain.models import Artifact, BuildRecord

from . import templates

# Shown for %STATUS% when the build has no result yet
NO_RESULT = "NONE"


def format_artifacts(artifacts: Iterable[Artifact]) -> str:
    """List artifacts one per line as ``name: href``.

    Args:
        artifacts: Archived build artifacts

    Returns:
        Listing with a trailing newline after each artifact, or "" if none
    """
    return "".join(f"{artifact.file_name}: {artifact.href}\n" for artifact in artifacts)


def build_substitution_map(build: BuildRecord) -> Dict[str, str]:
    """Build the base substitution map for a build.

    The map contains %PROJECT%, %BUILD%, %STATUS% and %ARTIFACTS%. Culprit
    placeholders are added later by the caller. A fresh dict is returned on
    every call.

    Args:
        build: The finished build

    Returns:
        Mapping of placeholder token to value
    """
    status = build.result.value if build.result is not None else NO_RESULT

    return {
        templates.PROJECT: build.project_display_name,
        templates.BUILD: build.display_name,
        templates.STATUS: status,
        templates.ARTIFACTS: format_artifacts(build.artifacts),
    }
