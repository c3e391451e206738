"""Placeholder substitution for SMS message templates.

Templates are plain text with %NAME% style tokens, e.g.
``"%PROJECT% build %BUILD% is %STATUS%"``.
"""

import re
from typing import Mapping

PROJECT = "%PROJECT%"
BUILD = "%BUILD%"
STATUS = "%STATUS%"
ARTIFACTS = "%ARTIFACTS%"
CULPRITS = "%CULPRITS%"
CULPRIT_NAME = "%CULPRIT-NAME%"

PLACEHOLDERS = (PROJECT, BUILD, STATUS, ARTIFACTS, CULPRITS, CULPRIT_NAME)


def substitute(template: str, substitutions: Mapping[str, str]) -> str:
    """Replace every placeholder in template with its value.

    Keys are matched literally. The template is scanned once, so text
    coming from a value is never expanded again even if it looks like a
    placeholder. Where keys overlap at the same position the longest wins.

    Args:
        template: Message template
        substitutions: Mapping of placeholder token to replacement text

    Returns:
        The expanded message
    """
    if not template or not substitutions:
        return template

    keys = sorted((key for key in substitutions if key), key=len, reverse=True)
    if not keys:
        return template

    pattern = re.compile("|".join(re.escape(key) for key in keys))
    return pattern.sub(lambda match: str(substitutions[match.group(0)]), template)
