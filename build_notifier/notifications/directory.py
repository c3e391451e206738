"""User directory mapping build-system user ids to phone numbers."""

from typing import Dict, Optional

from .models import UserEntry


def parse_user_list(text: Optional[str]) -> Dict[str, UserEntry]:
    """Parse the configured user list.

    The list is comma separated; each record is ``id:phone:displayName``.
    Records with fewer than three non-empty fields are skipped. Fields are
    used verbatim (no trimming) and a later record replaces an earlier one
    with the same id.

    Args:
        text: Raw user list, e.g. "jdoe:+43 664 1234:John Doe,asmith:555:Ann"

    Returns:
        Mapping of user id to UserEntry
    """
    users: Dict[str, UserEntry] = {}
    if not text:
        return users

    for record in text.split(","):
        fields = record.split(":")
        if len(fields) < 3:
            continue

        user_id, phone, display_name = fields[0], fields[1], fields[2]
        if not (user_id and phone and display_name):
            continue

        users[user_id] = UserEntry(display_name=display_name, phone=phone)

    return users
