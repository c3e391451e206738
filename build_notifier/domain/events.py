"""Loading build completion events from files."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import BuildEvent


class BuildEventError(Exception):
    """Raised when a build event file cannot be read or is invalid."""

    pass


def load_build_event(event_path: Path) -> BuildEvent:
    """
    Load a build event from a JSON or YAML file.

    Args:
        event_path: Path to the event file

    Returns:
        Validated BuildEvent

    Raises:
        BuildEventError: If the file is missing, unparseable or invalid
    """
    try:
        with open(event_path, "r") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise BuildEventError(f"Build event file not found: {event_path}") from e
    except yaml.YAMLError as e:
        raise BuildEventError(f"Failed to parse build event {event_path}: {e}") from e
    except OSError as e:
        raise BuildEventError(f"Failed to read build event {event_path}: {e}") from e

    if not isinstance(data, dict):
        raise BuildEventError(f"Build event {event_path} must contain a mapping")

    try:
        return BuildEvent.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{' -> '.join(str(loc) for loc in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        raise BuildEventError(f"Invalid build event {event_path}: {problems}") from e
