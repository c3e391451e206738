"""Logging configuration for the build SMS notifier."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Literal, TextIO

from .context import get_log_context

LogFormat = Literal["json", "key-value"]

SERVICE_NAME = "build-sms-notifier"

# LogRecord attributes that are not structured extras
RESERVED_ATTRS = frozenset({
    "name", "msg", "args", "created", "filename", "funcName", "levelname",
    "levelno", "lineno", "module", "msecs", "message", "pathname", "process",
    "processName", "relativeCreated", "thread", "threadName", "asctime",
    "exc_info", "exc_text", "stack_info", "taskName",
})

# Extras that must never reach the build log
SECRET_FIELDS = frozenset({"password", "api_key"})
MASK = "***"


def extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Collect the structured extras of a record, masking secrets.

    Args:
        record: Log record

    Returns:
        Mapping of extra field name to value, sorted by name
    """
    fields = {}
    for key in sorted(record.__dict__):
        if key in RESERVED_ATTRS or key.startswith("_"):
            continue
        value = record.__dict__[key]
        fields[key] = MASK if key in SECRET_FIELDS and value else value
    return fields


class ContextualFilter(logging.Filter):
    """Filter that stamps records with static metadata and the active context."""

    def __init__(self, service: str = SERVICE_NAME, environment: str = "local"):
        super().__init__()
        self.service = service
        self.environment = environment

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = self.service
        record.environment = self.environment

        for key, value in get_log_context().items():
            if not hasattr(record, key):
                setattr(record, key, value)

        return True


class JSONFormatter(logging.Formatter):
    """Formats each record as a single-line JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj: Dict[str, Any] = {
            "timestamp": self._format_timestamp(record.created),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in extra_fields(record).items():
            if isinstance(value, datetime):
                log_obj[key] = value.isoformat()
            elif isinstance(value, (str, int, float, bool, list, dict, type(None))):
                log_obj[key] = value
            else:
                log_obj[key] = str(value)

        if record.exc_info:
            log_obj["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(log_obj, ensure_ascii=False)

    def _format_timestamp(self, created: float) -> str:
        """Format a unix timestamp as ISO-8601 UTC with millisecond precision."""
        dt = datetime.fromtimestamp(created, tz=timezone.utc)
        return dt.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


class KeyValueFormatter(logging.Formatter):
    """Human-readable formatter: ``timestamp [level] name: message key=value ...``."""

    HIDDEN_FIELDS = frozenset({"service", "environment"})

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)

        pairs = []
        for key, value in extra_fields(record).items():
            if key in self.HIDDEN_FIELDS:
                continue
            pairs.append(f"{key}={self._format_value(value)}")

        if pairs:
            return f"{base} {' '.join(pairs)}"
        return base

    @staticmethod
    def _format_value(value: Any) -> str:
        if isinstance(value, str):
            if any(ch in value for ch in (" ", "=", ",", "\n")):
                return json.dumps(value, ensure_ascii=False)
            return value
        if isinstance(value, datetime):
            return value.isoformat()
        if isinstance(value, bool):
            return str(value).lower()
        if value is None:
            return "null"
        return str(value)


def configure_logging(
    level: str = "INFO",
    format_type: LogFormat = "key-value",
    environment: str = "local",
    stream: TextIO = None,
) -> None:
    """
    Configure the root logger with the specified level and format.

    Output goes to stdout by default, which is the build console when the
    notifier runs as a post-build step.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: 'json' or 'key-value'
        environment: Environment label (production, staging, local)
        stream: Output stream (defaults to sys.stdout)

    Raises:
        ValueError: If level or format_type is invalid
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    if format_type not in ("json", "key-value"):
        raise ValueError(f"Invalid log format: {format_type}. Must be 'json' or 'key-value'")

    handler = logging.StreamHandler(stream or sys.stdout)

    if format_type == "json":
        formatter = JSONFormatter()
    else:
        formatter = KeyValueFormatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    handler.addFilter(ContextualFilter(service=SERVICE_NAME, environment=environment))

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    # urllib3 logs full request URLs at DEBUG, which include gateway credentials
    logging.getLogger("urllib3").setLevel(max(numeric_level, logging.INFO))

    logging.getLogger(__name__).info(
        "Logging configured",
        extra={
            "event": "logging.configured",
            "component": "logging",
            "log_level": level.upper(),
            "log_format": format_type,
        },
    )
