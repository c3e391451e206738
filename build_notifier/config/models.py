"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class NotifyFlag(str, Enum):
    """Three-state notifier switch.

    UNSET means the option was never configured and is distinct from an
    explicit DISABLED.
    """

    UNSET = "unset"
    ENABLED = "enabled"
    DISABLED = "disabled"

    @property
    def is_enabled(self) -> bool:
        return self is NotifyFlag.ENABLED


_ENABLED_VALUES = {"true", "Yes"}
_DISABLED_VALUES = {"false", "No"}


def parse_flag(value) -> NotifyFlag:
    """Convert a raw configuration value to a NotifyFlag.

    "true"/"Yes" and boolean True map to ENABLED, "false"/"No" and boolean
    False map to DISABLED. Anything else, including None, is UNSET.

    Args:
        value: Raw value from YAML or a form field

    Returns:
        NotifyFlag for the value
    """
    if isinstance(value, NotifyFlag):
        return value
    if isinstance(value, bool):
        return NotifyFlag.ENABLED if value else NotifyFlag.DISABLED
    if isinstance(value, str):
        if value in _ENABLED_VALUES:
            return NotifyFlag.ENABLED
        if value in _DISABLED_VALUES:
            return NotifyFlag.DISABLED
        try:
            return NotifyFlag(value)
        except ValueError:
            return NotifyFlag.UNSET
    return NotifyFlag.UNSET


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class NotifierConfig(BaseModel):
    """Per-notifier settings, fixed for the lifetime of a build step."""

    message: str = Field(..., description="Message template sent to every recipient")
    to_list: str = Field("", description="Comma separated phone numbers")
    only_on_failure_or_recovery: NotifyFlag = Field(
        NotifyFlag.UNSET, description="Only notify on failure or recovery"
    )
    include_url: NotifyFlag = Field(
        NotifyFlag.UNSET, description="Append a shortened link to the build"
    )
    send_to_culprits: NotifyFlag = Field(
        NotifyFlag.UNSET, description="Also text the authors of the breaking changes"
    )
    user_list: str = Field(
        "", description="Comma separated id:phone:displayName triples"
    )
    culprit_message: Optional[str] = Field(
        None, description="Template for culprit messages (falls back to message)"
    )

    @field_validator(
        "only_on_failure_or_recovery", "include_url", "send_to_culprits", mode="before"
    )
    @classmethod
    def coerce_flag(cls, v) -> NotifyFlag:
        """Map raw flag values to NotifyFlag."""
        return parse_flag(v)

    @field_validator("to_list", "user_list", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        """Treat a missing list as empty."""
        return "" if v is None else v

    def recipients(self) -> List[str]:
        """Get the direct recipients in configuration order."""
        recipients = []
        for number in self.to_list.split(","):
            stripped = number.strip()
            if stripped:
                recipients.append(stripped)
        return recipients

    def template_for_culprits(self) -> str:
        """Get the culprit template, or the primary template when none is set."""
        if self.culprit_message:
            return self.culprit_message
        return self.message

    model_config = {"frozen": True}


class EndpointConfig(BaseModel):
    """Remote service endpoints."""

    sms_gateway_url: str = Field(
        "https://api.mysms.com/json/message/send",
        description="mysms message send endpoint",
    )
    url_shortener_url: str = Field(
        "http://tinyurl.com/api-create.php",
        description="tinyurl create endpoint",
    )

    @field_validator("sms_gateway_url", "url_shortener_url")
    @classmethod
    def require_http_url(cls, v: str) -> str:
        """Ensure endpoints are absolute http(s) URLs."""
        stripped = v.strip()
        if not stripped.startswith(("http://", "https://")):
            raise ValueError(f"Endpoint must be an http(s) URL, got: '{v}'")
        return stripped


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class AdvancedConfig(BaseModel):
    """Advanced runtime settings."""

    http_request_timeout: Optional[int] = Field(
        None, ge=1, le=300, description="Timeout for outbound calls in seconds (None = wait)"
    )
    user_agent: str = Field(
        "BuildSmsNotifier/1.0",
        min_length=1,
        description="User-Agent string for HTTP requests",
    )

    @field_validator("user_agent")
    @classmethod
    def strip_user_agent(cls, v: str) -> str:
        """Strip whitespace from user agent."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("user_agent cannot be empty")
        return stripped


class AppConfig(BaseModel):
    """Root configuration object for the Build SMS Notifier."""

    notifier: NotifierConfig = Field(..., description="Notifier settings")
    endpoints: EndpointConfig = Field(
        default_factory=EndpointConfig, description="Remote service endpoints"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    advanced: AdvancedConfig = Field(
        default_factory=AdvancedConfig, description="Advanced runtime settings"
    )
