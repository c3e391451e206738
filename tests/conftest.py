"""Shared fixtures for Build SMS Notifier tests."""

import pytest

from build_notifier.config.environment import GatewaySettings
from build_notifier.config.models import NotifierConfig, NotifyFlag
from build_notifier.domain.models import Artifact, BuildEvent, BuildResult, PreviousBuild
from build_notifier.logging.context import clear_log_context


@pytest.fixture(autouse=True)
def clean_log_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Set the gateway environment variables."""
    monkeypatch.setenv("MYSMS_API_KEY", "test-api-key")
    monkeypatch.setenv("MYSMS_MSISDN", "+4366400000000")
    monkeypatch.setenv("MYSMS_PASSWORD", "secret")
    monkeypatch.setenv("BUILD_SERVER_URL", "https://ci.example.com/")
    monkeypatch.delenv("LOG_LEVEL", raising=False)


@pytest.fixture
def gateway_settings():
    """Gateway settings for testing."""
    return GatewaySettings(
        api_key="test-api-key",
        sender_id="+4366400000000",
        password="secret",
        base_url="https://ci.example.com/",
    )


@pytest.fixture
def notifier_config():
    """Notifier that texts one recipient on failures and recoveries."""
    return NotifierConfig(
        message="%PROJECT% build %BUILD% is %STATUS%",
        to_list="+15551234",
        only_on_failure_or_recovery=NotifyFlag.ENABLED,
        include_url=NotifyFlag.DISABLED,
        send_to_culprits=NotifyFlag.DISABLED,
    )


@pytest.fixture
def failed_build():
    """Build #42 of Widget that failed after a success."""
    return BuildEvent(
        project_display_name="Widget",
        display_name="#42",
        result=BuildResult.FAILURE,
        previous_build=PreviousBuild(display_name="#41", result=BuildResult.SUCCESS),
        artifacts=[Artifact(file_name="widget.jar", href="artifact/target/widget.jar")],
        culprits=["jdoe", "asmith"],
        change_set_authors=["jdoe"],
        url="job/widget/42/",
    )
