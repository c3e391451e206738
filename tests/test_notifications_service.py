"""Unit tests for notification service.

Tests the NotificationService for:
- Policy skip logic
- Message composition for direct recipients and culprits
- URL shortening
- Per-recipient failure containment
- Top-level error containment
- Dry run
"""

import threading
from unittest.mock import MagicMock, Mock, PropertyMock

import pytest

from build_notifier.clients import ClientHTTPError, GatewayRejectedError
from build_notifier.config.models import AppConfig, NotifierConfig, NotifyFlag
from build_notifier.domain.models import BuildEvent, BuildResult, PreviousBuild
from build_notifier.notifications.service import NotificationService


@pytest.fixture
def sms_client():
    return Mock()


@pytest.fixture
def url_shortener():
    shortener = Mock()
    shortener.shorten.return_value = "https://tinyurl.com/w42"
    return shortener


@pytest.fixture
def service(sms_client, url_shortener):
    return NotificationService(sms_client=sms_client, url_shortener=url_shortener)


def culprit_config(**overrides):
    settings = dict(
        message="%PROJECT% %BUILD% %STATUS% by %CULPRITS%",
        to_list="+1001,+1002",
        only_on_failure_or_recovery=NotifyFlag.ENABLED,
        include_url=NotifyFlag.DISABLED,
        send_to_culprits=NotifyFlag.ENABLED,
        user_list="jdoe:+2001:John,asmith:+2002:Ann",
        culprit_message="%CULPRIT-NAME%, you broke %PROJECT%",
    )
    settings.update(overrides)
    return NotifierConfig(**settings)


def sent_messages(sms_client):
    """(recipient, message) pairs in send order."""
    return [(c.args[3], c.args[4]) for c in sms_client.send.call_args_list]


class TestPolicy:
    """Tests for skipping builds."""

    def test_skips_when_flag_unset(self, service, sms_client, failed_build, gateway_settings):
        config = NotifierConfig(message="%PROJECT%", to_list="+1001")

        result = service.notify(failed_build, config, gateway_settings)

        assert result.status == "skipped"
        assert result.reason == "only_on_failure_or_recovery_unset"
        sms_client.send.assert_not_called()

    def test_skips_success_after_success(self, service, sms_client, notifier_config, gateway_settings):
        build = BuildEvent(
            project_display_name="Widget",
            display_name="#43",
            result=BuildResult.SUCCESS,
            previous_build=PreviousBuild(result=BuildResult.SUCCESS),
        )

        result = service.notify(build, notifier_config, gateway_settings)

        assert result.status == "skipped"
        assert result.reason == "not_failure_or_recovery"
        sms_client.send.assert_not_called()

    def test_disabled_flag_sends_on_success(self, service, sms_client, gateway_settings):
        build = BuildEvent(
            project_display_name="Widget",
            display_name="#43",
            result=BuildResult.SUCCESS,
            previous_build=PreviousBuild(result=BuildResult.SUCCESS),
        )
        config = NotifierConfig(
            message="%PROJECT% %STATUS%",
            to_list="+1001",
            only_on_failure_or_recovery=NotifyFlag.DISABLED,
        )

        result = service.notify(build, config, gateway_settings)

        assert result.status == "completed"
        assert sent_messages(sms_client) == [("+1001", "Widget SUCCESS")]


class TestComposition:
    """Tests for message composition and dispatch."""

    def test_end_to_end_failure(self, service, sms_client, failed_build, notifier_config, gateway_settings):
        """Widget #42 failed after a success: one message to the configured number."""
        result = service.notify(failed_build, notifier_config, gateway_settings)

        sms_client.send.assert_called_once_with(
            "test-api-key",
            "+4366400000000",
            "secret",
            "+15551234",
            "Widget build #42 is FAILURE",
        )
        assert result.status == "completed"
        assert result.sent_count == 1
        assert result.has_failures() is False
        assert result.dispatches[0].message == "Widget build #42 is FAILURE"

    def test_recipients_in_configuration_order(self, service, sms_client, failed_build, gateway_settings):
        config = culprit_config(to_list="+1003, +1001,,+1003", send_to_culprits=NotifyFlag.DISABLED)

        service.notify(failed_build, config, gateway_settings)

        assert [r for r, _ in sent_messages(sms_client)] == ["+1003", "+1001", "+1003"]

    def test_culprits_placeholder(self, service, sms_client, failed_build, gateway_settings):
        config = culprit_config(send_to_culprits=NotifyFlag.DISABLED)

        service.notify(failed_build, config, gateway_settings)

        assert sent_messages(sms_client)[0] == ("+1001", "Widget #42 FAILURE by John and Ann")

    def test_culprits_are_texted(self, service, sms_client, failed_build, gateway_settings):
        result = service.notify(failed_build, culprit_config(), gateway_settings)

        assert sent_messages(sms_client) == [
            ("+1001", "Widget #42 FAILURE by John and Ann"),
            ("+1002", "Widget #42 FAILURE by John and Ann"),
            ("+2001", "John, you broke Widget"),
            ("+2002", "Ann, you broke Widget"),
        ]
        assert [d.kind for d in result.dispatches] == ["direct", "direct", "culprit", "culprit"]
        assert result.culprit_ids == ["jdoe", "asmith"]

    def test_culprit_name_does_not_leak_into_direct_messages(
        self, service, sms_client, failed_build, gateway_settings
    ):
        config = culprit_config(message="%CULPRIT-NAME%|%PROJECT%", culprit_message="")

        service.notify(failed_build, config, gateway_settings)

        messages = sent_messages(sms_client)
        assert messages[0] == ("+1001", "%CULPRIT-NAME%|Widget")
        assert messages[1] == ("+1002", "%CULPRIT-NAME%|Widget")
        # Empty culprit template falls back to the primary one
        assert messages[2] == ("+2001", "John|Widget")
        assert messages[3] == ("+2002", "Ann|Widget")

    def test_culprits_not_texted_when_flag_unset(self, service, sms_client, failed_build, gateway_settings):
        config = culprit_config(send_to_culprits=NotifyFlag.UNSET)

        service.notify(failed_build, config, gateway_settings)

        assert [r for r, _ in sent_messages(sms_client)] == ["+1001", "+1002"]

    def test_unknown_culprits_are_not_texted(self, service, sms_client, gateway_settings):
        build = BuildEvent(
            project_display_name="Widget",
            display_name="#42",
            result=BuildResult.FAILURE,
            change_set_authors=["stranger", "jdoe"],
        )

        result = service.notify(build, culprit_config(to_list=""), gateway_settings)

        assert sent_messages(sms_client) == [("+2001", "John, you broke Widget")]
        assert result.culprit_ids == ["stranger", "jdoe"]

    def test_url_is_shortened_and_appended(
        self, service, sms_client, url_shortener, failed_build, notifier_config, gateway_settings
    ):
        config = notifier_config.model_copy(update={"include_url": NotifyFlag.ENABLED})

        service.notify(failed_build, config, gateway_settings)

        url_shortener.shorten.assert_called_once_with("https://ci.example.com/job/widget/42/")
        assert sent_messages(sms_client) == [
            ("+15551234", "Widget build #42 is FAILURE https://tinyurl.com/w42")
        ]

    def test_url_appended_to_culprit_messages(
        self, service, sms_client, url_shortener, failed_build, gateway_settings
    ):
        config = culprit_config(include_url=NotifyFlag.ENABLED)

        service.notify(failed_build, config, gateway_settings)

        assert url_shortener.shorten.call_count == 4
        assert all(msg.endswith(" https://tinyurl.com/w42") for _, msg in sent_messages(sms_client))

    def test_no_url_when_include_url_unset(
        self, service, url_shortener, failed_build, notifier_config, gateway_settings
    ):
        config = notifier_config.model_copy(update={"include_url": NotifyFlag.UNSET})

        service.notify(failed_build, config, gateway_settings)

        url_shortener.shorten.assert_not_called()


class TestFailureContainment:
    """Tests that notification failures never escape."""

    def test_one_failing_recipient_does_not_stop_the_others(
        self, service, sms_client, failed_build, gateway_settings
    ):
        sms_client.send.side_effect = [
            None,
            ClientHTTPError("Non-OK response code back from mysms: 500", status_code=500, url="x"),
            None,
        ]
        config = culprit_config(to_list="+1001,+1002,+1003", send_to_culprits=NotifyFlag.DISABLED)

        result = service.notify(failed_build, config, gateway_settings)

        assert sms_client.send.call_count == 3
        assert [d.status for d in result.dispatches] == ["sent", "failed", "sent"]
        assert "500" in result.dispatches[1].error
        assert result.status == "completed"
        assert result.has_failures() is True
        assert service.perform(failed_build, config, gateway_settings) is True

    def test_gateway_rejection_is_recorded(self, service, sms_client, failed_build, notifier_config, gateway_settings):
        sms_client.send.side_effect = GatewayRejectedError("rejected", error_code=7)

        result = service.notify(failed_build, notifier_config, gateway_settings)

        assert result.failed_count == 1
        assert result.dispatches[0].status == "failed"

    def test_shortener_failure_skips_only_that_message(
        self, service, sms_client, url_shortener, failed_build, gateway_settings
    ):
        url_shortener.shorten.side_effect = [
            ClientHTTPError("Non-OK response code back from tinyurl: 503", status_code=503, url="x"),
            "https://tinyurl.com/ok",
        ]
        config = culprit_config(include_url=NotifyFlag.ENABLED, send_to_culprits=NotifyFlag.DISABLED)

        result = service.notify(failed_build, config, gateway_settings)

        assert sent_messages(sms_client) == [
            ("+1002", "Widget #42 FAILURE by John and Ann https://tinyurl.com/ok")
        ]
        assert [d.status for d in result.dispatches] == ["failed", "sent"]

    def test_unexpected_dispatch_error_is_contained(
        self, service, sms_client, failed_build, gateway_settings
    ):
        sms_client.send.side_effect = [RuntimeError("boom"), None]
        config = culprit_config(send_to_culprits=NotifyFlag.DISABLED)

        result = service.notify(failed_build, config, gateway_settings)

        assert [d.status for d in result.dispatches] == ["failed", "sent"]

    def test_composition_error_is_contained(self, service, sms_client, notifier_config, gateway_settings):
        build = MagicMock()
        build.project_display_name = "Widget"
        build.display_name = "#42"
        build.result = BuildResult.FAILURE
        build.previous_build = None
        type(build).artifacts = PropertyMock(side_effect=OSError("disk gone"))

        result = service.notify(build, notifier_config, gateway_settings)

        assert result.status == "failed"
        assert "disk gone" in result.error
        sms_client.send.assert_not_called()
        assert service.perform(build, notifier_config, gateway_settings) is True


class TestDryRun:
    """Tests for dry run mode."""

    def test_dry_run_sends_nothing(self, sms_client, url_shortener, failed_build, gateway_settings):
        service = NotificationService(sms_client=sms_client, url_shortener=url_shortener, dry_run=True)
        config = culprit_config(include_url=NotifyFlag.ENABLED)

        result = service.notify(failed_build, config, gateway_settings)

        sms_client.send.assert_not_called()
        url_shortener.shorten.assert_not_called()
        assert {d.status for d in result.dispatches} == {"dry_run"}
        assert result.dispatches[0].message == (
            "Widget #42 FAILURE by John and Ann https://ci.example.com/job/widget/42/"
        )
        assert result.has_failures() is False


class TestConcurrency:
    """Tests that one service can serve concurrent builds."""

    def test_concurrent_builds_do_not_share_substitutions(self, gateway_settings):
        sms_client = Mock()
        service = NotificationService(sms_client=sms_client, url_shortener=Mock())
        config = NotifierConfig(
            message="%PROJECT% %BUILD%",
            to_list="+1001,+1002,+1003",
            only_on_failure_or_recovery=NotifyFlag.DISABLED,
        )
        builds = [
            BuildEvent(project_display_name=f"P{i}", display_name=f"#{i}", result=BuildResult.FAILURE)
            for i in range(8)
        ]

        threads = [
            threading.Thread(target=service.notify, args=(build, config, gateway_settings))
            for build in builds
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        messages = [c.args[4] for c in sms_client.send.call_args_list]
        assert len(messages) == 24
        assert sorted(set(messages)) == sorted(f"P{i} #{i}" for i in range(8))
        for i in range(8):
            assert messages.count(f"P{i} #{i}") == 3


class TestFromConfig:
    """Tests for building a service from configuration."""

    def test_clients_use_configured_endpoints(self):
        app_config = AppConfig.model_validate(
            {
                "notifier": {"message": "%PROJECT%"},
                "endpoints": {
                    "sms_gateway_url": "https://sms.example.com/send",
                    "url_shortener_url": "https://short.example.com/create",
                },
                "advanced": {"http_request_timeout": 20, "user_agent": "Test/1.0"},
            }
        )

        service = NotificationService.from_config(app_config, dry_run=True)

        assert service.sms_client.endpoint == "https://sms.example.com/send"
        assert service.url_shortener.endpoint == "https://short.example.com/create"
        assert service.sms_client.timeout == 20
        assert service.url_shortener.user_agent == "Test/1.0"
        assert service.dry_run is True
