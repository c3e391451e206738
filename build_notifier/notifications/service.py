"""Notification service for texting build results.

This module provides the NotificationService class that runs the
notification flow for one finished build: policy check, substitution map
construction, culprit resolution, per-recipient message composition, URL
shortening and SMS dispatch.
"""

import logging
from typing import Dict, Optional

from build_notifier.clients import ClientError, MysmsClient, TinyUrlClient
from build_notifier.config.environment import GatewaySettings
from build_notifier.config.models import AppConfig, NotifierConfig, NotifyFlag
from build_notifier.domain.models import BuildRecord
from build_notifier.logging import get_logger
from build_notifier.logging.context import log_context

from . import templates
from .culprits import resolve_culprits
from .directory import parse_user_list
from .models import DispatchResult, NotificationResult
from .payloads import build_substitution_map
from .policy import should_notify

logger = get_logger(__name__, component="notification")


class NotificationService:
    """Service for texting build results to recipients and culprits.

    Coordinates the entire notification flow:
    1. Check whether the build outcome warrants a notification
    2. Build the substitution map from the build record
    3. Resolve culprits through the configured user list
    4. Text every configured recipient
    5. Text every reachable culprit, if enabled

    Each message is sent independently: a failure for one recipient is
    logged and recorded, and the remaining recipients are still texted.
    The service keeps no per-build state, so one instance can serve
    concurrent builds.
    """

    def __init__(
        self,
        sms_client: Optional[MysmsClient] = None,
        url_shortener: Optional[TinyUrlClient] = None,
        logger_instance: Optional[logging.Logger] = None,
        dry_run: bool = False,
    ):
        """Initialize notification service.

        Args:
            sms_client: SMS gateway client (creates default if None)
            url_shortener: URL shortener client (creates default if None)
            logger_instance: Logger instance (uses module logger if None)
            dry_run: Compose and log messages without calling remote services
        """
        self.sms_client = sms_client or MysmsClient()
        self.url_shortener = url_shortener or TinyUrlClient()
        self.logger = logger_instance or logger
        self.dry_run = dry_run

    @classmethod
    def from_config(cls, app_config: AppConfig, dry_run: bool = False) -> "NotificationService":
        """Create a service with clients set up from the application config."""
        client_options = {
            "timeout": app_config.advanced.http_request_timeout,
            "user_agent": app_config.advanced.user_agent,
        }
        return cls(
            sms_client=MysmsClient(app_config.endpoints.sms_gateway_url, **client_options),
            url_shortener=TinyUrlClient(app_config.endpoints.url_shortener_url, **client_options),
            dry_run=dry_run,
        )

    def perform(
        self,
        build: BuildRecord,
        notifier_config: NotifierConfig,
        gateway: GatewaySettings,
    ) -> bool:
        """Build step entry point.

        Notification is best effort, so the build step always succeeds.

        Returns:
            True, regardless of the notification outcome
        """
        self.notify(build, notifier_config, gateway)
        return True

    def notify(
        self,
        build: BuildRecord,
        notifier_config: NotifierConfig,
        gateway: GatewaySettings,
    ) -> NotificationResult:
        """Send notifications for a finished build.

        Never raises: every failure is logged and recorded on the result.

        Args:
            build: The finished build
            notifier_config: Per-notifier settings
            gateway: Gateway credentials and build server URL

        Returns:
            NotificationResult describing what was sent and what failed
        """
        project = getattr(build, "project_display_name", "unknown")
        build_name = getattr(build, "display_name", "unknown")
        result = NotificationResult(project=project, build=build_name, status="completed")

        with log_context(project=project, build=build_name):
            self.logger.info(
                f"Perform {build_name}",
                extra={"event": "notification.started", "dry_run": self.dry_run},
            )

            try:
                if not should_notify(notifier_config.only_on_failure_or_recovery, build):
                    result.status = "skipped"
                    result.reason = self._skip_reason(notifier_config)
                    self.logger.info(
                        f"Not notifying: {build_name}",
                        extra={"event": "notification.skip", "reason": result.reason},
                    )
                    return result

                self._send_all(build, notifier_config, gateway, result)

            except Exception as e:
                result.status = "failed"
                result.error = str(e)
                self.logger.error(
                    f"Notification for {project} {build_name} aborted: {e}",
                    exc_info=True,
                    extra={"event": "notification.failed", "error_type": type(e).__name__},
                )

            self.logger.info(
                f"Notification complete for {project} {build_name}: "
                f"{result.sent_count} sent, {result.failed_count} failed",
                extra={
                    "event": "notification.completed",
                    "status": result.status,
                    "sent": result.sent_count,
                    "failed": result.failed_count,
                },
            )

        return result

    def _send_all(
        self,
        build: BuildRecord,
        notifier_config: NotifierConfig,
        gateway: GatewaySettings,
        result: NotificationResult,
    ) -> None:
        base_substitutions = build_substitution_map(build)

        directory = parse_user_list(notifier_config.user_list)
        resolution = resolve_culprits(build, directory)
        result.culprit_ids = resolution.author_ids
        base_substitutions[templates.CULPRITS] = resolution.display

        build_url = gateway.build_url(build.url)
        include_url = notifier_config.include_url.is_enabled

        for recipient in notifier_config.recipients():
            result.dispatches.append(
                self._dispatch(
                    recipient=recipient,
                    kind="direct",
                    template=notifier_config.message,
                    substitutions=dict(base_substitutions),
                    build_url=build_url if include_url else None,
                    gateway=gateway,
                )
            )

        if not notifier_config.send_to_culprits.is_enabled:
            return

        culprit_template = notifier_config.template_for_culprits()
        for culprit in resolution.culprits:
            substitutions = dict(base_substitutions)
            substitutions[templates.CULPRIT_NAME] = culprit.display_name
            result.dispatches.append(
                self._dispatch(
                    recipient=culprit.phone,
                    kind="culprit",
                    template=culprit_template,
                    substitutions=substitutions,
                    build_url=build_url if include_url else None,
                    gateway=gateway,
                )
            )

    def _dispatch(
        self,
        recipient: str,
        kind: str,
        template: str,
        substitutions: Dict[str, str],
        build_url: Optional[str],
        gateway: GatewaySettings,
    ) -> DispatchResult:
        """Compose and send one message, containing any failure.

        Args:
            recipient: Phone number
            kind: "direct" or "culprit"
            template: Template to expand
            substitutions: This recipient's own substitution map
            build_url: Absolute build URL to append (shortened), None to omit
            gateway: Gateway credentials

        Returns:
            DispatchResult for this recipient
        """
        message = None

        with log_context(recipient=recipient, recipient_kind=kind):
            try:
                message = templates.substitute(template, substitutions)
                if build_url is not None:
                    message = f"{message} {self._link_for(build_url)}"

                if self.dry_run:
                    self.logger.info(
                        f"Dry run, not sending to {recipient}: {message}",
                        extra={"event": "notification.dispatch.dry_run"},
                    )
                    return DispatchResult(recipient, kind, "dry_run", message=message)

                self.sms_client.send(
                    gateway.api_key,
                    gateway.sender_id,
                    gateway.password,
                    recipient,
                    message,
                )

            except ClientError as e:
                self.logger.error(
                    f"Sending to {recipient} failed: {e}",
                    extra={
                        "event": "notification.dispatch.failure",
                        "error_type": type(e).__name__,
                    },
                )
                return DispatchResult(recipient, kind, "failed", message=message, error=str(e))
            except Exception as e:
                self.logger.error(
                    f"Unexpected error sending to {recipient}: {e}",
                    exc_info=True,
                    extra={
                        "event": "notification.dispatch.failure",
                        "error_type": type(e).__name__,
                    },
                )
                return DispatchResult(recipient, kind, "failed", message=message, error=str(e))

            self.logger.info(
                f"Sent notification to {recipient}",
                extra={"event": "notification.dispatch.success"},
            )
            return DispatchResult(recipient, kind, "sent", message=message)

    def _link_for(self, build_url: str) -> str:
        if self.dry_run:
            return build_url
        return self.url_shortener.shorten(build_url)

    @staticmethod
    def _skip_reason(notifier_config: NotifierConfig) -> str:
        if notifier_config.only_on_failure_or_recovery is NotifyFlag.UNSET:
            return "only_on_failure_or_recovery_unset"
        return "not_failure_or_recovery"
