"""Command line entry point: text the result of one finished build."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import os
import sys
from pathlib import Path
from typing import Optional, Sequence, Tuple

from build_notifier.config.environment import GatewaySettings
from build_notifier.config.exceptions import ConfigurationError
from build_notifier.config.loader import load_config, validate_config_file
from build_notifier.config.models import AppConfig
from build_notifier.domain.events import BuildEventError, load_build_event
from build_notifier.logging import get_logger
from build_notifier.logging.config import configure_logging
from build_notifier.notifications.service import NotificationService

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Path, log_level_override: Optional[str]
) -> Tuple[AppConfig, GatewaySettings]:
    """
    Load configuration and settle the effective log level.

    Log level priority: CLI > environment > config file.

    Args:
        config_path: Path to configuration file
        log_level_override: Log level from CLI (takes precedence)

    Returns:
        Tuple of (AppConfig, GatewaySettings)

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, gateway = load_config(config_path)

    if log_level_override:
        gateway.log_level = log_level_override
    elif not gateway.log_level:
        gateway.log_level = app_config.logging.level or "INFO"

    return app_config, gateway


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build SMS Notifier - text build results via the mysms gateway"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("notifier.yaml"),
        help="Path to configuration file (default: notifier.yaml)",
    )
    parser.add_argument(
        "--build-event",
        type=Path,
        help="Path to the JSON/YAML build event to notify about",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Compose and log messages without contacting mysms or tinyurl",
    )
    parser.add_argument(
        "--check-config",
        action="store_true",
        help="Validate the configuration file and exit",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point for the Build SMS Notifier.

    A failed notification never fails the build: once configuration and
    the build event are loaded the exit code is 0.

    Returns:
        Exit code (0 for success, 1 for configuration or usage errors)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.check_config:
        return 0 if validate_config_file(args.config) else 1

    if args.build_event is None:
        parser.print_usage(sys.stderr)
        print("error: --build-event is required", file=sys.stderr)
        return 1

    try:
        app_config, gateway = load_runtime_config(args.config, args.log_level)

        environment = os.environ.get("ENVIRONMENT", "local")
        configure_logging(
            level=gateway.log_level,
            format_type=app_config.logging.format,
            environment=environment,
        )

        build = load_build_event(args.build_event)

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return 1
    except BuildEventError as e:
        print(f"Build Event Error: {e}", file=sys.stderr)
        logger.error(
            f"Build event error: {e}",
            extra={"event": "build_event.error", "error_type": "BuildEventError"},
        )
        return 1

    logger.info(
        "Build SMS Notifier starting",
        extra={
            "event": "service.starting",
            "config_path": str(args.config),
            "dry_run": args.dry_run,
        },
    )

    service = NotificationService.from_config(app_config, dry_run=args.dry_run)
    try:
        service.perform(build, app_config.notifier, gateway)
    finally:
        service.sms_client.close()
        service.url_shortener.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
