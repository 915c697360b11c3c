"""Command-line entry point for sending bridge notifications by hand."""

import argparse
import asyncio
import dataclasses
import sys
from typing import List, Optional

import structlog

from bridge_notify import __version__
from bridge_notify.config import NotifierConfig
from bridge_notify.logging import setup_logging
from bridge_notify.notifier import notify_call_ended, notify_session_started


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="bridge-notify",
        description="Notify the cross-channel bridge of voice session lifecycle events"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config",
        help="YAML config file (defaults to BRIDGE_URL/BRIDGE_TIMEOUT_SECONDS env vars)"
    )
    parser.add_argument("--bridge-url", help="Bridge base URL (overrides config)")
    parser.add_argument(
        "--timeout",
        type=float,
        help="Request timeout in seconds (overrides config)"
    )
    parser.add_argument("--log-file", help="Also write logs to this file")

    subparsers = parser.add_subparsers(dest="command", required=True)

    started = subparsers.add_parser(
        "session-started",
        help="Register a voice session with the bridge"
    )
    started.add_argument("--call-sid", required=True)
    started.add_argument("--sender", required=True)
    started.add_argument("--transport", required=True)

    ended = subparsers.add_parser(
        "call-ended",
        help="Deregister a voice session from the bridge"
    )
    ended.add_argument("--call-sid", required=True)

    return parser


def resolve_config(args: argparse.Namespace) -> NotifierConfig:
    """Load configuration and apply command-line overrides.

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If configuration is invalid
    """
    config = NotifierConfig.load(args.config)

    overrides = {}
    if args.bridge_url:
        overrides["bridge_url"] = args.bridge_url
    if args.timeout is not None:
        overrides["timeout_seconds"] = args.timeout

    if overrides:
        config = dataclasses.replace(config, **overrides)
    return config


async def run(args: argparse.Namespace, config: NotifierConfig) -> None:
    """Send the notification selected on the command line."""
    if args.command == "session-started":
        await notify_session_started(
            config.bridge_url,
            args.call_sid,
            args.sender,
            args.transport,
            timeout=config.timeout_seconds,
        )
    else:
        await notify_call_ended(
            config.bridge_url,
            args.call_sid,
            timeout=config.timeout_seconds,
        )


def cli(argv: Optional[List[str]] = None) -> None:
    """CLI entry point.

    Exits 0 whatever the notification outcome; failures are only logged.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = resolve_config(args)
    except (FileNotFoundError, ValueError) as e:
        setup_logging()
        structlog.get_logger(__name__).error("Invalid configuration", error=str(e))
        sys.exit(1)

    setup_logging(config.log_level, config.log_format, log_file=args.log_file)
    logger = structlog.get_logger(__name__)

    if not config.bridge_url:
        parser.error("bridge URL not configured (use --bridge-url, --config or BRIDGE_URL)")

    logger.info(
        "Sending bridge notification",
        command=args.command,
        call_sid=args.call_sid,
        bridge_url=config.bridge_url
    )

    try:
        asyncio.run(run(args, config))
    except KeyboardInterrupt:
        logger.info("Interrupted")
        sys.exit(130)


if __name__ == "__main__":
    cli()
