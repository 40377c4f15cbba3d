#!/usr/bin/env python3
"""Send one synthetic check event through the configured notifiers.

Useful for checking SMTP / webhook settings without waiting for a real
check to change state.

Usage::

    # "down" event for an ad-hoc check, default destinations from config
    python scripts/notify.py --kind down --name "FooBar" --target-url http://foobar.com

    # Custom config and a one-off webhook destination
    python scripts/notify.py --config config/settings.yaml --kind up \\
        --webhook-url https://hooks.example/custom
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import time

import structlog

from src.core.config import load_settings
from src.core.logging import setup_logging
from src.core.types import DomainEvent, EventKind, MonitoredEntity
from src.notify.entities import InMemoryEntityStore
from src.notify.events import CheckEventStream
from src.notify.factory import create_notifier_stack, subscribe_all

logger = structlog.get_logger(__name__)


def build_entity(args: argparse.Namespace) -> MonitoredEntity:
    """Ad-hoc check carrying the per-channel destination overrides from the CLI."""
    params: dict[str, object] = {}
    if args.email_to:
        params["email_destination"] = args.email_to
    if args.webhook_url:
        params["webhook_destination"] = args.webhook_url

    entity = MonitoredEntity(
        id="cli-check",
        name=args.name,
        target_url=args.target_url,
        type="http",
        params=params,
    )
    return entity


async def run(args: argparse.Namespace) -> int:
    """Publish one event and wait for every notifier to finish."""
    settings = load_settings(args.config)
    setup_logging(level=args.log_level)

    entity = build_entity(args)
    entities = InMemoryEntityStore([entity])

    dispatchers = create_notifier_stack(settings, entities)
    if not dispatchers:
        logger.error("no_notifiers_enabled")
        print(
            "No notifiers enabled. Enable at least one in config/settings.yaml "
            "(email.enabled or webhook.enabled).",
            file=sys.stderr,
        )
        return 1

    stream = CheckEventStream()
    subscribe_all(stream, dispatchers)

    event = DomainEvent(
        kind=EventKind(args.kind),
        entity_ref=entity.id,
        timestamp=time.time(),
        detail=args.detail,
    )
    logger.info("publishing_test_event", kind=event.kind.value, entity=entity.name)
    stream.publish(event)

    for dispatcher in dispatchers:
        await dispatcher.close()

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Send a test check event through the configured notifiers.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to settings YAML (default: config/settings.yaml)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level override: DEBUG, INFO, WARNING, ERROR",
    )
    parser.add_argument(
        "--kind",
        choices=[k.value for k in EventKind],
        default=EventKind.DOWN.value,
        help="Event kind to publish (default: down)",
    )
    parser.add_argument("--name", default="Test check", help="Check name")
    parser.add_argument("--target-url", default="http://example.com", help="Checked URL")
    parser.add_argument("--detail", default=None, help="Error/status text for the event")
    parser.add_argument(
        "--email-to",
        default=None,
        help="Per-check email recipients, comma separated (overrides email.message.to)",
    )
    parser.add_argument(
        "--webhook-url",
        default=None,
        help="Per-check webhook URL (overrides webhook.default_webhook)",
    )
    return parser


def main() -> None:
    args = build_parser().parse_args()

    code = asyncio.run(run(args))
    sys.exit(code)


if __name__ == "__main__":
    main()
