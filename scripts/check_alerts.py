#!/usr/bin/env python3
"""Clean and validate alert JSON files, as the alert API would.

Usage::

    # Check one or more files (each holding an alert or an array of alerts)
    python scripts/check_alerts.py alerts/disk_full.json alerts/batch.json

    # Read from stdin
    cat alert.json | python scripts/check_alerts.py -

    # Only print rejection reasons
    python scripts/check_alerts.py --quiet alerts/*.json
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import structlog

from src.alerts.codec import dumps_alert, parse_alerts
from src.alerts.exceptions import AlertParseError, AlertValidationError
from src.alerts.pipeline import prepare_alert, should_ignore
from src.core.config import Settings, load_settings
from src.core.logging import setup_logging

logger = structlog.get_logger(__name__)


def _read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def check_source(source: str, settings: Settings, quiet: bool) -> int:
    """Check every alert in *source*. Returns the number of rejected alerts."""
    try:
        alerts = parse_alerts(_read_source(source))
    except (OSError, UnicodeDecodeError, AlertParseError) as exc:
        print(f"{source}: {exc}", file=sys.stderr)
        return 1

    if len(alerts) > settings.check.max_batch_size:
        print(
            f"{source}: too many alerts, expected <={settings.check.max_batch_size}",
            file=sys.stderr,
        )
        return len(alerts)

    rejected = 0
    for index, alert in enumerate(alerts):
        label = f"{source}[{index}]"
        try:
            unique_id = prepare_alert(alert)
        except AlertValidationError as exc:
            rejected += 1
            print(f"{label}: {exc.reason}", file=sys.stderr)
            continue

        if should_ignore(alert):
            logger.info("alert_ignored", source=label, unique_id=unique_id)

        if not quiet:
            print(f"{label}: ok {unique_id}")
            print(dumps_alert(alert, indent=settings.check.output_indent))

    return rejected


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Clean and validate alert JSON files.",
    )
    parser.add_argument(
        "sources",
        nargs="+",
        help="Alert JSON files, or '-' for stdin",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to settings YAML (default: config/settings.yaml)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override log level (DEBUG, INFO, WARNING, ...)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only report rejected alerts",
    )
    args = parser.parse_args()

    settings = load_settings(args.config)
    setup_logging(level=args.log_level)

    rejected = sum(check_source(s, settings, args.quiet) for s in args.sources)
    sys.exit(1 if rejected else 0)


if __name__ == "__main__":
    main()
