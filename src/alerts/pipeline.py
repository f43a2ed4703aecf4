"""Clean-then-validate entry point used by alert consumers."""

from __future__ import annotations

from datetime import datetime

import structlog

from src.alerts.cleaning import clean_alert
from src.alerts.exceptions import AlertValidationError
from src.alerts.types import Alert
from src.alerts.validation import validate_alert

logger = structlog.get_logger(__name__)


def prepare_alert(alert: Alert, now: datetime | None = None) -> str:
    """Clean and validate *alert* in place, returning its storage key.

    The key is computed after cleaning, so two producers sending the same
    alert with different whitespace or casing get the same identifier.

    Raises:
        AlertValidationError: If the cleaned alert is not legal.
    """
    original_ts = alert.timestamp
    clean_alert(alert, now=now)
    if alert.timestamp != original_ts:
        logger.debug(
            "alert_timestamp_replaced",
            original=original_ts.isoformat(),
            replacement=alert.timestamp.isoformat(),
        )

    try:
        validate_alert(alert)
    except AlertValidationError as exc:
        logger.info(
            "alert_rejected",
            reason=exc.reason,
            correlation_id=alert.correlation_id,
            slack_channel_id=alert.slack_channel_id,
            route_key=alert.route_key,
        )
        raise

    unique_id = alert.unique_id()
    logger.debug(
        "alert_accepted",
        unique_id=unique_id,
        severity=alert.severity,
        correlation_id=alert.correlation_id,
    )
    return unique_id


def should_ignore(alert: Alert) -> bool:
    """Return True if the alert body contains any of its ignore substrings."""
    return any(s and s in alert.text for s in alert.ignore_if_text_contains or [])
