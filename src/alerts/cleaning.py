"""In-place normalization of producer-supplied alerts.

Cleaning trims, case-folds, truncates and defaults fields so that a
well-intentioned but sloppy alert passes validation. It never fails, and
running it a second time changes nothing (apart from the staleness check,
which depends on the clock).
"""

from __future__ import annotations

from datetime import UTC, datetime

from src.alerts import limits
from src.alerts.severity import AlertSeverity
from src.alerts.text import (
    collapse_newlines,
    strip_status_placeholder,
    trim_space,
    truncate,
    truncate_body,
    truncate_keep_whitespace,
)
from src.alerts.types import Alert, Escalation, Webhook

# Legacy severity still sent by older producers.
_LEGACY_CRITICAL = "critical"

# Button style sent by producers that mean "unset".
_DEFAULT_BUTTON_STYLE = "default"


def clean_alert(alert: Alert, now: datetime | None = None) -> None:
    """Normalize *alert* in place.

    Args:
        alert: The alert to clean.
        now: Current time, used for the timestamp staleness check.
            Defaults to the wall clock.
    """
    now = now or datetime.now(UTC)
    if now - alert.timestamp > limits.MAX_TIMESTAMP_AGE:
        alert.timestamp = now

    _normalize_strings(alert)
    _truncate_strings(alert)

    if alert.severity in ("", _LEGACY_CRITICAL):
        alert.severity = AlertSeverity.ERROR.value

    if alert.archiving_delay_seconds < 0:
        alert.archiving_delay_seconds = 0

    if alert.notification_delay_seconds < 0:
        alert.notification_delay_seconds = 0

    for field in alert.fields or []:
        if field is None:
            continue
        field.title = truncate(trim_space(field.title), limits.MAX_FIELD_TITLE_LENGTH)
        field.value = truncate(trim_space(field.value), limits.MAX_FIELD_VALUE_LENGTH)

    for hook in alert.webhooks or []:
        if hook is None:
            continue
        _clean_webhook(hook)

    if alert.escalation:
        alert.escalation = sorted(alert.escalation, key=_escalation_sort_key)
        for esc in alert.escalation:
            if esc is None:
                continue
            esc.severity = trim_space(esc.severity).lower()
            esc.move_to_channel = trim_space(esc.move_to_channel).upper()
            if esc.slack_mentions:
                esc.slack_mentions = [trim_space(m) for m in esc.slack_mentions]


def _normalize_strings(alert: Alert) -> None:
    alert.type = trim_space(alert.type).lower()
    alert.slack_channel_id = trim_space(alert.slack_channel_id).upper()
    alert.route_key = trim_space(alert.route_key).lower()
    alert.header = collapse_newlines(trim_space(alert.header))
    alert.header_when_resolved = collapse_newlines(trim_space(alert.header_when_resolved))
    alert.text = trim_space(alert.text)
    alert.text_when_resolved = trim_space(alert.text_when_resolved)
    alert.fallback_text = collapse_newlines(
        trim_space(strip_status_placeholder(alert.fallback_text))
    )
    alert.correlation_id = trim_space(alert.correlation_id)
    alert.username = trim_space(alert.username)
    alert.author = trim_space(alert.author)
    alert.host = trim_space(alert.host)
    alert.link = trim_space(alert.link)
    alert.footer = trim_space(alert.footer)
    alert.icon_emoji = trim_space(alert.icon_emoji).lower()
    alert.severity = trim_space(alert.severity).lower()


def _truncate_strings(alert: Alert) -> None:
    alert.fallback_text = truncate_keep_whitespace(
        alert.fallback_text, limits.MAX_FALLBACK_TEXT_LENGTH
    )
    # Slack caps header blocks at 150; the rest is room for the status emoji.
    alert.header = truncate(alert.header, limits.MAX_HEADER_LENGTH)
    alert.header_when_resolved = truncate(
        alert.header_when_resolved, limits.MAX_HEADER_LENGTH
    )
    alert.text = truncate_body(alert.text, limits.MAX_TEXT_LENGTH)
    alert.text_when_resolved = truncate_body(
        alert.text_when_resolved, limits.MAX_TEXT_LENGTH
    )
    alert.author = truncate(alert.author, limits.MAX_AUTHOR_LENGTH)
    alert.host = truncate(alert.host, limits.MAX_HOST_LENGTH)
    alert.username = truncate(alert.username, limits.MAX_USERNAME_LENGTH)
    alert.footer = truncate(alert.footer, limits.MAX_FOOTER_LENGTH)


def _clean_webhook(hook: Webhook) -> None:
    hook.id = trim_space(hook.id)
    hook.button_text = trim_space(hook.button_text)
    hook.url = trim_space(hook.url)
    hook.confirmation_text = trim_space(hook.confirmation_text)

    if hook.button_style == _DEFAULT_BUTTON_STYLE:
        hook.button_style = ""

    for text_input in hook.plain_text_input or []:
        if text_input is None:
            continue
        text_input.id = trim_space(text_input.id)
        text_input.description = trim_space(text_input.description)
        text_input.initial_value = trim_space(text_input.initial_value)

    for checkbox in hook.checkbox_input or []:
        if checkbox is None:
            continue
        checkbox.id = trim_space(checkbox.id)
        checkbox.label = trim_space(checkbox.label)


def _escalation_sort_key(esc: Escalation | None) -> tuple[bool, int]:
    # Missing entries sort first; the sort is stable for equal delays.
    if esc is None:
        return (False, 0)
    return (True, esc.delay_seconds)
