"""Read-only legality checks for cleaned alerts.

Checks run in a fixed order and validation stops at the first violation:
producers get one precise reason at a time rather than a list of errors.
Length bounds are measured in UTF-8 bytes.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from urllib.parse import SplitResult, urlsplit

from src.alerts import limits
from src.alerts.exceptions import AlertValidationError
from src.alerts.severity import (
    ESCALATION_SEVERITIES,
    escalation_severity_is_valid,
    severity_is_valid,
    valid_severities,
)
from src.alerts.text import byte_len, is_printable_ascii
from src.alerts.types import (
    Alert,
    WebhookCheckboxInput,
    WebhookPlainTextInput,
)
from src.alerts.webhooks import (
    valid_webhook_access_levels,
    valid_webhook_button_styles,
    valid_webhook_display_modes,
    webhook_access_level_is_valid,
    webhook_button_style_is_valid,
    webhook_display_mode_is_valid,
)

AlertCheck = Callable[[Alert], None]


def validate_alert(alert: Alert | None) -> None:
    """Validate *alert*, raising on the first violated rule.

    Raises:
        AlertValidationError: With a reason naming the offending field.
    """
    if alert is None:
        raise AlertValidationError("alert is nil")

    for check in ALERT_CHECKS:
        check(alert)


# ── Top-level checks ────────────────────────────────────────────


def validate_slack_channel_id_and_route_key(alert: Alert) -> None:
    """A valid channel ID takes precedence; otherwise bound the route key.

    Both may be empty, in which case routing falls back to its default.
    """
    if alert.slack_channel_id:
        if not limits.SLACK_CHANNEL_ID_OR_NAME_RE.match(alert.slack_channel_id):
            raise AlertValidationError(
                f"slackChannelId '{alert.slack_channel_id}' is not valid"
            )
        return

    if byte_len(alert.route_key) > limits.MAX_ROUTE_KEY_LENGTH:
        raise AlertValidationError(
            f"routeKey is too long, expected length <={limits.MAX_ROUTE_KEY_LENGTH}"
        )


def validate_header_and_text(alert: Alert) -> None:
    if not alert.header and not alert.text:
        raise AlertValidationError("header and text cannot both be empty")


def validate_icon(alert: Alert) -> None:
    if alert.icon_emoji and not limits.ICON_RE.match(alert.icon_emoji):
        raise AlertValidationError(f"iconEmoji '{alert.icon_emoji}' is not valid")


def validate_link(alert: Alert) -> None:
    if not alert.link:
        return

    parsed = parse_absolute_url(alert.link)
    if parsed is None or not parsed.scheme:
        raise AlertValidationError("link is not a valid absolute URL")


def validate_severity(alert: Alert) -> None:
    if not severity_is_valid(alert.severity):
        raise AlertValidationError(
            f"severity '{alert.severity}' is not valid, "
            f"expected one of [{', '.join(valid_severities())}]"
        )


def validate_correlation_id(alert: Alert) -> None:
    if byte_len(alert.correlation_id) > limits.MAX_CORRELATION_ID_LENGTH:
        raise AlertValidationError(
            "correlationId is too long, "
            f"expected length <={limits.MAX_CORRELATION_ID_LENGTH}"
        )


def validate_auto_resolve(alert: Alert) -> None:
    """Auto-resolve bounds only apply when issue follow-up is enabled."""
    if not alert.issue_follow_up_enabled:
        return

    if alert.auto_resolve_seconds < limits.MIN_AUTO_RESOLVE_SECONDS:
        raise AlertValidationError(
            f"autoResolveSeconds {alert.auto_resolve_seconds} is too low, "
            f"expected value >={limits.MIN_AUTO_RESOLVE_SECONDS}"
        )

    if alert.auto_resolve_seconds > limits.MAX_AUTO_RESOLVE_SECONDS:
        raise AlertValidationError(
            f"autoResolveSeconds {alert.auto_resolve_seconds} is too high, "
            f"expected value <={limits.MAX_AUTO_RESOLVE_SECONDS}"
        )


def validate_fields(alert: Alert) -> None:
    if len(alert.fields or []) > limits.MAX_FIELD_COUNT:
        raise AlertValidationError(
            f"too many fields, expected <={limits.MAX_FIELD_COUNT}"
        )


def validate_webhooks(alert: Alert) -> None:
    """Validate webhook buttons and their modal inputs.

    Webhook IDs are unique across the alert. Input IDs share one namespace
    per webhook, covering both plain-text and checkbox inputs.
    """
    if alert.webhooks is None:
        return

    if len(alert.webhooks) > limits.MAX_WEBHOOK_COUNT:
        raise AlertValidationError(
            f"too many webhooks, expected <={limits.MAX_WEBHOOK_COUNT}"
        )

    webhook_ids: set[str] = set()

    for i, hook in enumerate(alert.webhooks):
        path = f"webhook[{i}]"

        if hook is None:
            raise AlertValidationError(f"{path} is nil")

        if not hook.id:
            raise AlertValidationError(f"{path}.id is required")
        if byte_len(hook.id) > limits.MAX_WEBHOOK_ID_LENGTH:
            raise AlertValidationError(
                f"{path}.id is too long, expected length <={limits.MAX_WEBHOOK_ID_LENGTH}"
            )
        if hook.id in webhook_ids:
            raise AlertValidationError(f"{path}.id must be unique")
        webhook_ids.add(hook.id)

        _validate_webhook_url(path, hook.url)

        if not hook.button_text:
            raise AlertValidationError(f"{path}.buttonText is required")
        if byte_len(hook.button_text) > limits.MAX_WEBHOOK_BUTTON_TEXT_LENGTH:
            raise AlertValidationError(
                f"{path}.buttonText is too long, "
                f"expected length <={limits.MAX_WEBHOOK_BUTTON_TEXT_LENGTH}"
            )

        if byte_len(hook.confirmation_text) > limits.MAX_WEBHOOK_CONFIRMATION_TEXT_LENGTH:
            raise AlertValidationError(
                f"{path}.confirmationText is too long, "
                f"expected length <={limits.MAX_WEBHOOK_CONFIRMATION_TEXT_LENGTH}"
            )

        if hook.button_style and not webhook_button_style_is_valid(hook.button_style):
            raise AlertValidationError(
                f"{path}.buttonStyle '{hook.button_style}' is not valid, "
                f"expected empty or one of [{', '.join(valid_webhook_button_styles())}]"
            )

        if hook.access_level and not webhook_access_level_is_valid(hook.access_level):
            raise AlertValidationError(
                f"{path}.accessLevel '{hook.access_level}' is not valid, "
                f"expected empty or one of [{', '.join(valid_webhook_access_levels())}]"
            )

        if hook.display_mode and not webhook_display_mode_is_valid(hook.display_mode):
            raise AlertValidationError(
                f"{path}.displayMode '{hook.display_mode}' is not valid, "
                f"expected empty or one of [{', '.join(valid_webhook_display_modes())}]"
            )

        if len(hook.payload or {}) > limits.MAX_WEBHOOK_PAYLOAD_COUNT:
            raise AlertValidationError(
                f"{path}.payload item count is too large, "
                f"expected <={limits.MAX_WEBHOOK_PAYLOAD_COUNT}"
            )

        text_inputs = hook.plain_text_input or []
        checkbox_inputs = hook.checkbox_input or []

        if len(text_inputs) > limits.MAX_WEBHOOK_PLAIN_TEXT_INPUT_COUNT:
            raise AlertValidationError(
                f"{path}.plainTextInput item count is too large, "
                f"expected <={limits.MAX_WEBHOOK_PLAIN_TEXT_INPUT_COUNT}"
            )

        if len(checkbox_inputs) > limits.MAX_WEBHOOK_CHECKBOX_INPUT_COUNT:
            raise AlertValidationError(
                f"{path}.checkboxInput item count is too large, "
                f"expected <={limits.MAX_WEBHOOK_CHECKBOX_INPUT_COUNT}"
            )

        input_ids: set[str] = set()

        for j, text_input in enumerate(text_inputs):
            _validate_plain_text_input(f"{path}.plainTextInput[{j}]", text_input, input_ids)

        for j, checkbox in enumerate(checkbox_inputs):
            _validate_checkbox_input(f"{path}.checkboxInput[{j}]", checkbox, input_ids)


def validate_escalation(alert: Alert) -> None:
    """Validate escalation points.

    Delays must increase by at least the minimum spacing from one entry to
    the next. Cleaning sorts the list, but this check does not rely on it.
    """
    if alert.escalation is None:
        return

    if len(alert.escalation) > limits.MAX_ESCALATION_COUNT:
        raise AlertValidationError(
            f"too many escalation points, expected <={limits.MAX_ESCALATION_COUNT}"
        )

    previous_delay = 0

    for i, esc in enumerate(alert.escalation):
        path = f"escalation[{i}]"

        if esc is None:
            raise AlertValidationError(f"{path} is nil")

        if esc.delay_seconds < limits.MIN_ESCALATION_DELAY_SECONDS:
            raise AlertValidationError(
                f"{path}.delaySeconds '{esc.delay_seconds}' is too low, "
                f"expected value >={limits.MIN_ESCALATION_DELAY_SECONDS}"
            )

        if (
            previous_delay > 0
            and esc.delay_seconds - previous_delay < limits.MIN_ESCALATION_DELAY_DIFF_SECONDS
        ):
            raise AlertValidationError(
                f"{path}.delaySeconds '{esc.delay_seconds}' is too small compared to "
                "previous escalation, "
                f"expected diff >={limits.MIN_ESCALATION_DELAY_DIFF_SECONDS}"
            )

        previous_delay = esc.delay_seconds

        if not escalation_severity_is_valid(esc.severity):
            raise AlertValidationError(
                f"{path}.severity '{esc.severity}' is not valid, "
                f"expected one of [{', '.join(s.value for s in ESCALATION_SEVERITIES)}]"
            )

        mentions = esc.slack_mentions or []

        if len(mentions) > limits.MAX_ESCALATION_SLACK_MENTION_COUNT:
            raise AlertValidationError(
                f"{path}.slackMentions item count is too large, "
                f"expected <={limits.MAX_ESCALATION_SLACK_MENTION_COUNT}"
            )

        for j, mention in enumerate(mentions):
            if not limits.SLACK_MENTION_RE.match(mention):
                raise AlertValidationError(f"{path}.slackMentions[{j}] is not valid")

        if esc.move_to_channel and not limits.SLACK_CHANNEL_ID_OR_NAME_RE.match(
            esc.move_to_channel
        ):
            raise AlertValidationError(f"{path}.moveToChannel is not valid")


def validate_ignore_if_text_contains(alert: Alert) -> None:
    items = alert.ignore_if_text_contains or []

    if len(items) > limits.MAX_IGNORE_IF_TEXT_CONTAINS_COUNT:
        raise AlertValidationError(
            "too many ignoreIfTextContains items, "
            f"expected <={limits.MAX_IGNORE_IF_TEXT_CONTAINS_COUNT}"
        )

    for i, item in enumerate(items):
        if byte_len(item) > limits.MAX_IGNORE_IF_TEXT_CONTAINS_LENGTH:
            raise AlertValidationError(
                f"ignoreIfTextContains[{i}] is too long, "
                f"expected length <={limits.MAX_IGNORE_IF_TEXT_CONTAINS_LENGTH}"
            )


ALERT_CHECKS: tuple[AlertCheck, ...] = (
    validate_slack_channel_id_and_route_key,
    validate_header_and_text,
    validate_icon,
    validate_link,
    validate_severity,
    validate_correlation_id,
    validate_auto_resolve,
    validate_fields,
    validate_webhooks,
    validate_escalation,
    validate_ignore_if_text_contains,
)


# ── Nested webhook checks ───────────────────────────────────────


def _validate_webhook_url(path: str, url: str) -> None:
    if not url:
        raise AlertValidationError(f"{path}.url is required")

    if byte_len(url) > limits.MAX_WEBHOOK_URL_LENGTH:
        raise AlertValidationError(
            f"{path}.url is too long, expected length <={limits.MAX_WEBHOOK_URL_LENGTH}"
        )

    # http(s) targets must be absolute URLs; anything else names a custom handler.
    if url.lower().startswith("http"):
        parsed = parse_absolute_url(url)
        if parsed is None or not parsed.scheme or not parsed.netloc:
            raise AlertValidationError(f"{path}.url is not a valid absolute URL")
    elif not is_printable_ascii(url):
        raise AlertValidationError(
            f"{path}.url contains invalid characters, expected printable ASCII"
        )


def _validate_plain_text_input(
    path: str,
    text_input: WebhookPlainTextInput | None,
    input_ids: set[str],
) -> None:
    if text_input is None:
        raise AlertValidationError(f"{path} is nil")

    _claim_input_id(path, text_input.id, input_ids)

    if byte_len(text_input.description) > limits.MAX_WEBHOOK_INPUT_DESCRIPTION_LENGTH:
        raise AlertValidationError(
            f"{path}.description is too long, "
            f"expected <={limits.MAX_WEBHOOK_INPUT_DESCRIPTION_LENGTH}"
        )

    ceiling = limits.MAX_WEBHOOK_INPUT_TEXT_LENGTH

    if text_input.min_length < 0:
        raise AlertValidationError(f"{path}.minLength must be >=0")
    if text_input.min_length > ceiling:
        raise AlertValidationError(f"{path}.minLength must be <={ceiling}")
    if text_input.max_length < 0:
        raise AlertValidationError(f"{path}.maxLength must be >=0")
    if text_input.max_length > ceiling:
        raise AlertValidationError(f"{path}.maxLength must be <={ceiling}")
    if text_input.max_length < text_input.min_length:
        raise AlertValidationError(f"{path}.maxLength cannot be smaller than minLength")

    initial_len = byte_len(text_input.initial_value)
    if initial_len > text_input.max_length:
        raise AlertValidationError(
            f"{path}.initialValue cannot be longer than maxLength"
        )
    if initial_len < text_input.min_length:
        raise AlertValidationError(
            f"{path}.initialValue cannot be shorter than minLength"
        )


def _validate_checkbox_input(
    path: str,
    checkbox: WebhookCheckboxInput | None,
    input_ids: set[str],
) -> None:
    if checkbox is None:
        raise AlertValidationError(f"{path} is nil")

    _claim_input_id(path, checkbox.id, input_ids)

    if byte_len(checkbox.label) > limits.MAX_WEBHOOK_INPUT_LABEL_LENGTH:
        raise AlertValidationError(
            f"{path}.label is too long, expected <={limits.MAX_WEBHOOK_INPUT_LABEL_LENGTH}"
        )

    options = checkbox.options or []

    if len(options) > limits.MAX_WEBHOOK_CHECKBOX_OPTION_COUNT:
        raise AlertValidationError(
            f"{path}.options item count is too large, "
            f"expected <={limits.MAX_WEBHOOK_CHECKBOX_OPTION_COUNT}"
        )

    values: set[str] = set()

    for k, option in enumerate(options):
        option_path = f"{path}.options[{k}]"

        if option is None:
            raise AlertValidationError(f"{option_path} is nil")

        if not option.value:
            raise AlertValidationError(f"{option_path}.value is required")
        if byte_len(option.value) > limits.MAX_CHECKBOX_OPTION_VALUE_LENGTH:
            raise AlertValidationError(
                f"{option_path}.value is too long, "
                f"expected <={limits.MAX_CHECKBOX_OPTION_VALUE_LENGTH}"
            )
        if option.value in values:
            raise AlertValidationError(f"{option_path}.value must be unique")
        values.add(option.value)

        if byte_len(option.text) > limits.MAX_WEBHOOK_CHECKBOX_OPTION_TEXT_LENGTH:
            raise AlertValidationError(
                f"{option_path}.text is too long, "
                f"expected <={limits.MAX_WEBHOOK_CHECKBOX_OPTION_TEXT_LENGTH}"
            )


def _claim_input_id(path: str, input_id: str, input_ids: set[str]) -> None:
    if not input_id:
        raise AlertValidationError(f"{path}.id is required")
    if input_id in input_ids:
        raise AlertValidationError(f"{path}.id must be unique among all inputs")
    input_ids.add(input_id)
    if byte_len(input_id) > limits.MAX_WEBHOOK_INPUT_ID_LENGTH:
        raise AlertValidationError(
            f"{path}.id is too long, expected <={limits.MAX_WEBHOOK_INPUT_ID_LENGTH}"
        )


# ── URL parsing ─────────────────────────────────────────────────

# Any ASCII character a URL host may not contain. Non-ASCII hosts pass.
_INVALID_HOST_CHAR_RE = re.compile(r"[^A-Za-z0-9\-._~!$&'()*+,;=:\[\]%<>\"\x80-\U0010ffff]")


def parse_absolute_url(value: str) -> SplitResult | None:
    """Parse *value* as an absolute URI or absolute path.

    Returns None when the value is neither, contains control characters, or
    carries a malformed host/port. Callers decide whether a scheme and host
    are required.
    """
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in value):
        return None

    try:
        parsed = urlsplit(value)
        parsed.port  # noqa: B018
    except ValueError:
        return None

    if not parsed.scheme and not value.startswith("/"):
        return None

    host = parsed.netloc.rpartition("@")[2]
    if _INVALID_HOST_CHAR_RE.search(host):
        return None

    return parsed
