"""Alert record definitions.

Attributes are snake_case in Python and camelCase on the wire; the wire
names are a compatibility contract with alert producers. Enumerated values
(severity, button style, ...) are carried as plain strings so the cleaning
pass sees exactly what the producer sent. List entries may be ``None``:
cleaning skips them and validation rejects them.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from src.alerts.identity import format_rfc3339_nano, identity_hash
from src.alerts.severity import AlertSeverity

# Zero instant; always older than the staleness threshold, so a
# producer that leaves the timestamp unset gets "now" during cleaning.
ZERO_TIME = datetime(1, 1, 1, tzinfo=UTC)


class WireModel(BaseModel):
    """Base for all wire records: camelCase aliases, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _null_means_default(cls, data: Any) -> Any:
        """Treat an explicit ``null`` on a non-nullable field as absent."""
        if not isinstance(data, dict):
            return data
        non_nullable: set[str] = set()
        for name, info in cls.model_fields.items():
            if type(None) not in get_args(info.annotation):
                non_nullable.update((name, info.alias or to_camel(name)))
        return {
            key: value
            for key, value in data.items()
            if value is not None or key not in non_nullable
        }


class AlertField(WireModel):
    """Compact title/value pair, rendered two columns side by side."""

    title: str = ""
    value: str = ""


class Escalation(WireModel):
    """Escalation point, triggered *delay_seconds* after issue creation."""

    severity: str = ""
    delay_seconds: int = 0
    slack_mentions: list[str] | None = Field(default_factory=list)
    move_to_channel: str = ""


class WebhookPlainTextInput(WireModel):
    """Text input shown in a webhook's modal dialog."""

    id: str = ""
    description: str = ""
    min_length: int = 0
    max_length: int = 0
    multiline: bool = False
    initial_value: str = ""


class WebhookCheckboxOption(WireModel):
    value: str = ""
    text: str = ""
    selected: bool = False


class WebhookCheckboxInput(WireModel):
    """Checkbox group shown in a webhook's modal dialog."""

    id: str = ""
    label: str = ""
    options: list[WebhookCheckboxOption | None] | None = Field(default_factory=list)


class Webhook(WireModel):
    """Interactive button on the issue post.

    *url* is either an absolute http(s) URL, or an opaque identifier for a
    custom handler registered with the backend.
    """

    id: str = ""
    url: str = ""
    confirmation_text: str = ""
    button_text: str = ""
    button_style: str = ""
    access_level: str = ""
    display_mode: str = ""
    payload: dict[str, Any] | None = None
    plain_text_input: list[WebhookPlainTextInput | None] | None = Field(default_factory=list)
    checkbox_input: list[WebhookCheckboxInput | None] | None = Field(default_factory=list)


class Alert(WireModel):
    """A single inbound alert.

    Alerts sharing a *correlation_id* are grouped into one issue downstream.
    If *slack_channel_id* and *route_key* are both set, the channel ID wins;
    if both are empty the router's fallback mapping (if any) applies.
    """

    timestamp: datetime = ZERO_TIME
    correlation_id: str = ""
    type: str = ""
    header: str = ""
    header_when_resolved: str = ""
    text: str = ""
    text_when_resolved: str = ""
    fallback_text: str = ""
    author: str = ""
    host: str = ""
    footer: str = ""
    link: str = ""
    issue_follow_up_enabled: bool = False
    auto_resolve_seconds: int = 0
    auto_resolve_as_inconclusive: bool = False
    severity: str = ""
    slack_channel_id: str = ""
    route_key: str = ""
    username: str = ""
    icon_emoji: str = ""
    fields: list[AlertField | None] | None = Field(default_factory=list)
    notification_delay_seconds: int = 0
    archiving_delay_seconds: int = 0
    escalation: list[Escalation | None] | None = Field(default_factory=list)
    ignore_if_text_contains: list[str] | None = Field(default_factory=list)
    webhooks: list[Webhook | None] | None = Field(default_factory=list)
    metadata: dict[str, Any] | None = Field(default_factory=dict)
    # Deprecated, accepted for compatibility and otherwise ignored.
    fail_on_rate_limit_error: bool = False

    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v

    def unique_id(self) -> str:
        """Stable storage key for this alert.

        Only meaningful once the alert has been cleaned, since cleaning
        rewrites several of the hashed fields.

        Timestamps are held at microsecond precision. A producer sending
        nanosecond fractions (e.g. ``.123456789Z``) has them truncated on
        parse, so its own key for the same alert may differ.
        """
        return identity_hash(
            "alert",
            self.slack_channel_id,
            self.route_key,
            self.correlation_id,
            format_rfc3339_nano(self.timestamp),
            self.header,
            self.text,
        )


class MoveMapping(WireModel):
    """Records that an issue was moved from one channel to another.

    New alerts with the same correlation ID arriving for *channel_id* are
    processed in *target_channel_id* instead.
    """

    channel_id: str
    correlation_id: str
    target_channel_id: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def unique_id(self) -> str:
        return identity_hash("move_mapping", self.channel_id, self.correlation_id)


# ── Constructors ────────────────────────────────────────────────


def new_alert(severity: AlertSeverity | str) -> Alert:
    """Return an alert with the given severity, stamped with the current time."""
    return Alert(timestamp=datetime.now(UTC), severity=str(severity), metadata={})


def new_panic_alert() -> Alert:
    return new_alert(AlertSeverity.PANIC)


def new_error_alert() -> Alert:
    return new_alert(AlertSeverity.ERROR)


def new_warning_alert() -> Alert:
    return new_alert(AlertSeverity.WARNING)


def new_resolved_alert() -> Alert:
    return new_alert(AlertSeverity.RESOLVED)


def new_info_alert() -> Alert:
    return new_alert(AlertSeverity.INFO)
