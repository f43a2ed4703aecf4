"""Tests for the in-place alert cleaning pass."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from src.alerts.cleaning import clean_alert
from src.alerts.types import (
    Alert,
    AlertField,
    Escalation,
    Webhook,
    WebhookCheckboxInput,
    WebhookPlainTextInput,
)

_NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)


def _alert(**kw: object) -> Alert:
    defaults: dict[str, object] = {
        "timestamp": _NOW - timedelta(minutes=5),
        "header": "Disk full",
    }
    defaults.update(kw)
    return Alert(**defaults)  # type: ignore[arg-type]


def _cleaned(**kw: object) -> Alert:
    alert = _alert(**kw)
    clean_alert(alert, now=_NOW)
    return alert


# ── Timestamp ───────────────────────────────────────────────────


class TestTimestamp:
    def test_recent_timestamp_kept(self) -> None:
        ts = _NOW - timedelta(days=6)
        assert _cleaned(timestamp=ts).timestamp == ts

    def test_stale_timestamp_replaced(self) -> None:
        alert = _cleaned(timestamp=_NOW - timedelta(days=7, seconds=1))
        assert alert.timestamp == _NOW

    def test_unset_timestamp_replaced(self) -> None:
        alert = Alert(header="x")
        clean_alert(alert, now=_NOW)
        assert alert.timestamp == _NOW

    def test_future_timestamp_kept(self) -> None:
        ts = _NOW + timedelta(hours=1)
        assert _cleaned(timestamp=ts).timestamp == ts

    def test_defaults_to_wall_clock(self) -> None:
        alert = Alert(header="x")
        before = datetime.now(UTC)
        clean_alert(alert)
        assert alert.timestamp >= before


# ── Case folding & whitespace ───────────────────────────────────


class TestNormalization:
    def test_channel_upper_cased(self) -> None:
        assert _cleaned(slack_channel_id=" c12345678 ").slack_channel_id == "C12345678"

    def test_separator_characters_not_trimmed(self) -> None:
        assert _cleaned(author="\x1fbot\x1f ").author == "\x1fbot\x1f"

    def test_lower_cased_fields(self) -> None:
        alert = _cleaned(
            type=" Security ",
            route_key=" Infra-Alerts ",
            icon_emoji=" :Fire: ",
            severity=" WARNING ",
        )
        assert alert.type == "security"
        assert alert.route_key == "infra-alerts"
        assert alert.icon_emoji == ":fire:"
        assert alert.severity == "warning"

    def test_headers_collapse_newlines(self) -> None:
        alert = _cleaned(header=" Disk\nfull\n", header_when_resolved="Disk\nok")
        assert alert.header == "Disk full"
        assert alert.header_when_resolved == "Disk ok"

    def test_body_keeps_newlines(self) -> None:
        alert = _cleaned(text="  line1\nline2  ", text_when_resolved="\nok\n")
        assert alert.text == "line1\nline2"
        assert alert.text_when_resolved == "ok"

    def test_fallback_strips_status_placeholder(self) -> None:
        alert = _cleaned(fallback_text=":status: Disk\nfull")
        assert alert.fallback_text == "Disk full"

    def test_context_fields_trimmed(self) -> None:
        alert = _cleaned(
            correlation_id=" abc ",
            username=" bot ",
            author=" ops ",
            host=" web-1 ",
            link=" https://example.com ",
            footer=" footer ",
        )
        assert alert.correlation_id == "abc"
        assert alert.username == "bot"
        assert alert.author == "ops"
        assert alert.host == "web-1"
        assert alert.link == "https://example.com"
        assert alert.footer == "footer"


# ── Truncation ──────────────────────────────────────────────────


class TestTruncation:
    def test_header_truncated_to_limit(self) -> None:
        alert = _cleaned(header="h" * 200, header_when_resolved="r" * 131)
        assert len(alert.header) == 130
        assert alert.header.endswith("...")
        assert len(alert.header_when_resolved) == 130

    def test_fallback_truncated(self) -> None:
        alert = _cleaned(fallback_text="f" * 151)
        assert alert.fallback_text == "f" * 147 + "..."

    def test_body_with_code_fence(self) -> None:
        text = "```" + "x" * 10001 + "```"
        alert = _cleaned(text=text, text_when_resolved=text)
        assert len(alert.text) == 10000
        assert alert.text.endswith("...```")
        assert alert.text_when_resolved == alert.text

    def test_plain_body(self) -> None:
        alert = _cleaned(text="y" * 10500)
        assert len(alert.text) == 10000
        assert alert.text.endswith("y...")

    def test_context_field_limits(self) -> None:
        alert = _cleaned(
            author="a" * 101, host="h" * 101, username="u" * 101, footer="f" * 301
        )
        assert len(alert.author) == 100
        assert len(alert.host) == 100
        assert len(alert.username) == 100
        assert len(alert.footer) == 300

    def test_multibyte_truncation_by_codepoint(self) -> None:
        alert = _cleaned(header="æ" * 131)
        assert alert.header == "æ" * 127 + "..."


# ── Defaults ────────────────────────────────────────────────────


class TestDefaults:
    def test_empty_severity_becomes_error(self) -> None:
        assert _cleaned(severity="").severity == "error"

    def test_legacy_critical_becomes_error(self) -> None:
        assert _cleaned(severity=" CRITICAL ").severity == "error"

    def test_valid_severity_kept(self) -> None:
        assert _cleaned(severity="panic").severity == "panic"

    def test_negative_delays_zeroed(self) -> None:
        alert = _cleaned(archiving_delay_seconds=-5, notification_delay_seconds=-1)
        assert alert.archiving_delay_seconds == 0
        assert alert.notification_delay_seconds == 0

    def test_positive_delays_kept(self) -> None:
        alert = _cleaned(archiving_delay_seconds=60, notification_delay_seconds=30)
        assert alert.archiving_delay_seconds == 60
        assert alert.notification_delay_seconds == 30


# ── Nested collections ──────────────────────────────────────────


class TestFields:
    def test_trimmed_and_truncated(self) -> None:
        alert = _cleaned(
            fields=[AlertField(title=" " + "t" * 40 + " ", value=" " + "v" * 250)]
        )
        field = alert.fields[0]
        assert field is not None
        assert field.title == "t" * 27 + "..."
        assert field.value == "v" * 197 + "..."

    def test_none_entries_skipped(self) -> None:
        alert = _cleaned(fields=[None, AlertField(title=" a ", value=" b ")])
        assert alert.fields[0] is None
        assert alert.fields[1] == AlertField(title="a", value="b")


class TestWebhooks:
    def test_trimmed(self) -> None:
        hook = Webhook(
            id=" restart ",
            url=" https://example.com/hook ",
            button_text=" Restart ",
            confirmation_text=" Sure? ",
            plain_text_input=[
                None,
                WebhookPlainTextInput(id=" reason ", description=" Why ", initial_value=" x "),
            ],
            checkbox_input=[None, WebhookCheckboxInput(id=" opts ", label=" Options ")],
        )
        alert = _cleaned(webhooks=[None, hook])
        cleaned = alert.webhooks[1]
        assert cleaned is not None
        assert cleaned.id == "restart"
        assert cleaned.url == "https://example.com/hook"
        assert cleaned.button_text == "Restart"
        assert cleaned.confirmation_text == "Sure?"
        text_input = cleaned.plain_text_input[1]
        assert text_input is not None
        assert (text_input.id, text_input.description, text_input.initial_value) == (
            "reason",
            "Why",
            "x",
        )
        checkbox = cleaned.checkbox_input[1]
        assert checkbox is not None
        assert (checkbox.id, checkbox.label) == ("opts", "Options")

    def test_default_button_style_cleared(self) -> None:
        alert = _cleaned(webhooks=[Webhook(id="a", button_style="default")])
        assert alert.webhooks[0].button_style == ""

    def test_other_button_style_kept(self) -> None:
        alert = _cleaned(webhooks=[Webhook(id="a", button_style="danger")])
        assert alert.webhooks[0].button_style == "danger"


class TestEscalation:
    def test_sorted_by_delay(self) -> None:
        alert = _cleaned(
            escalation=[
                Escalation(severity="panic", delay_seconds=60),
                Escalation(severity="error", delay_seconds=30),
            ]
        )
        assert [e.delay_seconds for e in alert.escalation] == [30, 60]

    def test_none_sorts_first(self) -> None:
        alert = _cleaned(
            escalation=[
                Escalation(severity="panic", delay_seconds=60),
                None,
                Escalation(severity="error", delay_seconds=30),
            ]
        )
        assert alert.escalation[0] is None
        assert [e.delay_seconds for e in alert.escalation[1:]] == [30, 60]

    def test_entries_normalized(self) -> None:
        alert = _cleaned(
            escalation=[
                Escalation(
                    severity=" PANIC ",
                    delay_seconds=30,
                    slack_mentions=[" <!here> ", "<@U123> "],
                    move_to_channel=" c999 ",
                )
            ]
        )
        esc = alert.escalation[0]
        assert esc.severity == "panic"
        assert esc.slack_mentions == ["<!here>", "<@U123>"]
        assert esc.move_to_channel == "C999"


# ── Idempotence ─────────────────────────────────────────────────


class TestIdempotence:
    def test_second_pass_changes_nothing(self) -> None:
        alert = _alert(
            slack_channel_id=" c1 ",
            header="h\n" * 100,
            text="```" + "x" * 10001 + "```",
            fallback_text=":status: " + "f " * 100,
            severity="critical",
            fields=[AlertField(title="t" * 40, value="v")],
            webhooks=[Webhook(id=" a ", button_style="default")],
            escalation=[
                Escalation(severity="ERROR", delay_seconds=90),
                Escalation(severity="warning", delay_seconds=30),
            ],
        )
        clean_alert(alert, now=_NOW)
        first = alert.model_dump()
        clean_alert(alert, now=_NOW)
        assert alert.model_dump() == first
