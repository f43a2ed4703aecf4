"""Tests for the JSON wire codec."""

from __future__ import annotations

import json

import pytest

from src.alerts.codec import dump_alert, dumps_alert, parse_alert, parse_alerts
from src.alerts.exceptions import AlertParseError
from src.alerts.types import ZERO_TIME, Alert, Escalation


class TestParseAlert:
    def test_from_json_text(self) -> None:
        alert = parse_alert('{"header": "foo", "slackChannelId": "c12345678"}')
        assert alert.header == "foo"
        assert alert.slack_channel_id == "c12345678"

    def test_from_bytes(self) -> None:
        assert parse_alert(b'{"text": "body"}').text == "body"

    def test_from_dict(self) -> None:
        alert = parse_alert({"escalation": [{"severity": "panic", "delaySeconds": 30}]})
        assert alert.escalation == [Escalation(severity="panic", delay_seconds=30)]

    def test_unknown_keys_ignored(self) -> None:
        assert parse_alert('{"header": "x", "color": "red"}').header == "x"

    def test_invalid_json(self) -> None:
        with pytest.raises(AlertParseError):
            parse_alert("{not json")

    def test_null_scalars_take_defaults(self) -> None:
        alert = parse_alert(
            '{"header": "x", "author": null, "autoResolveSeconds": null,'
            ' "timestamp": null, "escalation": [{"severity": null, "delaySeconds": 30}]}'
        )
        assert alert.author == ""
        assert alert.auto_resolve_seconds == 0
        assert alert.timestamp == ZERO_TIME
        assert alert.escalation == [Escalation(delay_seconds=30)]

    def test_nanosecond_timestamp_truncated_to_microseconds(self) -> None:
        alert = parse_alert('{"timestamp": "2024-05-01T12:00:00.123456789Z"}')
        assert alert.timestamp.microsecond == 123456

    def test_null_lists_preserved(self) -> None:
        alert = parse_alert('{"fields": null, "webhooks": [null]}')
        assert alert.fields is None
        assert alert.webhooks == [None]

    def test_wrong_type_names_field(self) -> None:
        with pytest.raises(AlertParseError, match="autoResolveSeconds"):
            parse_alert('{"autoResolveSeconds": "soon"}')


class TestParseAlerts:
    def test_single_object(self) -> None:
        alerts = parse_alerts('{"header": "one"}')
        assert [a.header for a in alerts] == ["one"]

    def test_array(self) -> None:
        alerts = parse_alerts('[{"header": "one"}, {"header": "two"}]')
        assert [a.header for a in alerts] == ["one", "two"]

    def test_scalar_rejected(self) -> None:
        with pytest.raises(AlertParseError, match="expected a JSON object"):
            parse_alerts("42")

    def test_invalid_json(self) -> None:
        with pytest.raises(AlertParseError, match="invalid JSON"):
            parse_alerts("[")

    def test_invalid_utf8(self) -> None:
        with pytest.raises(AlertParseError, match="invalid UTF-8"):
            parse_alerts(b'{"header": "\xff"}')

    def test_bad_element(self) -> None:
        with pytest.raises(AlertParseError, match="^1"):
            parse_alerts('[{"header": "ok"}, {"fields": "nope"}]')


class TestDump:
    def test_camel_case_json_types(self) -> None:
        alert = Alert(header="x", slack_channel_id="C1", auto_resolve_seconds=60)
        data = dump_alert(alert)
        assert data["slackChannelId"] == "C1"
        assert data["autoResolveSeconds"] == 60
        assert isinstance(data["timestamp"], str)
        json.dumps(data)

    def test_dumps_parses_back(self) -> None:
        alert = Alert(header="x", webhooks=[None], metadata={"team": "ops"})
        parsed = parse_alert(dumps_alert(alert))
        assert parsed == alert
