"""JSON wire codec for alerts (camelCase keys)."""

from __future__ import annotations

import json
from typing import Any

from pydantic import TypeAdapter, ValidationError

from src.alerts.exceptions import AlertParseError
from src.alerts.types import Alert

_ALERT_LIST = TypeAdapter(list[Alert])


def parse_alert(raw: str | bytes | dict[str, Any]) -> Alert:
    """Decode a single alert from JSON text or an already-decoded mapping.

    Raises:
        AlertParseError: If the input is not valid JSON or does not match
            the alert shape (e.g. a string where a number is expected).
    """
    try:
        if isinstance(raw, dict):
            return Alert.model_validate(raw)
        return Alert.model_validate_json(raw)
    except ValidationError as exc:
        raise AlertParseError(_describe(exc)) from exc


def parse_alerts(raw: str | bytes) -> list[Alert]:
    """Decode either a single alert object or an array of alerts."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise AlertParseError(f"invalid JSON: {exc.msg}") from exc
    except UnicodeDecodeError as exc:
        raise AlertParseError(
            f"invalid UTF-8 at byte {exc.start}: {exc.reason}"
        ) from exc

    if isinstance(data, dict):
        return [parse_alert(data)]
    if not isinstance(data, list):
        raise AlertParseError("expected a JSON object or an array of objects")

    try:
        return _ALERT_LIST.validate_python(data)
    except ValidationError as exc:
        raise AlertParseError(_describe(exc)) from exc


def dump_alert(alert: Alert) -> dict[str, Any]:
    """Return the wire representation of *alert* as JSON-compatible data."""
    return alert.model_dump(mode="json", by_alias=True)


def dumps_alert(alert: Alert, indent: int | None = None) -> str:
    return alert.model_dump_json(by_alias=True, indent=indent)


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0]
    loc = ".".join(str(part) for part in first["loc"])
    if loc:
        return f"{loc}: {first['msg']}"
    return first["msg"]
