"""Callback delivered to a webhook target when a user clicks its button."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import Field

from src.alerts.types import WireModel


class WebhookCallback(WireModel):
    """Payload posted to a webhook target.

    *payload* is the webhook's own payload merged with the alert metadata.
    *input* holds plain-text input values and *checkbox_input* the selected
    option values, both keyed by input ID.
    """

    id: str = ""
    user_id: str = ""
    user_real_name: str = ""
    channel_id: str = ""
    message_id: str = ""
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    input: dict[str, str] | None = None
    checkbox_input: dict[str, list[str]] | None = None
    payload: dict[str, Any] | None = None

    def get_payload_value(self, key: str) -> Any:
        if self.payload is None:
            return ""
        return self.payload.get(key)

    def get_payload_string(self, key: str) -> str:
        if self.payload is None:
            return ""
        value = self.payload.get(key)
        return value if isinstance(value, str) else ""

    def get_payload_int(self, key: str, default: int) -> int:
        if self.payload is None:
            return default
        value = self.payload.get(key)
        # bool is an int subclass, but not a meaningful one here.
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return default

    def get_payload_bool(self, key: str, default: bool) -> bool:
        if self.payload is None:
            return default
        value = self.payload.get(key)
        return value if isinstance(value, bool) else default

    def get_input_value(self, key: str) -> str:
        if self.input is None:
            return ""
        return self.input.get(key, "")

    def get_checkbox_input_selected_values(self, key: str) -> list[str]:
        if self.checkbox_input is None:
            return []
        return self.checkbox_input.get(key, [])
