"""Closed value sets for interactive webhook buttons.

An empty string on any of these fields means "use the default" and is
handled by the caller; it is never a member of the set itself.
"""

from __future__ import annotations

from enum import StrEnum


class WebhookButtonStyle(StrEnum):
    """Slack button style."""

    PRIMARY = "primary"
    DANGER = "danger"


class WebhookAccessLevel(StrEnum):
    """Who may click a webhook button."""

    GLOBAL_ADMINS = "global_admins"
    CHANNEL_ADMINS = "channel_admins"
    CHANNEL_MEMBERS = "channel_members"


class WebhookDisplayMode(StrEnum):
    """When a webhook button is visible on the issue post."""

    ALWAYS = "always"
    OPEN_ISSUE = "open_issue"
    RESOLVED_ISSUE = "resolved_issue"


_BUTTON_STYLES = frozenset(s.value for s in WebhookButtonStyle)
_ACCESS_LEVELS = frozenset(a.value for a in WebhookAccessLevel)
_DISPLAY_MODES = frozenset(m.value for m in WebhookDisplayMode)


def webhook_button_style_is_valid(value: str) -> bool:
    return value in _BUTTON_STYLES


def valid_webhook_button_styles() -> list[str]:
    return [s.value for s in WebhookButtonStyle]


def webhook_access_level_is_valid(value: str) -> bool:
    return value in _ACCESS_LEVELS


def valid_webhook_access_levels() -> list[str]:
    return [a.value for a in WebhookAccessLevel]


def webhook_display_mode_is_valid(value: str) -> bool:
    return value in _DISPLAY_MODES


def valid_webhook_display_modes() -> list[str]:
    return [m.value for m in WebhookDisplayMode]
