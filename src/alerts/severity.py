"""Alert severity taxonomy."""

from __future__ import annotations

from enum import StrEnum


class AlertSeverity(StrEnum):
    """Severity of an alert, rendered as the ``:status:`` emoji.

    ``resolved`` closes a previous panic/error/warning issue, while ``info``
    is meant for fire-and-forget status messages. The two are not
    interchangeable even though they share the lowest priority.
    """

    PANIC = "panic"
    ERROR = "error"
    WARNING = "warning"
    RESOLVED = "resolved"
    INFO = "info"


_SEVERITY_VALUES = frozenset(s.value for s in AlertSeverity)

_PRIORITY: dict[AlertSeverity, int] = {
    AlertSeverity.PANIC: 3,
    AlertSeverity.ERROR: 2,
    AlertSeverity.WARNING: 1,
    AlertSeverity.RESOLVED: 0,
    AlertSeverity.INFO: 0,
}

# Severities an issue may escalate into.
ESCALATION_SEVERITIES: tuple[AlertSeverity, ...] = (
    AlertSeverity.PANIC,
    AlertSeverity.ERROR,
    AlertSeverity.WARNING,
)


def severity_is_valid(value: str) -> bool:
    """Return True if *value* is one of the known severities."""
    return value in _SEVERITY_VALUES


def severity_priority(value: str) -> int:
    """Return the comparison weight of *value*, or -1 if it is unknown."""
    if not severity_is_valid(value):
        return -1
    return _PRIORITY[AlertSeverity(value)]


def escalation_severity_is_valid(value: str) -> bool:
    return value in ESCALATION_SEVERITIES


def valid_severities() -> list[str]:
    return [s.value for s in AlertSeverity]
