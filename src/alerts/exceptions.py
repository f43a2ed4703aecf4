"""Exception hierarchy for alert parsing and validation."""

from __future__ import annotations


class AlertError(Exception):
    """Base exception for all alert errors."""


class AlertParseError(AlertError):
    """Raw producer input could not be decoded into an Alert."""


class AlertValidationError(AlertError):
    """An alert violates one of the validation rules.

    The message names the offending field (with its index path for nested
    values) and is meant to be returned to the producer verbatim.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason
