"""Alert records and the clean/validate pipeline."""

from src.alerts.callback import WebhookCallback
from src.alerts.cleaning import clean_alert
from src.alerts.codec import dump_alert, dumps_alert, parse_alert, parse_alerts
from src.alerts.exceptions import AlertError, AlertParseError, AlertValidationError
from src.alerts.identity import identity_hash
from src.alerts.pipeline import prepare_alert, should_ignore
from src.alerts.severity import AlertSeverity, severity_is_valid, severity_priority
from src.alerts.types import (
    Alert,
    AlertField,
    Escalation,
    MoveMapping,
    Webhook,
    WebhookCheckboxInput,
    WebhookCheckboxOption,
    WebhookPlainTextInput,
    new_alert,
    new_error_alert,
    new_info_alert,
    new_panic_alert,
    new_resolved_alert,
    new_warning_alert,
)
from src.alerts.validation import validate_alert
from src.alerts.webhooks import WebhookAccessLevel, WebhookButtonStyle, WebhookDisplayMode

__all__ = [
    "Alert",
    "AlertError",
    "AlertField",
    "AlertParseError",
    "AlertSeverity",
    "AlertValidationError",
    "Escalation",
    "MoveMapping",
    "Webhook",
    "WebhookAccessLevel",
    "WebhookButtonStyle",
    "WebhookCallback",
    "WebhookCheckboxInput",
    "WebhookCheckboxOption",
    "WebhookDisplayMode",
    "WebhookPlainTextInput",
    "clean_alert",
    "dump_alert",
    "dumps_alert",
    "identity_hash",
    "new_alert",
    "new_error_alert",
    "new_info_alert",
    "new_panic_alert",
    "new_resolved_alert",
    "new_warning_alert",
    "parse_alert",
    "parse_alerts",
    "prepare_alert",
    "severity_is_valid",
    "severity_priority",
    "should_ignore",
    "validate_alert",
]
