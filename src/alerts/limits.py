"""Field bounds and patterns shared by the cleaning and validation passes.

Most of the length limits mirror Slack Block Kit limits, with some headroom
left for the ``:status:`` emoji substitution done at render time.
"""

from __future__ import annotations

import re
from datetime import timedelta

# ── Timestamps ──────────────────────────────────────────────────

# Timestamps older than this are replaced with the current time.
MAX_TIMESTAMP_AGE = timedelta(days=7)

# ── Alert fields ────────────────────────────────────────────────

MAX_SLACK_CHANNEL_ID_LENGTH = 80
MAX_ROUTE_KEY_LENGTH = 1000
MAX_HEADER_LENGTH = 130
MAX_FALLBACK_TEXT_LENGTH = 150
MAX_TEXT_LENGTH = 10000
MAX_AUTHOR_LENGTH = 100
MAX_HOST_LENGTH = 100
MAX_FOOTER_LENGTH = 300
MAX_USERNAME_LENGTH = 100
MAX_FIELD_TITLE_LENGTH = 30
MAX_FIELD_VALUE_LENGTH = 200
MAX_ICON_EMOJI_LENGTH = 50  # excluding the colons
MAX_MENTION_LENGTH = 20  # excluding the angle brackets
MAX_CORRELATION_ID_LENGTH = 500

MIN_AUTO_RESOLVE_SECONDS = 30
MAX_AUTO_RESOLVE_SECONDS = 63113851  # ~2 years

MAX_IGNORE_IF_TEXT_CONTAINS_LENGTH = 1000
MAX_IGNORE_IF_TEXT_CONTAINS_COUNT = 20

MAX_FIELD_COUNT = 20

# ── Webhooks ────────────────────────────────────────────────────

MAX_WEBHOOK_COUNT = 5
MAX_WEBHOOK_ID_LENGTH = 100
MAX_WEBHOOK_URL_LENGTH = 1000
MAX_WEBHOOK_BUTTON_TEXT_LENGTH = 25
MAX_WEBHOOK_CONFIRMATION_TEXT_LENGTH = 1000
MAX_WEBHOOK_PAYLOAD_COUNT = 50
MAX_WEBHOOK_PLAIN_TEXT_INPUT_COUNT = 10
MAX_WEBHOOK_CHECKBOX_INPUT_COUNT = 10
MAX_WEBHOOK_INPUT_ID_LENGTH = 200
MAX_WEBHOOK_INPUT_DESCRIPTION_LENGTH = 200
MAX_WEBHOOK_INPUT_LABEL_LENGTH = 200
MAX_WEBHOOK_INPUT_TEXT_LENGTH = 3000
MAX_WEBHOOK_CHECKBOX_OPTION_COUNT = 5
MAX_WEBHOOK_CHECKBOX_OPTION_TEXT_LENGTH = 50
MAX_CHECKBOX_OPTION_VALUE_LENGTH = 100

# ── Escalation ──────────────────────────────────────────────────

MAX_ESCALATION_COUNT = 3
MIN_ESCALATION_DELAY_SECONDS = 30
MIN_ESCALATION_DELAY_DIFF_SECONDS = 30
MAX_ESCALATION_SLACK_MENTION_COUNT = 10

# ── Patterns ────────────────────────────────────────────────────

# Slack channel IDs and channel names (names are mapped to IDs downstream).
SLACK_CHANNEL_ID_OR_NAME_RE = re.compile(
    rf"^[0-9a-zA-Z\-_]{{1,{MAX_SLACK_CHANNEL_ID_LENGTH}}}$"
)

# Icon emojis on the format ':emoji:'.
ICON_RE = re.compile(rf"^:[^:]{{1,{MAX_ICON_EMOJI_LENGTH}}}:$")

# <!here>, <!channel> and <@U12345678>.
SLACK_MENTION_RE = re.compile(
    rf"^((<!here>)|(<!channel>)|(<@[^>\s]{{1,{MAX_MENTION_LENGTH}}}>))$"
)
