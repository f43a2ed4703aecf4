"""String normalization and unicode-safe truncation helpers.

Lengths here are counted in codepoints, so multi-byte characters are never
split.
"""

from __future__ import annotations

ELLIPSIS = "..."
CODE_FENCE = "```"
STATUS_PLACEHOLDER = ":status:"

# Unicode White_Space characters. Narrower than str.strip(), which also
# removes the ASCII separators \x1c-\x1f.
WHITESPACE = (
    "\t\n\v\f\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


def trim_space(value: str) -> str:
    return value.strip(WHITESPACE)


def truncate(value: str, max_len: int) -> str:
    """Shorten *value* to *max_len* codepoints, ending with an ellipsis.

    Whitespace left exposed by the cut is stripped before the ellipsis is
    appended, so the result may be slightly shorter than *max_len*.
    """
    if len(value) <= max_len:
        return value
    return trim_space(value[: max_len - len(ELLIPSIS)]) + ELLIPSIS


def truncate_keep_whitespace(value: str, max_len: int) -> str:
    """Like :func:`truncate`, but the result is always exactly *max_len* long."""
    if len(value) <= max_len:
        return value
    return value[: max_len - len(ELLIPSIS)] + ELLIPSIS


def truncate_body(value: str, max_len: int) -> str:
    """Truncate markdown body text, keeping a trailing code fence balanced."""
    if len(value) <= max_len:
        return value

    if value.endswith(CODE_FENCE):
        suffix = ELLIPSIS + CODE_FENCE
        return trim_space(value[: max_len - len(suffix)]) + suffix

    return truncate(value, max_len)


def collapse_newlines(value: str) -> str:
    return value.replace("\n", " ")


def strip_status_placeholder(value: str) -> str:
    return value.replace(STATUS_PLACEHOLDER, "")


def is_printable_ascii(value: str) -> bool:
    """Return True if every character is in the printable ASCII range."""
    return all(0x20 <= ord(ch) <= 0x7E for ch in value)


def byte_len(value: str) -> int:
    """Length of *value* in UTF-8 bytes (the unit validation bounds use)."""
    return len(value.encode("utf-8"))
