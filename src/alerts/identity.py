"""Deterministic storage identifiers for alerts and move mappings."""

from __future__ import annotations

import base64
import hashlib
from datetime import UTC, datetime

_DELIMITER = b"\x00"


def identity_hash(*parts: str) -> str:
    """Fingerprint an ordered sequence of strings.

    Each part is followed by a NUL byte, so both the order of the parts and
    the boundaries between them affect the result (``"ab", "c"`` and
    ``"a", "bc"`` hash differently). The digest is URL-safe base64 without
    padding, usable as-is in URLs and as a database key.
    """
    h = hashlib.sha256()
    for part in parts:
        h.update(part.encode("utf-8"))
        h.update(_DELIMITER)
    return base64.urlsafe_b64encode(h.digest()).rstrip(b"=").decode("ascii")


def format_rfc3339_nano(ts: datetime) -> str:
    """Format *ts* in UTC as RFC 3339 with trailing fractional zeros removed.

    Naive datetimes are taken to be UTC already.
    """
    if ts.tzinfo is not None:
        ts = ts.astimezone(UTC)
    base = ts.replace(tzinfo=None, microsecond=0).isoformat(timespec="seconds")
    fraction = f"{ts.microsecond:06d}".rstrip("0")
    if fraction:
        return f"{base}.{fraction}Z"
    return f"{base}Z"
