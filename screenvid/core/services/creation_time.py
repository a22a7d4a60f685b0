"""Pure parsers for recovering a recording's creation time."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

# Tried in order after RFC3339. The last is naive and read as UTC.
_TAG_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d %H:%M:%S.%f %z",
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M:%S",
)

_FRACTION = re.compile(r"\.(\d+)")

_FILENAME_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_rfc3339(value: str) -> Optional[datetime]:
    """Parse an RFC3339 timestamp; an offset (or ``Z``) is mandatory."""
    text = _six_digit_fraction(value.strip())
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return None
    return parsed


def _six_digit_fraction(text: str) -> str:
    # fromisoformat and %f only take up to six digits; tags may carry 1 to 9.
    return _FRACTION.sub(lambda m: "." + (m.group(1) + "000000")[:6], text, count=1)


def parse_creation_time_tag(value: Optional[str]) -> Optional[datetime]:
    """Parse a container ``creation_time`` tag into an aware UTC datetime.

    Accepted grammars, first match wins:

    * RFC3339 (``2024-10-19T02:51:20.000000Z``)
    * ``2024-10-19 02:51:20.123456 +0200`` (fraction optional, 1 to 9 digits)
    * ``2024-10-19 02:51:20`` (no offset, taken as UTC)
    """
    if not value or not value.strip():
        return None

    parsed = parse_rfc3339(value)
    if parsed is None:
        text = _six_digit_fraction(value.strip())
        for fmt in _TAG_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
            except ValueError:
                continue
            break

    if parsed is None:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_time_from_filename(path: str | Path) -> Optional[datetime]:
    """Recover the timestamp embedded in ``<x>_<y>_YYYY-MM-DD_HH-MM-SS.ext``.

    The wall-clock value is declared UTC without any timezone conversion.
    """
    filename = Path(path).name
    parts = filename.split("_")
    if len(parts) < 4:
        return None

    date_part = parts[2]
    time_part = parts[3].split(".")[0]
    try:
        naive = datetime.strptime(
            f"{date_part} {time_part.replace('-', ':')}", _FILENAME_FORMAT
        )
    except ValueError:
        return None
    return naive.replace(tzinfo=timezone.utc)
