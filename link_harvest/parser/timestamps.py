"""
Best-effort conversion of chat date tokens into epoch seconds.

Exports disagree on locale: ``3/1/24, 10:00:15``, ``2024-03-01 10:00``,
``01.03.24, 10:00``, ``3/1/24, 10:00 PM`` (often with a narrow no-break space
before the meridiem). Tokens are normalised and tried against ISO-8601 first,
then each configured ``strptime`` format. Naive values are read as local
time. Anything else yields ``None`` and the caller substitutes the current
time.
"""

from __future__ import annotations

import re
import time
from datetime import datetime
from typing import Iterable

_STRIP_RE = re.compile(r"[\[\],]")
_SPACE_RE = re.compile(r"\s+")


def normalize_date_token(raw: str) -> str:
    """Drop bracket/comma punctuation and collapse exotic whitespace."""
    return _SPACE_RE.sub(" ", _STRIP_RE.sub("", raw)).strip()


def parse_timestamp(raw: str, formats: Iterable[str]) -> float | None:
    """
    Parse ``raw`` into epoch seconds.

    :param raw: Date token as captured from the chat line.
    :param formats: ``strptime`` formats tried in order after ISO-8601.
    :returns: Epoch seconds, or ``None`` when no format matches.
    """
    token = normalize_date_token(raw)
    if not token:
        return None

    try:
        return datetime.fromisoformat(token).timestamp()
    except ValueError:
        pass

    for fmt in formats:
        try:
            return datetime.strptime(token, fmt).timestamp()
        except ValueError:
            continue
    return None


def timestamp_or_now(raw: str, formats: Iterable[str]) -> float:
    """Parsed timestamp, or the wall-clock time when ``raw`` is unparseable."""
    parsed = parse_timestamp(raw, formats)
    return parsed if parsed is not None else time.time()


__all__ = ["normalize_date_token", "parse_timestamp", "timestamp_or_now"]
