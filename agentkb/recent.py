"""Selecting the most recently recorded expertise records."""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

from agentkb.types import ExpertiseRecord

_NUMBER = re.compile(r"[+-]?[0-9]+")

_UNITS = {
    "h": lambda n: timedelta(hours=n),
    "d": lambda n: timedelta(days=n),
    "w": lambda n: timedelta(weeks=n),
    "m": lambda n: timedelta(minutes=n),
}


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``24h``, ``7d``, ``2w`` or ``30m``."""
    text = text.strip()
    if not text:
        raise ValueError("Empty duration string")

    num_str, unit = text[:-1], text[-1]
    if not _NUMBER.fullmatch(num_str):
        raise ValueError(f'Invalid duration number: "{num_str}"')
    try:
        make = _UNITS[unit]
    except KeyError:
        raise ValueError(
            f'Unknown duration unit "{unit}". '
            "Use h (hours), d (days), w (weeks), m (minutes)."
        ) from None
    return make(int(num_str))


def _timestamp_millis(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def recent_records(
    domain_records: Iterable[tuple[str, ExpertiseRecord]],
    limit: int = 10,
    since: str | None = None,
    now: datetime | None = None,
) -> list[tuple[str, ExpertiseRecord]]:
    """Return ``(domain, record)`` pairs, newest first, at most ``limit`` of them.

    With ``since`` (a duration such as ``7d``) only records recorded at or
    after ``now - since`` are kept.
    """
    ordered = sorted(domain_records, key=lambda pair: pair[1].recorded_at, reverse=True)

    if since is not None:
        duration = parse_duration(since)
        current = now if now is not None else datetime.now(timezone.utc)
        cutoff = _timestamp_millis(current - duration)
        ordered = [pair for pair in ordered if pair[1].recorded_at >= cutoff]

    return ordered[: max(limit, 0)]