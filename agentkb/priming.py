"""Helpers for building priming output from expertise."""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone

from agentkb.types import (
    Convention,
    Decision,
    ExpertiseRecord,
    Failure,
    Guide,
    Pattern,
    Reference,
)


def estimate_record_text(record: ExpertiseRecord) -> str:
    """A compact one-line rendering of a record, used to estimate its token cost."""
    if isinstance(record, Convention):
        return f"[convention] {record.content}"
    if isinstance(record, Pattern):
        suffix = f" ({', '.join(record.files)})" if record.files else ""
        return f"[pattern] {record.name}: {record.description}{suffix}"
    if isinstance(record, Failure):
        return f"[failure] {record.description} -> {record.resolution}"
    if isinstance(record, Decision):
        return f"[decision] {record.title}: {record.rationale}"
    if isinstance(record, Reference):
        detail = ", ".join(record.files) if record.files else record.description
        return f"[reference] {record.name}: {detail}"
    if isinstance(record, Guide):
        return f"[guide] {record.name}: {record.description}"
    raise TypeError(f"unsupported record: {type(record).__name__}")


def get_file_mod_time(path: str | os.PathLike[str]) -> str | None:
    """A file's modification time as an RFC 3339 UTC timestamp, or None."""
    try:
        mtime_ns = os.stat(path).st_mtime_ns
    except OSError:
        return None
    seconds, nanos = divmod(mtime_ns, 1_000_000_000)
    base = datetime.fromtimestamp(seconds, timezone.utc).strftime("%Y-%m-%dT%H:%M:%S")
    if nanos == 0:
        fraction = ""
    elif nanos % 1_000_000 == 0:
        fraction = f".{nanos // 1_000_000:03d}"
    elif nanos % 1_000 == 0:
        fraction = f".{nanos // 1_000:06d}"
    else:
        fraction = f".{nanos:09d}"
    return f"{base}{fraction}+00:00"


def parse_file_paths(raw: str) -> list[str]:
    """Split a comma- or whitespace-separated list of paths."""
    return [path for chunk in raw.split(",") for path in chunk.split()]


def parse_domain_flag(raw: str) -> list[str]:
    """Split a comma-separated list of domain names."""
    return [part.strip() for part in raw.split(",") if part.strip()]


def _dedupe(items: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(items))


def select_domains(
    available: Sequence[str],
    positional: Iterable[str] = (),
    domain_flag: str | None = None,
    exclude_flag: str | None = None,
) -> list[str]:
    """Work out which domains to prime.

    Positional domains and the ``--domain`` flag are merged without
    duplicates; with none given every available domain is used. Excluded
    domains are then removed. Unknown domains raise ValueError.
    """
    requested = list(positional)
    if domain_flag is not None:
        requested.extend(parse_domain_flag(domain_flag))
    unique = _dedupe(requested)

    listing = ", ".join(available)
    for domain in unique:
        if domain not in available:
            raise ValueError(
                f'Domain "{domain}" not found in config. Available domains: {listing}'
            )

    excluded = parse_domain_flag(exclude_flag) if exclude_flag is not None else []
    for domain in excluded:
        if domain not in available:
            raise ValueError(
                f'Excluded domain "{domain}" not found in config. '
                f"Available domains: {listing}"
            )

    base = unique if unique else list(available)
    return [domain for domain in base if domain not in excluded]