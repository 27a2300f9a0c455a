"""Finding and removing duplicate records within a domain."""

from __future__ import annotations

from collections.abc import Sequence

from agentkb.types import (
    Convention,
    Decision,
    ExpertiseRecord,
    Failure,
    Guide,
    Pattern,
    RecordType,
    Reference,
)


def identity_key(record: ExpertiseRecord) -> str:
    """The key under which two records count as the same entry."""
    if isinstance(record, Convention):
        detail = record.content
    elif isinstance(record, (Pattern, Reference, Guide)):
        detail = record.name
    elif isinstance(record, Failure):
        detail = record.description
    elif isinstance(record, Decision):
        detail = record.title
    else:
        raise TypeError(f"unsupported record: {type(record).__name__}")
    return f"{record.record_type.value}:{detail}"


def find_compact_groups(records: Sequence[ExpertiseRecord]) -> dict[RecordType, list[int]]:
    """Group record indices by type, keeping only types with more than one record."""
    groups: dict[RecordType, list[int]] = {}
    for index, record in enumerate(records):
        groups.setdefault(record.record_type, []).append(index)
    return {rtype: indices for rtype, indices in groups.items() if len(indices) > 1}


def dedupe_records(records: Sequence[ExpertiseRecord]) -> list[ExpertiseRecord]:
    """Drop records sharing an identity key, keeping the newest of each.

    On equal timestamps the later record wins. Survivors keep their order.
    """
    seen: dict[str, int] = {}
    removed: set[int] = set()
    for index, record in enumerate(records):
        key = identity_key(record)
        previous = seen.get(key)
        if previous is None:
            seen[key] = index
        elif record.recorded_at >= records[previous].recorded_at:
            removed.add(previous)
            seen[key] = index
        else:
            removed.add(index)
    return [record for index, record in enumerate(records) if index not in removed]