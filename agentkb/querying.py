"""Filtering expertise records for queries."""

from __future__ import annotations

from collections.abc import Iterable

from agentkb.types import Classification, ExpertiseRecord, OutcomeStatus, RecordType


def _record_type(value: RecordType | str) -> RecordType:
    try:
        return RecordType(value)
    except ValueError:
        raise ValueError(f"Unknown record type: {value}") from None


def _classification(value: Classification | str) -> Classification:
    try:
        return Classification(value)
    except ValueError:
        raise ValueError(f"Unknown classification: {value}") from None


def _outcome_status(value: OutcomeStatus | str) -> OutcomeStatus:
    try:
        return OutcomeStatus(value)
    except ValueError:
        raise ValueError(f"Unknown outcome status: {value}") from None


def filter_records(
    records: Iterable[ExpertiseRecord],
    record_type: RecordType | str | None = None,
    classification: Classification | str | None = None,
    outcome_status: OutcomeStatus | str | None = None,
) -> list[ExpertiseRecord]:
    """Keep records matching every given filter, in their original order.

    A record matches an outcome status if any of its outcomes has it.
    Unknown filter values raise ValueError.
    """
    wanted_type = None if record_type is None else _record_type(record_type)
    wanted_cls = None if classification is None else _classification(classification)
    wanted_status = None if outcome_status is None else _outcome_status(outcome_status)

    def matches(record: ExpertiseRecord) -> bool:
        if wanted_type is not None and record.record_type != wanted_type:
            return False
        if wanted_cls is not None and record.classification != wanted_cls:
            return False
        if wanted_status is not None and not any(
            o.status == wanted_status for o in record.outcomes or ()
        ):
            return False
        return True

    return [record for record in records if matches(record)]


def last_updated(records: Iterable[ExpertiseRecord]) -> str | None:
    """The latest ``recorded_at`` among the records, or None if there are none."""
    return max((record.recorded_at for record in records), default=None)