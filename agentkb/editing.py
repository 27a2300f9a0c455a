"""Applying field edits to an existing expertise record."""

from __future__ import annotations

from dataclasses import dataclass

from agentkb.types import (
    Classification,
    Convention,
    Decision,
    ExpertiseRecord,
    Failure,
    Guide,
    Outcome,
    OutcomeStatus,
    Pattern,
    Reference,
)


@dataclass
class RecordEdit:
    """Requested changes to a record; fields left as None stay untouched."""

    classification: str | None = None
    content: str | None = None
    name: str | None = None
    description: str | None = None
    resolution: str | None = None
    title: str | None = None
    rationale: str | None = None
    files: str | None = None
    relates_to: str | None = None
    supersedes: str | None = None
    outcome_status: str | None = None
    outcome_duration: float | None = None
    outcome_test_results: str | None = None
    outcome_agent: str | None = None


def parse_csv(text: str) -> list[str]:
    """Split a comma-separated value, trimming parts and dropping empty ones."""
    return [part.strip() for part in text.split(",") if part.strip()]


def parse_classification(text: str) -> Classification:
    """Parse a classification name, raising ValueError for unknown names."""
    try:
        return Classification(str(text))
    except ValueError:
        raise ValueError(f"Invalid classification: {text}") from None


def parse_outcome_status(text: str) -> OutcomeStatus:
    """Parse an outcome status name, raising ValueError for unknown names."""
    try:
        return OutcomeStatus(str(text))
    except ValueError:
        raise ValueError(f"Invalid outcome status: {text}") from None


def apply_edit(record: ExpertiseRecord, edit: RecordEdit) -> ExpertiseRecord:
    """Apply an edit to a record in place and return it.

    Fields that do not belong to the record's type are ignored. Invalid
    classification or outcome status values raise ValueError before any
    change is made.
    """
    classification = (
        parse_classification(edit.classification) if edit.classification is not None else None
    )
    status = (
        parse_outcome_status(edit.outcome_status) if edit.outcome_status is not None else None
    )

    if classification is not None:
        record.classification = classification
    if edit.relates_to is not None:
        record.relates_to = parse_csv(edit.relates_to)
    if edit.supersedes is not None:
        record.supersedes = parse_csv(edit.supersedes)

    if status is not None:
        outcome = Outcome(
            status=status,
            duration=edit.outcome_duration,
            test_results=edit.outcome_test_results,
            agent=edit.outcome_agent,
        )
        record.outcomes = [*(record.outcomes or []), outcome]

    if isinstance(record, Convention):
        if edit.content is not None:
            record.content = edit.content
    elif isinstance(record, (Pattern, Reference)):
        if edit.name is not None:
            record.name = edit.name
        if edit.description is not None:
            record.description = edit.description
        if edit.files is not None:
            record.files = parse_csv(edit.files)
    elif isinstance(record, Failure):
        if edit.description is not None:
            record.description = edit.description
        if edit.resolution is not None:
            record.resolution = edit.resolution
    elif isinstance(record, Decision):
        if edit.title is not None:
            record.title = edit.title
        if edit.rationale is not None:
            record.rationale = edit.rationale
    elif isinstance(record, Guide):
        if edit.name is not None:
            record.name = edit.name
        if edit.description is not None:
            record.description = edit.description

    return record