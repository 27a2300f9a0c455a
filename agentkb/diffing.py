"""Comparing expertise records against an earlier git revision."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Iterable
from dataclasses import dataclass, field

from agentkb.types import ExpertiseRecord


@dataclass
class RecordDiff:
    """Records present only in the current state or only in the old one."""

    added: list[ExpertiseRecord] = field(default_factory=list)
    removed: list[ExpertiseRecord] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.added and not self.removed


def parse_jsonl(content: str) -> list[ExpertiseRecord]:
    """Parse JSONL content into records, skipping blank and invalid lines."""
    records = []
    for line in content.splitlines():
        if not line.strip():
            continue
        try:
            records.append(ExpertiseRecord.from_json(line))
        except ValueError:
            continue
    return records


def read_file_at_ref(
    cwd: str | os.PathLike[str], git_ref: str, rel_path: str
) -> str | None:
    """Return a file's content at a git ref, or None if git cannot provide it."""
    try:
        result = subprocess.run(
            ["git", "show", f"{git_ref}:{rel_path}"],
            cwd=cwd,
            capture_output=True,
            check=False,
        )
    except OSError:
        return None
    if result.returncode != 0:
        return None
    return result.stdout.decode("utf-8", errors="replace")


def _by_id(records: Iterable[ExpertiseRecord]) -> dict[str, ExpertiseRecord]:
    return {record.id: record for record in records if record.id is not None}


def diff_records(
    current: Iterable[ExpertiseRecord], old: Iterable[ExpertiseRecord]
) -> RecordDiff:
    """Compare two record sets by ID; records without an ID are ignored."""
    current_ids = _by_id(current)
    old_ids = _by_id(old)
    return RecordDiff(
        added=[r for rid, r in current_ids.items() if rid not in old_ids],
        removed=[r for rid, r in old_ids.items() if rid not in current_ids],
    )