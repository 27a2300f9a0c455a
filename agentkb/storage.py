"""Reading and writing expertise records in JSONL files."""

from __future__ import annotations

import hashlib
import json
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path

from agentkb.types import ExpertiseRecord

_ID_PREFIX = "mx-"
_ID_HASH_LEN = 8


def generate_record_id(record: ExpertiseRecord) -> str:
    """Derive a stable ID from the record's contents, ignoring any existing ID."""
    payload = record.to_dict()
    payload.pop("id", None)
    digest = hashlib.sha256(
        json.dumps(payload, sort_keys=True, ensure_ascii=False).encode("utf-8")
    ).hexdigest()
    return f"{_ID_PREFIX}{digest[:_ID_HASH_LEN]}"


def _ensure_id(record: ExpertiseRecord) -> None:
    if record.id is None:
        record.id = generate_record_id(record)


def _parse_line(line: str) -> ExpertiseRecord:
    raw = json.loads(line)
    if isinstance(raw, dict) and "outcome" in raw and "outcomes" not in raw:
        raw["outcomes"] = [raw.pop("outcome")]
    return ExpertiseRecord.from_dict(raw)


def read_expertise_file(file_path: str | os.PathLike[str]) -> list[ExpertiseRecord]:
    """Read all records from a JSONL file; a missing file yields no records.

    A legacy singular ``outcome`` field is turned into an ``outcomes`` list.
    """
    try:
        content = Path(file_path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    return [_parse_line(line.strip()) for line in content.split("\n") if line.strip()]


def append_record(
    file_path: str | os.PathLike[str], record: ExpertiseRecord
) -> ExpertiseRecord:
    """Append one record to a JSONL file, giving it an ID if it has none."""
    _ensure_id(record)
    with open(file_path, "a", encoding="utf-8") as handle:
        handle.write(record.to_json() + "\n")
    return record


def write_expertise_file(
    file_path: str | os.PathLike[str], records: Iterable[ExpertiseRecord]
) -> list[ExpertiseRecord]:
    """Atomically replace a JSONL file with the given records."""
    records = list(records)
    for record in records:
        _ensure_id(record)

    target = Path(file_path)
    directory = target.parent if str(target.parent) else Path(".")
    fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=f".{target.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            for record in records:
                handle.write(record.to_json() + "\n")
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, target)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
    return records


def create_expertise_file(file_path: str | os.PathLike[str]) -> None:
    """Create (or truncate to) an empty expertise file."""
    Path(file_path).write_text("", encoding="utf-8")