"""Diagnostic checks and repairs for expertise files."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from agentkb.types import ExpertiseRecord


@dataclass(frozen=True)
class LineError:
    """A line of an expertise file that does not parse as a record."""

    line: int
    message: str


@dataclass
class FileScan:
    """The outcome of checking every line of an expertise file."""

    valid: int = 0
    errors: list[LineError] = field(default_factory=list)
    good_lines: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def cleaned_text(self) -> str:
        """The file's content with only the parseable lines kept."""
        return "\n".join(self.good_lines) + "\n"


def scan_expertise_text(content: str) -> FileScan:
    """Check each non-blank line of JSONL content; line numbers start at 1."""
    scan = FileScan()
    for number, raw in enumerate(content.split("\n"), start=1):
        line = raw.strip()
        if not line:
            continue
        try:
            ExpertiseRecord.from_json(line)
        except (ValueError, TypeError) as exc:
            scan.errors.append(LineError(line=number, message=str(exc)))
        else:
            scan.valid += 1
            scan.good_lines.append(line)
    return scan


def repair_expertise_file(path: str | os.PathLike[str]) -> int:
    """Remove unparseable lines from a file and return how many were removed.

    The file is left untouched when every line parses or it does not exist.
    """
    target = Path(path)
    try:
        content = target.read_text(encoding="utf-8")
    except FileNotFoundError:
        return 0
    scan = scan_expertise_text(content)
    if scan.ok:
        return 0
    target.write_text(scan.cleaned_text, encoding="utf-8")
    return len(scan.errors)


def find_orphan_files(
    expertise_dir: str | os.PathLike[str], domains: Iterable[str]
) -> list[Path]:
    """JSONL files in the expertise directory that belong to no configured domain."""
    directory = Path(expertise_dir)
    if not directory.is_dir():
        return []
    known = set(domains)
    return sorted(
        entry
        for entry in directory.iterdir()
        if entry.suffix == ".jsonl" and entry.stem not in known
    )