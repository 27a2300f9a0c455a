from pathlib import Path

from agentkb.doctor import (
    FileScan,
    LineError,
    find_orphan_files,
    repair_expertise_file,
    scan_expertise_text,
)
from agentkb.types import Classification, Convention, ExpertiseRecord, Guide


def _convention(content: str) -> Convention:
    return Convention(
        content=content,
        classification=Classification.FOUNDATIONAL,
        recorded_at="2024-01-01T00:00:00.000Z",
    )


def _guide(name: str) -> Guide:
    return Guide(
        name=name,
        description="how to",
        classification=Classification.TACTICAL,
        recorded_at="2024-01-01T00:00:00.000Z",
    )


def test_scan_all_valid():
    text = "\n".join([_convention("a").to_json(), _guide("g").to_json()]) + "\n"
    scan = scan_expertise_text(text)
    assert scan.valid == 2
    assert scan.errors == []
    assert scan.ok


def test_scan_reports_bad_lines_with_numbers():
    text = "\n".join(
        [
            _convention("a").to_json(),
            "",
            "not json",
            '{"type":"convention"}',
            _guide("g").to_json(),
        ]
    )
    scan = scan_expertise_text(text)
    assert scan.valid == 2
    assert [e.line for e in scan.errors] == [3, 4]
    assert all(isinstance(e, LineError) and e.message for e in scan.errors)
    assert not scan.ok


def test_scan_empty_content():
    scan = scan_expertise_text("")
    assert scan == FileScan()
    assert scan.ok


def test_scan_good_lines_are_trimmed():
    line = _convention("x").to_json()
    scan = scan_expertise_text(f"   {line}   \n")
    assert scan.good_lines == [line]


def test_repair_removes_bad_lines(tmp_path: Path):
    path = tmp_path / "d.jsonl"
    good = [_convention("one").to_json(), _guide("two").to_json()]
    path.write_text(f"{good[0]}\ngarbage\n{good[1]}\n{{}}\n", encoding="utf-8")

    removed = repair_expertise_file(path)

    assert removed == 2
    assert path.read_text(encoding="utf-8") == "\n".join(good) + "\n"
    rescan = scan_expertise_text(path.read_text(encoding="utf-8"))
    assert rescan.ok
    assert rescan.valid == 2
    records = [ExpertiseRecord.from_json(l) for l in rescan.good_lines]
    assert [r.to_json() for r in records] == good


def test_repair_leaves_clean_file_untouched(tmp_path: Path):
    path = tmp_path / "d.jsonl"
    original = "\n" + _convention("ok").to_json() + "\n\n"
    path.write_text(original, encoding="utf-8")
    assert repair_expertise_file(path) == 0
    assert path.read_text(encoding="utf-8") == original


def test_repair_missing_file(tmp_path: Path):
    path = tmp_path / "missing.jsonl"
    assert repair_expertise_file(path) == 0
    assert not path.exists()


def test_find_orphan_files(tmp_path: Path):
    for name in ("api.jsonl", "old.jsonl", "zeta.jsonl", "notes.txt"):
        (tmp_path / name).write_text("", encoding="utf-8")
    orphans = find_orphan_files(tmp_path, ["api", "db"])
    assert orphans == [tmp_path / "old.jsonl", tmp_path / "zeta.jsonl"]


def test_find_orphan_files_none_when_all_known(tmp_path: Path):
    (tmp_path / "api.jsonl").write_text("", encoding="utf-8")
    assert find_orphan_files(tmp_path, ["api"]) == []


def test_find_orphan_files_missing_dir(tmp_path: Path):
    assert find_orphan_files(tmp_path / "nope", ["api"]) == []