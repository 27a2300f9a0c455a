from pathlib import Path

import pytest

from agentkb.onboarding import (
    TARGET_FILES,
    OnboardTarget,
    resolve_target_file,
    target_display_name,
)


@pytest.mark.parametrize(
    "target, expected",
    [
        (OnboardTarget.AGENTS, "AGENTS.md"),
        (OnboardTarget.CLAUDE, "CLAUDE.md"),
        (OnboardTarget.COPILOT, ".github/copilot-instructions.md"),
        (OnboardTarget.CODEX, "CODEX.md"),
        (OnboardTarget.OPENCODE, ".opencode/instructions.md"),
    ],
)
def test_explicit_targets(tmp_path: Path, target, expected):
    assert resolve_target_file(tmp_path, target) == tmp_path / expected


def test_explicit_target_ignores_existing_files(tmp_path: Path):
    (tmp_path / "AGENTS.md").write_text("x", encoding="utf-8")
    assert resolve_target_file(tmp_path, "claude") == tmp_path / "CLAUDE.md"


def test_auto_defaults_to_agents(tmp_path: Path):
    assert resolve_target_file(tmp_path) == tmp_path / "AGENTS.md"


def test_auto_picks_existing_file(tmp_path: Path):
    (tmp_path / "CODEX.md").write_text("x", encoding="utf-8")
    assert resolve_target_file(tmp_path, OnboardTarget.AUTO) == tmp_path / "CODEX.md"


def test_auto_respects_discovery_order(tmp_path: Path):
    (tmp_path / ".github").mkdir()
    (tmp_path / ".github" / "copilot-instructions.md").write_text("x", encoding="utf-8")
    (tmp_path / "CLAUDE.md").write_text("x", encoding="utf-8")
    assert resolve_target_file(tmp_path) == tmp_path / "CLAUDE.md"


def test_auto_result_is_always_a_known_target(tmp_path: Path):
    (tmp_path / ".opencode").mkdir()
    (tmp_path / ".opencode" / "instructions.md").write_text("x", encoding="utf-8")
    resolved = resolve_target_file(tmp_path)
    assert target_display_name(resolved, tmp_path) in {
        str(Path(t)) for t in TARGET_FILES
    }


def test_invalid_target_raises(tmp_path: Path):
    with pytest.raises(ValueError):
        resolve_target_file(tmp_path, "notepad")


def test_display_name_relative(tmp_path: Path):
    path = tmp_path / ".github" / "copilot-instructions.md"
    assert target_display_name(path, tmp_path) == str(
        Path(".github/copilot-instructions.md")
    )


def test_display_name_outside_cwd(tmp_path: Path):
    other = tmp_path / "other" / "CLAUDE.md"
    cwd = tmp_path / "project"
    assert target_display_name(other, cwd) == str(other)


@pytest.mark.parametrize(
    "target",
    [t for t in OnboardTarget if t is not OnboardTarget.AUTO],
)
def test_relative_path_matches_resolution(tmp_path: Path, target):
    resolved = resolve_target_file(tmp_path, target)
    assert resolved == tmp_path / target.relative_path
    assert target_display_name(resolved, tmp_path) == str(Path(target.relative_path))


def test_auto_has_no_relative_path_and_resolves_by_discovery(tmp_path: Path):
    assert OnboardTarget.AUTO.relative_path is None
    (tmp_path / "CLAUDE.md").write_text("x", encoding="utf-8")
    assert resolve_target_file(tmp_path, OnboardTarget.AUTO) == tmp_path / "CLAUDE.md"