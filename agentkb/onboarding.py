"""Choosing the agent instruction file that receives onboarding content."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path

ONBOARD_CONTENT = """## Knowledge
This project uses kb to build knowledge across different domains in this project.
At session start, use `kb prime` or `kb prime --files <path>` to regain the knowledge.
After compaction or context clear, re-prime with `kb prime` to restore context.
At session end, or when an important decision is made, use `kb learn` to remember how to persist knowledge.
Use `kb record <domain> --type <convention|pattern|decision|failure|reference|guide> --description <...>` and `kb sync` to persist.
Record WHY and WHICH approach, not implementation details readable from code. Use stable references (doc paths, module names), not line numbers."""


class OnboardTarget(str, Enum):
    """Which instruction file to write to."""

    AUTO = "auto"
    AGENTS = "agents"
    CLAUDE = "claude"
    COPILOT = "copilot"
    CODEX = "codex"
    OPENCODE = "opencode"

    @property
    def relative_path(self) -> str | None:
        """The file this target names, or None for auto-discovery."""
        return _TARGET_PATHS.get(self)


_TARGET_PATHS = {
    OnboardTarget.AGENTS: "AGENTS.md",
    OnboardTarget.CLAUDE: "CLAUDE.md",
    OnboardTarget.COPILOT: ".github/copilot-instructions.md",
    OnboardTarget.CODEX: "CODEX.md",
    OnboardTarget.OPENCODE: ".opencode/instructions.md",
}

# Auto-discovery order.
TARGET_FILES = (
    "AGENTS.md",
    "CLAUDE.md",
    ".github/copilot-instructions.md",
    "CODEX.md",
    ".opencode/instructions.md",
)


def resolve_target_file(
    cwd: str | os.PathLike[str], target: OnboardTarget | str = OnboardTarget.AUTO
) -> Path:
    """The file to write: the one named, else the first existing, else AGENTS.md."""
    base = Path(cwd)
    chosen = OnboardTarget(target)
    relative = chosen.relative_path
    if relative is not None:
        return base / relative
    for candidate in TARGET_FILES:
        path = base / candidate
        if path.exists():
            return path
    return base / "AGENTS.md"


def target_display_name(
    path: str | os.PathLike[str], cwd: str | os.PathLike[str]
) -> str:
    """The path relative to ``cwd`` when it lies inside it, else the path itself."""
    path = Path(path)
    try:
        return str(path.relative_to(cwd))
    except ValueError:
        return str(path)