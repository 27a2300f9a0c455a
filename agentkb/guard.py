"""Stop-hook gate that reminds agents to capture learnings."""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass
class HookInput:
    """The JSON a stop hook receives on standard input."""

    session_id: str
    stop_hook_active: bool = False

    @classmethod
    def from_json(cls, text: str) -> HookInput:
        data: Any = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("invalid type: expected hook input object")
        session_id = data.get("session_id")
        if session_id is None:
            raise ValueError("missing field `session_id`")
        if not isinstance(session_id, str):
            raise ValueError("invalid type for `session_id`: expected a string")
        active = data.get("stop_hook_active", False)
        if not isinstance(active, bool):
            raise ValueError("invalid type for `stop_hook_active`: expected a boolean")
        return cls(session_id=session_id, stop_hook_active=active)


@dataclass
class AccessEntry:
    """One logged use of the knowledge base."""

    session_id: str
    tool: str
    domain: str | None = None
    query: str | None = None
    entry_id: str | None = None
    result_count: int | None = None
    signal: str | None = None
    timestamp: datetime | None = None


def guard_message(hook: HookInput, entries: Iterable[AccessEntry]) -> str | None:
    """Return the blocking reminder, or None when the session may end.

    Only entries of the hook's session count. The session may end when the
    hook is already active, when the knowledge base was not used, or when
    ``learn`` was already run.
    """
    if hook.stop_hook_active:
        return None

    session = [e for e in entries if e.session_id == hook.session_id]
    if not session:
        return None
    if any(e.tool == "learn" for e in session):
        return None

    domains = sorted({e.domain for e in session if e.domain is not None})
    domain_list = ", ".join(domains) if domains else "(no specific domains)"

    return "\n".join(
        [
            "kb was used this session but `kb learn` was not called.",
            "",
            f"Active domains: {domain_list}",
            "",
            "Before ending, please:",
            "  1. Run `kb learn` to review what changed",
            '  2. Run `kb record <domain> --type <type> --description "..."` for each insight',
            "  3. Run `kb sync` to commit knowledge",
            "",
            "If nothing important came up, that's fine:",
            f"  kb learn --skip --session {hook.session_id}",
        ]
    )