import pytest

from agentkb.guard import AccessEntry, HookInput, guard_message


def test_hook_input_defaults_inactive():
    hook = HookInput.from_json('{"session_id": "s1"}')
    assert hook == HookInput(session_id="s1", stop_hook_active=False)


def test_hook_input_active_flag():
    assert HookInput.from_json('{"session_id": "s1", "stop_hook_active": true}').stop_hook_active


@pytest.mark.parametrize("text", ['{"stop_hook_active": false}', "[]", "not json"])
def test_hook_input_invalid(text):
    with pytest.raises(ValueError):
        HookInput.from_json(text)


def test_active_hook_never_blocks():
    hook = HookInput(session_id="s1", stop_hook_active=True)
    assert guard_message(hook, [AccessEntry(session_id="s1", tool="query")]) is None


def test_unused_session_does_not_block():
    hook = HookInput(session_id="s1")
    assert guard_message(hook, []) is None
    assert guard_message(hook, [AccessEntry(session_id="other", tool="query")]) is None


def test_learn_already_called_does_not_block():
    hook = HookInput(session_id="s1")
    entries = [
        AccessEntry(session_id="s1", tool="query", domain="api"),
        AccessEntry(session_id="s1", tool="learn", signal="skipped"),
    ]
    assert guard_message(hook, entries) is None


def test_message_lists_sorted_unique_domains():
    hook = HookInput(session_id="s1")
    entries = [
        AccessEntry(session_id="s1", tool="query", domain="web"),
        AccessEntry(session_id="s1", tool="search", domain="api"),
        AccessEntry(session_id="s1", tool="query", domain="web"),
        AccessEntry(session_id="other", tool="query", domain="zzz"),
    ]
    message = guard_message(hook, entries)
    assert "Active domains: api, web" in message.splitlines()
    assert "zzz" not in message
    assert message.splitlines()[-1] == "  kb learn --skip --session s1"


def test_message_without_domains():
    hook = HookInput(session_id="s1")
    message = guard_message(hook, [AccessEntry(session_id="s1", tool="prime")])
    assert "Active domains: (no specific domains)" in message
    assert message.startswith("kb was used this session but `kb learn` was not called.")