import pytest

from agentkb.cli import build_parser, parse_args


def test_record_defaults_and_options():
    ns = parse_args(["record", "testing", "Use fixtures", "--type", "convention"])
    assert ns.command == "record"
    assert ns.domain == "testing"
    assert ns.content == "Use fixtures"
    assert ns.record_type == "convention"
    assert ns.classification == "tactical"
    assert ns.force is False
    assert ns.dry_run is False
    assert ns.json is False


def test_record_outcome_duration_is_float():
    ns = parse_args(["record", "d", "--outcome-status", "success", "--outcome-duration", "12.5"])
    assert ns.outcome_status == "success"
    assert ns.outcome_duration == 12.5


def test_invalid_record_type_rejected():
    with pytest.raises(SystemExit):
        parse_args(["record", "d", "--type", "bogus"])


def test_invalid_classification_rejected():
    with pytest.raises(SystemExit):
        parse_args(["edit", "d", "id1", "--classification", "bogus"])


@pytest.mark.parametrize(
    "argv",
    [["--json", "status"], ["status", "--json"]],
)
def test_json_flag_is_global(argv):
    ns = parse_args(argv)
    assert ns.command == "status"
    assert ns.json is True


def test_command_required():
    with pytest.raises(SystemExit):
        parse_args([])


def test_learn_and_diff_since_defaults():
    assert parse_args(["learn"]).since == "HEAD"
    assert parse_args(["diff"]).since == "HEAD~1"


def test_ready_limit_default_and_override():
    assert parse_args(["ready"]).limit == 10
    ns = parse_args(["ready", "--limit", "3", "--since", "7d"])
    assert ns.limit == 3
    assert ns.since == "7d"


def test_prime_positional_domains_and_format():
    ns = parse_args(["prime", "a", "b", "--budget", "500", "--exclude-domain", "c"])
    assert ns.domains == ["a", "b"]
    assert ns.format == "markdown"
    assert ns.budget == 500
    assert ns.exclude_domain == "c"
    assert ns.no_limit is False


def test_prime_rejects_unknown_format():
    with pytest.raises(SystemExit):
        parse_args(["prime", "--format", "html"])


def test_access_log_type_dest():
    ns = parse_args(["access-log", "--type", "query", "--session", "s1"])
    assert ns.command == "access-log"
    assert ns.tool_type == "query"
    assert ns.session == "s1"


def test_session_show():
    ns = parse_args(["session", "show", "abc"])
    assert ns.command == "session"
    assert ns.session_command == "show"
    assert ns.id == "abc"


def test_session_requires_subcommand():
    with pytest.raises(SystemExit):
        parse_args(["session"])


def test_onboard_targets_are_exclusive():
    with pytest.raises(SystemExit):
        parse_args(["onboard", "--agents", "--claude"])


def test_onboard_check_conflicts_with_remove():
    with pytest.raises(SystemExit):
        parse_args(["onboard", "--check", "--remove"])


def test_onboard_single_target():
    ns = parse_args(["onboard", "--claude", "--update"])
    assert ns.claude is True
    assert ns.agents is False
    assert ns.update is True


def test_setup_provider_choices():
    assert parse_args(["setup", "--provider", "cursor"]).provider == "cursor"
    with pytest.raises(SystemExit):
        parse_args(["setup", "--provider", "unknown"])


def test_sync_options():
    ns = parse_args(["sync", "--message", "m", "--no-validate"])
    assert ns.command == "sync"
    assert ns.message == "m"
    assert ns.no_validate is True


def test_build_parser_prog_name():
    assert build_parser().prog == "kb"


def test_query_optional_domain():
    ns = parse_args(["query", "--all", "--sort-by-score"])
    assert ns.domain is None
    assert ns.all is True
    assert ns.sort_by_score is True