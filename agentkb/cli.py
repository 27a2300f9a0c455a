"""Command-line argument definitions for the ``kb`` command."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

_VERSION = "0.3.0"

RECORD_TYPES = ("convention", "pattern", "failure", "decision", "reference", "guide")
CLASSIFICATIONS = ("foundational", "tactical", "observational")
OUTCOME_STATUSES = ("success", "failure", "partial")
PRIME_FORMATS = ("markdown", "xml", "plain")
PROVIDERS = ("claude", "cursor", "codex", "gemini", "windsurf", "aider")


def _global_options() -> argparse.ArgumentParser:
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--json",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Output as structured JSON.",
    )
    return parent


def _add_outcome_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--outcome-status", choices=OUTCOME_STATUSES, help="Outcome status")
    parser.add_argument(
        "--outcome-duration", type=float, help="Outcome duration in milliseconds"
    )
    parser.add_argument("--outcome-test-results", help="Outcome test results summary")
    parser.add_argument("--outcome-agent", help="Outcome agent name")


def _add_record(sub, parents) -> None:
    p = sub.add_parser(
        "record",
        parents=parents,
        help="Record an expertise record (preferences and rationale, "
        "not code-discoverable details)",
    )
    p.add_argument("domain", help="Expertise domain")
    p.add_argument("content", nargs="?", help="Record content (positional)")
    p.add_argument("--type", dest="record_type", choices=RECORD_TYPES, help="Record type")
    p.add_argument(
        "--classification", default="tactical", choices=CLASSIFICATIONS,
        help="Classification level",
    )
    p.add_argument("--name", help="Name (for pattern, reference, guide)")
    p.add_argument(
        "--description", help="Why this approach is preferred, not how it works in code"
    )
    p.add_argument("--resolution", help="Resolution (for failure records)")
    p.add_argument("--title", help="Title (for decision records)")
    p.add_argument("--rationale", help="Rationale (for decision records)")
    p.add_argument("--files", help="Related files (comma-separated)")
    p.add_argument("--tags", help="Comma-separated tags")
    p.add_argument("--evidence-commit", help="Evidence: commit hash")
    p.add_argument("--evidence-issue", help="Evidence: issue reference")
    p.add_argument("--evidence-file", help="Evidence: file path")
    p.add_argument("--evidence-bead", help="Evidence: bead ID")
    p.add_argument("--relates-to", help="Comma-separated record IDs this relates to")
    p.add_argument("--supersedes", help="Comma-separated record IDs this supersedes")
    _add_outcome_options(p)
    p.add_argument("--force", action="store_true", help="Force recording even if duplicate exists")
    p.add_argument("--stdin", action="store_true", help="Read JSON record(s) from stdin")
    p.add_argument("--batch", help="Read JSON record(s) from file")
    p.add_argument(
        "--dry-run", action="store_true", help="Preview what would be recorded without writing"
    )


def _add_edit(sub, parents) -> None:
    p = sub.add_parser("edit", parents=parents, help="Edit an existing record")
    p.add_argument("domain", help="Expertise domain")
    p.add_argument("id", help="Record ID (full, bare hash, or prefix)")
    p.add_argument("--classification", choices=CLASSIFICATIONS, help="New classification")
    p.add_argument("--content", help="New content (convention)")
    p.add_argument("--name", help="New name (pattern, reference, guide)")
    p.add_argument("--description", help="New description")
    p.add_argument("--resolution", help="New resolution (failure)")
    p.add_argument("--title", help="New title (decision)")
    p.add_argument("--rationale", help="New rationale (decision)")
    p.add_argument("--files", help="New files (comma-separated)")
    p.add_argument("--relates-to", help="Comma-separated record IDs this relates to")
    p.add_argument("--supersedes", help="Comma-separated record IDs this supersedes")
    _add_outcome_options(p)


def _add_query(sub, parents) -> None:
    p = sub.add_parser("query", parents=parents, help="Query expertise records")
    p.add_argument("domain", nargs="?", help="Domain to query (omit for all)")
    p.add_argument("--type", dest="record_type", choices=RECORD_TYPES, help="Filter by record type")
    p.add_argument("--classification", choices=CLASSIFICATIONS, help="Filter by classification")
    p.add_argument("--file", help="Filter by file path (substring match)")
    p.add_argument("--outcome-status", choices=OUTCOME_STATUSES, help="Filter by outcome status")
    p.add_argument("--sort-by-score", action="store_true", help="Sort by confirmation score")
    p.add_argument("--all", action="store_true", help="Query all domains")


def _add_search(sub, parents) -> None:
    p = sub.add_parser("search", parents=parents, help="Search records across domains (BM25)")
    p.add_argument("query", nargs="?", help="Search query")
    p.add_argument("--domain", help="Limit to specific domain")
    p.add_argument("--type", dest="record_type", choices=RECORD_TYPES, help="Filter by record type")
    p.add_argument("--tag", help="Filter by tag")
    p.add_argument("--classification", choices=CLASSIFICATIONS, help="Filter by classification")
    p.add_argument("--file", help="Filter by file path")
    p.add_argument("--outcome-status", choices=OUTCOME_STATUSES, help="Filter by outcome status")
    p.add_argument("--sort-by-score", action="store_true", help="Sort by confirmation score")


def _add_prime(sub, parents) -> None:
    p = sub.add_parser("prime", parents=parents, help="Output a priming prompt from expertise")
    p.add_argument("domains", nargs="*", help="Domains to include (positional, optional)")
    p.add_argument("--full", action="store_true", help="Include full metadata")
    p.add_argument("--verbose", action="store_true", help="Verbose output (alias for --full)")
    p.add_argument("--mcp", action="store_true", help="Output for MCP server (JSON)")
    p.add_argument("--format", default="markdown", choices=PRIME_FORMATS, help="Output format")
    p.add_argument("--context", action="store_true", help="Filter by git-changed files")
    p.add_argument("--files", help="Filter by specific file paths (comma-separated)")
    p.add_argument("--export", help="Export to file")
    p.add_argument("--budget", type=int, help="Token budget")
    p.add_argument("--no-limit", action="store_true", help="Remove token budget limit")
    p.add_argument("--domain", help="Limit to specific domain")
    p.add_argument("--exclude-domain", help="Exclude specific domain")


def _add_onboard(sub, parents) -> None:
    p = sub.add_parser(
        "onboard", parents=parents, help="Write onboarding content to agent instruction file"
    )
    target = p.add_mutually_exclusive_group()
    target.add_argument("--auto", action="store_true", help="Auto-discover target file (default).")
    target.add_argument("--agents", action="store_true", help="Write to AGENTS.md.")
    target.add_argument("--claude", action="store_true", help="Write to CLAUDE.md.")
    target.add_argument(
        "--copilot", action="store_true", help="Write to .github/copilot-instructions.md."
    )
    target.add_argument("--codex", action="store_true", help="Write to CODEX.md.")
    target.add_argument(
        "--opencode", action="store_true", help="Write to .opencode/instructions.md."
    )
    p.add_argument(
        "--update", action="store_true", help="Update existing section instead of creating new."
    )
    mode = p.add_mutually_exclusive_group()
    mode.add_argument("--check", action="store_true", help="Check if onboard section is installed.")
    mode.add_argument(
        "--remove", action="store_true", help="Remove the onboard section instead of writing it."
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the full argument parser for ``kb``."""
    parser = argparse.ArgumentParser(prog="kb", description="Let your agents grow")
    parser.add_argument("--version", action="version", version=f"kb {_VERSION}")
    parser.add_argument("--json", action="store_true", default=False,
                        help="Output as structured JSON.")
    parents = [_global_options()]

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    sub.add_parser("init", parents=parents, help="Initialize a .kb directory")

    p = sub.add_parser("add", parents=parents, help="Add a new expertise domain")
    p.add_argument("domain", help="Domain name to add")

    p = sub.add_parser("remove", parents=parents, help="Remove an expertise domain")
    p.add_argument("domain", help="Domain name to remove")
    p.add_argument("--force", action="store_true",
                   help="Force removal even if domain has records")

    _add_record(sub, parents)
    _add_edit(sub, parents)
    _add_query(sub, parents)
    _add_search(sub, parents)

    p = sub.add_parser("delete", parents=parents, help="Delete a record by ID")
    p.add_argument("domain", help="Expertise domain")
    p.add_argument("id", help="Record ID to delete")

    _add_prime(sub, parents)

    sub.add_parser("status", parents=parents, help="Show domain statistics")
    sub.add_parser("validate", parents=parents, help="Validate all records against schema")

    p = sub.add_parser("prune", parents=parents, help="Remove stale records")
    p.add_argument("--dry-run", action="store_true",
                   help="Preview what would be pruned without deleting")

    p = sub.add_parser("doctor", parents=parents, help="Run diagnostic checks")
    p.add_argument("--fix", action="store_true", help="Attempt to fix issues")

    p = sub.add_parser("ready", parents=parents, help="Show recently added/updated records")
    p.add_argument("--limit", type=int, default=10, help="Maximum number of records to show")
    p.add_argument("--domain", help="Filter by domain")
    p.add_argument("--since", help="Show records since duration (e.g., 24h, 7d, 2w)")

    p = sub.add_parser("learn", parents=parents, help="Show changed files and suggest domains")
    p.add_argument("--since", default="HEAD", help="Git ref to compare against")
    p.add_argument("--skip", action="store_true",
                   help="Mark session as reviewed without recording anything")
    p.add_argument("--session", help="Session ID (for access log tracking)")

    p = sub.add_parser("compact", parents=parents, help="Merge/consolidate record groups")
    p.add_argument("--auto", action="store_true", help="Auto-merge without prompting")
    p.add_argument("--dry-run", action="store_true", help="Preview what would be compacted")

    p = sub.add_parser("setup", parents=parents,
                       help="Configure IDE provider recipes and git hooks")
    p.add_argument("--git-hook", action="store_true", help="Install git hook only")
    p.add_argument("--provider", choices=PROVIDERS, help="Provider to configure")

    _add_onboard(sub, parents)

    p = sub.add_parser("sync", parents=parents, help="Validate, stage, and commit .kb/ to git")
    p.add_argument("--message", help="Custom commit message")
    p.add_argument("--no-validate", action="store_true",
                   help="Skip validation before committing")

    p = sub.add_parser("update", parents=parents, help="Check for updates")
    p.add_argument("--check", action="store_true", help="Check for updates without installing")

    p = sub.add_parser("diff", parents=parents, help="Show expertise changes since a git ref")
    p.add_argument("--since", default="HEAD~1", help="Git ref to compare against")

    p = sub.add_parser("access-log", parents=parents, help="Query the access log")
    p.add_argument("--session", help="Filter by session ID")
    p.add_argument("--domain", help="Filter by domain")
    p.add_argument("--type", dest="tool_type",
                   help='Filter by tool type (e.g., "query", "search", "oracle")')

    session = sub.add_parser("session", parents=parents, help="Manage sessions")
    session_sub = session.add_subparsers(dest="session_command", metavar="SUBCOMMAND")
    session_sub.required = True
    session_sub.add_parser("list", parents=parents, help="List all sessions")
    show = session_sub.add_parser("show", parents=parents,
                                  help="Show session detail and access log")
    show.add_argument("id", help="Session ID")

    p = sub.add_parser("check", parents=parents, help="Check file references in records")
    p.add_argument("--domain", help="Limit check to a specific domain")

    sub.add_parser("guard", parents=parents,
                   help="Claude Code stop hook gate (reads JSON from stdin)")
    sub.add_parser("mcp", parents=parents, help="Run the MCP server (stdio transport)")

    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments; exits with usage on errors."""
    return build_parser().parse_args(argv)