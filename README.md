# agentkb

A library for a structured knowledge base for AI coding agents. Knowledge is
split into *domains*, and each domain is stored as a JSONL file of expertise
records: conventions, patterns, failures, decisions, references and guides.
Every record carries a classification (foundational, tactical or
observational).

## Records

Records are dataclasses in `agentkb.types`. They serialize to a JSON object
tagged by a `"type"` field.

```python
from agentkb.types import ExpertiseRecord

record = ExpertiseRecord.from_json(
    '{"type":"convention","content":"Always use snake_case",'
    '"classification":"foundational","recorded_at":"2024-01-01T00:00:00.000Z"}'
)
line = record.to_json()
```

The record classes are `Convention`, `Pattern`, `Failure`, `Decision`,
`Reference` and `Guide`, built with keyword arguments. Patterns, decisions,
references and guides are "named" types (`is_named_type()` returns true).
`from_dict` / `from_json` raise `ValueError` for missing or mistyped fields
and unknown types.

Outcomes (`Outcome`, with an `OutcomeStatus` of success, failure or partial)
and evidence (`Evidence`: commit, date, issue, file, bead) can be attached to
any record. The enums `RecordType`, `Classification` and `OutcomeStatus`
print as their lowercase value.

## Storage

```python
from pathlib import Path
from agentkb.storage import (
    create_expertise_file,
    read_expertise_file,
    append_record,
    write_expertise_file,
)

path = Path("backend.jsonl")
create_expertise_file(path)          # creates or empties the file
append_record(path, record)          # assigns an id if the record has none
records = read_expertise_file(path)  # a missing file reads as no records
write_expertise_file(path, records)  # atomic: temporary file, then rename
```

Ids are made by `generate_record_id`: `mx-` followed by the first eight hex
digits of a SHA-256 over the record's content. Lines that use an older single
`outcome` field are read as if they held an `outcomes` list with that entry.

## Configuration

`KbConfig` holds the list of domains, governance limits (`Governance`) and
shelf lives (`ClassificationDefaults`, `ShelfLife`). Defaults: version `"1"`,
no domains, 100 / 150 / 200 entries for the max, warn and hard limits, and
shelf lives of 14 days for tactical and 30 for observational records.

```python
from agentkb.types import KbConfig

config = KbConfig()
text = config.to_yaml()
assert KbConfig.from_yaml(text).governance.max_entries == 100
```

## Working with records

- `agentkb.editing` — `RecordEdit` and `apply_edit` change fields of a record
  in place and append an outcome; fields that do not belong to the record's
  type are ignored. `parse_csv`, `parse_classification` and
  `parse_outcome_status` read command-line style values.
- `agentkb.compaction` — `find_compact_groups` maps each record type with
  more than one record to its indices; `dedupe_records` keeps only the newest
  record for each `identity_key` (on equal timestamps the later one wins).
- `agentkb.diffing` — `diff_records` compares two record sets by id and
  returns a `RecordDiff`; `read_file_at_ref` runs `git show` to load a file
  at a git ref, and `parse_jsonl` parses it, skipping bad lines.
- `agentkb.querying` — `filter_records` by type, classification or outcome
  status, and `last_updated` for the latest `recorded_at`.
- `agentkb.recent` — `parse_duration` understands `30m`, `24h`, `7d`, `2w`;
  `recent_records` lists `(domain, record)` pairs newest first, limited in
  number and optionally to those since a duration.
- `agentkb.priming` — `select_domains`, `parse_domain_flag`,
  `parse_file_paths`, `estimate_record_text` and `get_file_mod_time`.
- `agentkb.doctor` — `scan_expertise_text` reports unparseable lines as
  `LineError`s in a `FileScan`; `repair_expertise_file` drops them and
  returns how many; `find_orphan_files` lists `.jsonl` files belonging to no
  domain.
- `agentkb.onboarding` — `resolve_target_file` picks the agent instruction
  file (`AGENTS.md`, `CLAUDE.md`, `.github/copilot-instructions.md`,
  `CODEX.md`, `.opencode/instructions.md`) by `OnboardTarget`, and
  `target_display_name` shows it relative to a directory. `ONBOARD_CONTENT`
  holds the onboarding text.
- `agentkb.guard` — `HookInput.from_json` reads stop-hook input and
  `guard_message` returns a reminder when a session used the knowledge base
  (per its `AccessEntry` list) without running `learn`, else `None`.
- `agentkb.cli` — `build_parser` and `parse_args` define the subcommands and
  options of a `kb` command line and return the parsed arguments.

## What this package does not do

There is no installed command: `agentkb.cli` only parses arguments and does
not run any subcommand. The package does not create or manage a `.kb`
directory or its config file on disk, resolve records by id prefix, lock
files, keep an access log, search or score records, format priming prompts
or apply a token budget, write onboarding sections into files, or commit to
git. It provides the record model, JSONL storage and the helpers listed
above for building those on top.