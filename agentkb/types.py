"""Record, outcome and configuration types for the knowledge base."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

import yaml


class _ValueEnum(str, Enum):
    def __str__(self) -> str:
        return self.value


class RecordType(_ValueEnum):
    CONVENTION = "convention"
    PATTERN = "pattern"
    FAILURE = "failure"
    DECISION = "decision"
    REFERENCE = "reference"
    GUIDE = "guide"


class Classification(_ValueEnum):
    FOUNDATIONAL = "foundational"
    TACTICAL = "tactical"
    OBSERVATIONAL = "observational"


class OutcomeStatus(_ValueEnum):
    SUCCESS = "success"
    FAILURE = "failure"
    PARTIAL = "partial"


# ── Field parsing helpers ──────────────────────────────────────────────────


def _require_mapping(data: Any, what: str) -> Mapping:
    if not isinstance(data, Mapping):
        raise ValueError(f"invalid type: expected {what} object")
    return data


def _req_str(data: Mapping, key: str) -> str:
    if key not in data or data[key] is None:
        raise ValueError(f"missing field `{key}`")
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"invalid type for `{key}`: expected a string")
    return value


def _opt_str(data: Mapping, key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"invalid type for `{key}`: expected a string")
    return value


def _opt_str_list(data: Mapping, key: str) -> list[str] | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"invalid type for `{key}`: expected a list of strings")
    return list(value)


def _enum(enum_cls: type[Enum], data: Mapping, key: str) -> Any:
    if key not in data or data[key] is None:
        raise ValueError(f"missing field `{key}`")
    try:
        return enum_cls(data[key])
    except ValueError:
        raise ValueError(f"unknown variant `{data[key]}` for `{key}`") from None


def _u32(data: Mapping, key: str) -> int:
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < 2**32:
        raise ValueError(f"invalid value for `{key}`: expected an unsigned 32-bit integer")
    return value


def _drop_none(pairs: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in pairs.items() if v is not None}


# ── Supporting types ───────────────────────────────────────────────────────


@dataclass
class Evidence:
    """Where a record's knowledge came from."""

    commit: str | None = None
    date: str | None = None
    issue: str | None = None
    file: str | None = None
    bead: str | None = None

    _KEYS: ClassVar[tuple[str, ...]] = ("commit", "date", "issue", "file", "bead")

    def to_dict(self) -> dict[str, Any]:
        return _drop_none({key: getattr(self, key) for key in self._KEYS})

    @classmethod
    def from_dict(cls, data: Any) -> Evidence:
        data = _require_mapping(data, "evidence")
        return cls(**{key: _opt_str(data, key) for key in cls._KEYS})


@dataclass
class Outcome:
    """The result of applying a record."""

    status: OutcomeStatus
    duration: float | None = None
    test_results: str | None = None
    agent: str | None = None
    notes: str | None = None
    recorded_at: str | None = None

    def __post_init__(self) -> None:
        self.status = OutcomeStatus(self.status)

    def to_dict(self) -> dict[str, Any]:
        return _drop_none(
            {
                "status": self.status.value,
                "duration": self.duration,
                "test_results": self.test_results,
                "agent": self.agent,
                "notes": self.notes,
                "recorded_at": self.recorded_at,
            }
        )

    @classmethod
    def from_dict(cls, data: Any) -> Outcome:
        data = _require_mapping(data, "outcome")
        duration = data.get("duration")
        if duration is not None:
            if isinstance(duration, bool) or not isinstance(duration, (int, float)):
                raise ValueError("invalid type for `duration`: expected a number")
            duration = float(duration)
        return cls(
            status=_enum(OutcomeStatus, data, "status"),
            duration=duration,
            test_results=_opt_str(data, "test_results"),
            agent=_opt_str(data, "agent"),
            notes=_opt_str(data, "notes"),
            recorded_at=_opt_str(data, "recorded_at"),
        )


# ── Expertise records ──────────────────────────────────────────────────────

_REQUIRED = "str"
_OPTIONAL = "opt_str"
_LIST = "opt_list"


@dataclass(kw_only=True)
class ExpertiseRecord:
    """Common fields of every record; serialised with a `type` tag."""

    record_type: ClassVar[RecordType]
    _SPECIFIC: ClassVar[tuple[tuple[str, str], ...]] = ()

    classification: Classification
    recorded_at: str
    id: str | None = None
    evidence: Evidence | None = None
    tags: list[str] | None = None
    relates_to: list[str] | None = None
    supersedes: list[str] | None = None
    outcomes: list[Outcome] | None = None

    def __post_init__(self) -> None:
        if type(self) is ExpertiseRecord:
            raise TypeError("ExpertiseRecord is abstract; use a concrete record type")
        self.classification = Classification(self.classification)

    def is_named_type(self) -> bool:
        """True for types that are upserted by name on duplicates."""
        return self.record_type in _NAMED_TYPES

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.record_type.value}
        if self.id is not None:
            out["id"] = self.id
        for name, kind in self._SPECIFIC:
            value = getattr(self, name)
            if value is None and kind != _REQUIRED:
                continue
            out[name] = list(value) if kind == _LIST else value
        out["classification"] = self.classification.value
        out["recorded_at"] = self.recorded_at
        if self.evidence is not None:
            out["evidence"] = self.evidence.to_dict()
        for name in ("tags", "relates_to", "supersedes"):
            value = getattr(self, name)
            if value is not None:
                out[name] = list(value)
        if self.outcomes is not None:
            out["outcomes"] = [o.to_dict() for o in self.outcomes]
        return out

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Any) -> ExpertiseRecord:
        data = _require_mapping(data, "record")
        tag = data.get("type")
        if tag is None:
            raise ValueError("missing field `type`")
        try:
            record_type = RecordType(tag)
        except ValueError:
            raise ValueError(f"unknown variant `{tag}`") from None
        sub = _REGISTRY[record_type]
        if cls is not ExpertiseRecord and cls is not sub:
            raise ValueError(f"expected a {cls.record_type} record, got `{tag}`")

        kwargs: dict[str, Any] = {}
        for name, kind in sub._SPECIFIC:
            if kind == _REQUIRED:
                kwargs[name] = _req_str(data, name)
            elif kind == _OPTIONAL:
                kwargs[name] = _opt_str(data, name)
            else:
                kwargs[name] = _opt_str_list(data, name)

        evidence = data.get("evidence")
        outcomes = data.get("outcomes")
        if outcomes is not None and not isinstance(outcomes, list):
            raise ValueError("invalid type for `outcomes`: expected a list")
        return sub(
            id=_opt_str(data, "id"),
            classification=_enum(Classification, data, "classification"),
            recorded_at=_req_str(data, "recorded_at"),
            evidence=None if evidence is None else Evidence.from_dict(evidence),
            tags=_opt_str_list(data, "tags"),
            relates_to=_opt_str_list(data, "relates_to"),
            supersedes=_opt_str_list(data, "supersedes"),
            outcomes=None if outcomes is None else [Outcome.from_dict(o) for o in outcomes],
            **kwargs,
        )

    @classmethod
    def from_json(cls, text: str) -> ExpertiseRecord:
        return cls.from_dict(json.loads(text))


@dataclass(kw_only=True)
class Convention(ExpertiseRecord):
    record_type: ClassVar[RecordType] = RecordType.CONVENTION
    _SPECIFIC: ClassVar[tuple[tuple[str, str], ...]] = (("content", _REQUIRED),)

    content: str


@dataclass(kw_only=True)
class Pattern(ExpertiseRecord):
    record_type: ClassVar[RecordType] = RecordType.PATTERN
    _SPECIFIC: ClassVar[tuple[tuple[str, str], ...]] = (
        ("name", _REQUIRED),
        ("description", _REQUIRED),
        ("files", _LIST),
    )

    name: str
    description: str
    files: list[str] | None = None


@dataclass(kw_only=True)
class Failure(ExpertiseRecord):
    record_type: ClassVar[RecordType] = RecordType.FAILURE
    _SPECIFIC: ClassVar[tuple[tuple[str, str], ...]] = (
        ("description", _REQUIRED),
        ("resolution", _REQUIRED),
    )

    description: str
    resolution: str


@dataclass(kw_only=True)
class Decision(ExpertiseRecord):
    record_type: ClassVar[RecordType] = RecordType.DECISION
    _SPECIFIC: ClassVar[tuple[tuple[str, str], ...]] = (
        ("title", _REQUIRED),
        ("rationale", _REQUIRED),
        ("date", _OPTIONAL),
    )

    title: str
    rationale: str
    date: str | None = None


@dataclass(kw_only=True)
class Reference(ExpertiseRecord):
    record_type: ClassVar[RecordType] = RecordType.REFERENCE
    _SPECIFIC: ClassVar[tuple[tuple[str, str], ...]] = (
        ("name", _REQUIRED),
        ("description", _REQUIRED),
        ("files", _LIST),
    )

    name: str
    description: str
    files: list[str] | None = None


@dataclass(kw_only=True)
class Guide(ExpertiseRecord):
    record_type: ClassVar[RecordType] = RecordType.GUIDE
    _SPECIFIC: ClassVar[tuple[tuple[str, str], ...]] = (
        ("name", _REQUIRED),
        ("description", _REQUIRED),
    )

    name: str
    description: str


_REGISTRY: dict[RecordType, type[ExpertiseRecord]] = {
    cls.record_type: cls for cls in (Convention, Pattern, Failure, Decision, Reference, Guide)
}

_NAMED_TYPES = frozenset(
    {RecordType.PATTERN, RecordType.DECISION, RecordType.REFERENCE, RecordType.GUIDE}
)


# ── Config ─────────────────────────────────────────────────────────────────


@dataclass
class ShelfLife:
    tactical: int = 14
    observational: int = 30


@dataclass
class ClassificationDefaults:
    shelf_life: ShelfLife = field(default_factory=ShelfLife)


@dataclass
class Governance:
    max_entries: int = 100
    warn_entries: int = 150
    hard_limit: int = 200


@dataclass
class KbConfig:
    """Contents of the knowledge base's config file."""

    version: str = "1"
    domains: list[str] = field(default_factory=list)
    governance: Governance = field(default_factory=Governance)
    classification_defaults: ClassificationDefaults = field(
        default_factory=ClassificationDefaults
    )

    def to_dict(self) -> dict[str, Any]:
        shelf = self.classification_defaults.shelf_life
        return {
            "version": self.version,
            "domains": list(self.domains),
            "governance": {
                "max_entries": self.governance.max_entries,
                "warn_entries": self.governance.warn_entries,
                "hard_limit": self.governance.hard_limit,
            },
            "classification_defaults": {
                "shelf_life": {
                    "tactical": shelf.tactical,
                    "observational": shelf.observational,
                }
            },
        }

    @classmethod
    def from_dict(cls, data: Any) -> KbConfig:
        data = _require_mapping(data, "config")
        domains = data.get("domains")
        if domains is None:
            raise ValueError("missing field `domains`")
        if not isinstance(domains, list) or not all(isinstance(d, str) for d in domains):
            raise ValueError("invalid type for `domains`: expected a list of strings")
        if "governance" not in data:
            raise ValueError("missing field `governance`")
        if "classification_defaults" not in data:
            raise ValueError("missing field `classification_defaults`")
        gov = _require_mapping(data["governance"], "governance")
        defaults = _require_mapping(data["classification_defaults"], "classification_defaults")
        if "shelf_life" not in defaults:
            raise ValueError("missing field `shelf_life`")
        shelf = _require_mapping(defaults["shelf_life"], "shelf_life")
        return cls(
            version=_req_str(data, "version"),
            domains=list(domains),
            governance=Governance(
                max_entries=_u32(gov, "max_entries"),
                warn_entries=_u32(gov, "warn_entries"),
                hard_limit=_u32(gov, "hard_limit"),
            ),
            classification_defaults=ClassificationDefaults(
                shelf_life=ShelfLife(
                    tactical=_u32(shelf, "tactical"),
                    observational=_u32(shelf, "observational"),
                )
            ),
        )

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_dict(), sort_keys=False)

    @classmethod
    def from_yaml(cls, text: str) -> KbConfig:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ValueError(f"invalid YAML: {exc}") from exc
        return cls.from_dict(data)