"""Workflow configuration value objects for docflow.

A document type's status graph and approval chain are stored as JSON and
interpreted at runtime. These value objects are the typed view of that
JSON: they validate the structural invariants on construction and expose
the queries the lifecycle needs (allowed targets, editable statuses,
configured levels).
"""

from dataclasses import dataclass, field
from typing import Any

DEFAULT_INITIAL_STATUS = "draft"


@dataclass(frozen=True)
class StatusDefinition:
    """One named status in a status flow (key, display label, color)."""

    key: str
    label: str
    color: str = "gray"

    def __post_init__(self) -> None:
        if not self.key or not self.key.strip():
            raise ValueError("Status key must be a non-empty string")

    def to_dict(self) -> dict[str, str]:
        return {"key": self.key, "label": self.label, "color": self.color}


@dataclass(frozen=True)
class StatusFlow:
    """Directed graph of statuses and permitted transitions.

    Invariants: status keys are unique, initial_status is one of them, and
    every key mentioned in transitions (source or target) is one of them.
    """

    initial_status: str
    statuses: tuple[StatusDefinition, ...]
    transitions: dict[str, tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        keys = [s.key for s in self.statuses]
        if len(keys) != len(set(keys)):
            duplicates = sorted({k for k in keys if keys.count(k) > 1})
            raise ValueError(f"Duplicate status keys: {', '.join(duplicates)}")
        known = set(keys)
        if self.initial_status not in known:
            raise ValueError(
                f"Initial status '{self.initial_status}' is not a defined status"
            )
        for source, targets in self.transitions.items():
            if source not in known:
                raise ValueError(f"Transition source '{source}' is not a defined status")
            for target in targets:
                if target not in known:
                    raise ValueError(
                        f"Transition target '{target}' (from '{source}') is not a defined status"
                    )

    @classmethod
    def default(cls) -> "StatusFlow":
        """Single-status flow used when a type is created without one."""
        return cls(
            initial_status=DEFAULT_INITIAL_STATUS,
            statuses=(StatusDefinition(key="draft", label="Draft", color="gray"),),
            transitions={},
        )

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "StatusFlow":
        """Build from the stored JSON shape {initialStatus, statuses, transitions}."""
        statuses = tuple(
            StatusDefinition(
                key=s["key"],
                label=s.get("label") or s["key"],
                color=s.get("color") or "gray",
            )
            for s in raw.get("statuses") or []
        )
        transitions = {
            source: tuple(targets or [])
            for source, targets in (raw.get("transitions") or {}).items()
        }
        return cls(
            initial_status=raw.get("initialStatus") or DEFAULT_INITIAL_STATUS,
            statuses=statuses,
            transitions=transitions,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "initialStatus": self.initial_status,
            "statuses": [s.to_dict() for s in self.statuses],
            "transitions": {k: list(v) for k, v in self.transitions.items()},
        }

    @property
    def status_keys(self) -> list[str]:
        return [s.key for s in self.statuses]

    def has_status(self, key: str) -> bool:
        return key in self.status_keys

    def allowed_from(self, status: str) -> list[str]:
        """Return permitted targets from status (empty when terminal or unknown)."""
        return list(self.transitions.get(status, ()))

    def can_transition(self, from_status: str, to_status: str) -> bool:
        return to_status in self.transitions.get(from_status, ())

    def editable_statuses(self) -> list[str]:
        """Initial status plus every status with at least one outgoing transition."""
        editable = [self.initial_status]
        for source, targets in self.transitions.items():
            if targets and source not in editable:
                editable.append(source)
        return editable

    def is_editable(self, status: str) -> bool:
        return status in self.editable_statuses()


@dataclass(frozen=True)
class ApprovalLevel:
    """One configured checkpoint: the role that must approve at this level."""

    role: str
    level: int

    def __post_init__(self) -> None:
        if not self.role or not self.role.strip():
            raise ValueError("Approval level role must be a non-empty string")
        if self.level < 1:
            raise ValueError(f"Approval level must be >= 1, got {self.level}")


@dataclass(frozen=True)
class ApprovalConfig:
    """Ordered approval chain for a document type.

    Levels are strictly increasing and unique. amount_field names the header
    field holding the document amount (kept for callers; not interpreted here).
    """

    levels: tuple[ApprovalLevel, ...]
    amount_field: str | None = None

    def __post_init__(self) -> None:
        if not self.levels:
            raise ValueError("Approval config must define at least one level")
        numbers = [lv.level for lv in self.levels]
        for prev, cur in zip(numbers, numbers[1:]):
            if cur <= prev:
                raise ValueError(
                    f"Approval levels must be strictly increasing; got {cur} after {prev}"
                )

    @classmethod
    def parse(cls, raw: Any) -> "ApprovalConfig | None":
        """Return the config, or None when raw is absent or defines no levels."""
        if not raw or not isinstance(raw, dict):
            return None
        levels = raw.get("levels")
        if not levels or not isinstance(levels, list):
            return None
        return cls(
            levels=tuple(
                ApprovalLevel(role=lv["role"], level=int(lv["level"])) for lv in levels
            ),
            amount_field=raw.get("amountField"),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "levels": [{"role": lv.role, "level": lv.level} for lv in self.levels]
        }
        if self.amount_field:
            data["amountField"] = self.amount_field
        return data

    @property
    def level_numbers(self) -> list[int]:
        return [lv.level for lv in self.levels]
