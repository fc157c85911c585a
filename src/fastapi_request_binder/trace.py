"""BindingTrace and TraceEntry — per-field binding records."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

from fastapi_request_binder.exceptions import BindingException
from fastapi_request_binder.source import SourceKind


class FieldOutcome(Enum):
    """What binding did to a single controller attribute."""

    BOUND = "bound"
    DEFAULT = "default"
    NULL = "null"
    UNSET = "unset"
    REQUEST = "request"
    FAILED = "failed"


@dataclass(frozen=True)
class TraceEntry:
    """Single field binding record."""

    field_name: str
    outcome: FieldOutcome
    source: SourceKind | None = None
    key: str | None = None


@dataclass
class BindingTrace:
    """Structured record of a single bind call."""

    entries: list[TraceEntry] = field(default_factory=list)
    outcome: Literal["OK", "FAILED"] = "OK"
    error: BindingException | None = None

    def outcome_of(self, field_name: str) -> FieldOutcome | None:
        for entry in self.entries:
            if entry.field_name == field_name:
                return entry.outcome
        return None

    @property
    def unset_fields(self) -> list[str]:
        return [e.field_name for e in self.entries if e.outcome is FieldOutcome.UNSET]
