"""ValueSource abstract base class and SourceKind enum."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import ClassVar

from fastapi_request_binder._types import MISSING, RawValue, SourceMapping


class SourceKind(Enum):
    """Request value sources, defining strict lookup precedence."""

    ROUTE = "route"
    QUERY = "query"
    BODY = "body"
    FILES = "files"

    @property
    def order(self) -> int:
        _ORDER = {
            "route": 1,
            "query": 2,
            "body": 3,
            "files": 4,
        }
        return _ORDER[self.value]


class ValueSource(ABC):
    """Base abstraction for a single keyed source of raw request values."""

    kind: ClassVar[SourceKind]

    @abstractmethod
    def get(self, name: str) -> RawValue: ...


class MappingSource(ValueSource):
    """Value source backed by a plain string-keyed mapping."""

    def __init__(self, values: SourceMapping | None = None) -> None:
        self._values: SourceMapping = values if values is not None else {}

    def get(self, name: str) -> RawValue:
        if name in self._values:
            return self._values[name]
        return MISSING

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self._values)!r})"
