"""Shared type aliases and sentinels."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Final


class _Missing:
    """Marker for a value no source provides."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()

RawValue = Any
SourceMapping = Mapping[str, Any]
RouteParamMapping = Mapping[str, Any]

# Maps a declared field name onto its alternate naming convention
AltFormCallback = Callable[[str], str]
