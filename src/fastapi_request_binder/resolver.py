"""PrecedenceResolver — locates a field's raw value across ordered sources."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from fastapi_request_binder._types import (
    MISSING,
    AltFormCallback,
    RawValue,
    RouteParamMapping,
)
from fastapi_request_binder.files import TEMP_PATH_KEY
from fastapi_request_binder.naming import camel_to_snake
from fastapi_request_binder.source import SourceKind, ValueSource
from fastapi_request_binder.sources import (
    BodyFields,
    QueryParams,
    RouteParams,
    UploadedFiles,
)


@dataclass(frozen=True)
class Resolution:
    """Where a raw value was found."""

    value: RawValue
    source: SourceKind
    key: str


class PrecedenceResolver:
    """Searches route, query, body and files in that order.

    Within each source the field's own name is tried before its alternate
    form, so a lower-precedence source never wins over a higher one.
    """

    def __init__(
        self,
        *,
        alt_form: AltFormCallback = camel_to_snake,
        temp_path_key: str = TEMP_PATH_KEY,
    ) -> None:
        self._alt_form = alt_form
        self._temp_path_key = temp_path_key

    def sources(
        self, route_params: RouteParamMapping | None, request: Any
    ) -> tuple[ValueSource, ...]:
        """Build the ordered source chain for one request."""
        return (
            RouteParams(route_params),
            QueryParams(getattr(request, "query", None)),
            BodyFields(getattr(request, "body", None)),
            UploadedFiles(
                getattr(request, "files", None), temp_path_key=self._temp_path_key
            ),
        )

    def resolve(
        self, field_name: str, route_params: RouteParamMapping | None, request: Any
    ) -> RawValue:
        """Return the first raw value for *field_name*, or MISSING."""
        found = self.locate(field_name, self.sources(route_params, request))
        return found.value if found is not None else MISSING

    def locate(
        self, field_name: str, sources: Iterable[ValueSource]
    ) -> Resolution | None:
        names = [field_name]
        alt_name = self._alt_form(field_name)
        if alt_name != field_name:
            names.append(alt_name)

        for source in sorted(sources, key=lambda s: s.kind.order):
            for name in names:
                value = source.get(name)
                if value is not MISSING:
                    return Resolution(value=value, source=source.kind, key=name)
        return None
