"""Mapping-backed sources — RouteParams, QueryParams, BodyFields."""

from __future__ import annotations

from fastapi_request_binder.source import MappingSource, SourceKind


class RouteParams(MappingSource):
    """Parameters captured by upstream path matching."""

    kind = SourceKind.ROUTE


class QueryParams(MappingSource):
    """Query string parameters."""

    kind = SourceKind.QUERY


class BodyFields(MappingSource):
    """Decoded body fields (JSON object or form)."""

    kind = SourceKind.BODY
