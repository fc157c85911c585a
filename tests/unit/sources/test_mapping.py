"""Tests for RouteParams, QueryParams and BodyFields sources."""

from __future__ import annotations

from fastapi_request_binder._types import MISSING
from fastapi_request_binder.source import SourceKind
from fastapi_request_binder.sources.mapping import BodyFields, QueryParams, RouteParams


class TestMappingSources:
    def test_kinds(self) -> None:
        assert RouteParams().kind is SourceKind.ROUTE
        assert QueryParams().kind is SourceKind.QUERY
        assert BodyFields().kind is SourceKind.BODY

    def test_get_returns_value(self) -> None:
        assert QueryParams({"page": "2"}).get("page") == "2"

    def test_get_missing_returns_sentinel(self) -> None:
        assert RouteParams({"id": "1"}).get("other") is MISSING

    def test_none_value_is_present(self) -> None:
        assert BodyFields({"note": None}).get("note") is None

    def test_none_mapping_is_empty(self) -> None:
        assert BodyFields(None).get("anything") is MISSING

    def test_keys_are_not_translated(self) -> None:
        assert QueryParams({"user_id": "7"}).get("userId") is MISSING


class TestSourceKindOrder:
    def test_route_query_body_files(self) -> None:
        ordered = sorted(SourceKind, key=lambda k: k.order)
        assert ordered == [
            SourceKind.ROUTE,
            SourceKind.QUERY,
            SourceKind.BODY,
            SourceKind.FILES,
        ]
