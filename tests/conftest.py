"""Shared pytest fixtures for fastapi-request-binder tests."""

from __future__ import annotations

from typing import Any

import pytest
from starlette.requests import Request

from fastapi_request_binder.descriptor import clear_descriptor_cache
from fastapi_request_binder.request import RequestData


@pytest.fixture
def make_request() -> Any:
    """Factory for creating mock Starlette Request objects."""

    def _make(
        method: str = "GET",
        path: str = "/",
        headers: dict[str, str] | None = None,
        query_string: str = "",
        body: bytes = b"",
        path_params: dict[str, Any] | None = None,
    ) -> Request:
        scope: dict[str, Any] = {
            "type": "http",
            "method": method,
            "path": path,
            "query_string": query_string.encode(),
            "headers": [
                (k.lower().encode(), v.encode()) for k, v in (headers or {}).items()
            ],
            "root_path": "",
            "path_params": path_params or {},
        }

        async def receive() -> dict[str, Any]:
            return {"type": "http.request", "body": body, "more_body": False}

        return Request(scope, receive)

    return _make


@pytest.fixture
def make_data() -> Any:
    """Factory for RequestData with optional query, body and files maps."""

    def _make(
        query: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
    ) -> RequestData:
        return RequestData(query=query or {}, body=body or {}, files=files or {})

    return _make


@pytest.fixture
def avatar_descriptor() -> dict[str, Any]:
    """Raw upload descriptor for a single PNG file."""
    return {
        "tmp_name": "/tmp/x",
        "name": "a.png",
        "size": 10,
        "type": "image/png",
        "error": 0,
    }


@pytest.fixture(autouse=True)
def _fresh_descriptor_cache() -> Any:
    clear_descriptor_cache()
    yield
    clear_descriptor_cache()
