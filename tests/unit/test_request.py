"""Tests for RequestData and its Starlette adapter."""

from __future__ import annotations

import json
from typing import Any

from fastapi_request_binder.files import UPLOAD_ERR_OK
from fastapi_request_binder.request import RequestData

BOUNDARY = "binder-boundary"


def _multipart(*parts: bytes) -> bytes:
    body = b""
    for part in parts:
        body += f"--{BOUNDARY}\r\n".encode() + part + b"\r\n"
    return body + f"--{BOUNDARY}--\r\n".encode()


def _field(name: str, value: str) -> bytes:
    return (
        f'Content-Disposition: form-data; name="{name}"\r\n\r\n{value}'
    ).encode()


def _file(name: str, filename: str, content: bytes, content_type: str) -> bytes:
    return (
        f'Content-Disposition: form-data; name="{name}"; filename="{filename}"\r\n'
        f"Content-Type: {content_type}\r\n\r\n"
    ).encode() + content


class TestRequestData:
    def test_defaults_are_empty(self) -> None:
        data = RequestData()
        assert data.query == {}
        assert data.body == {}
        assert data.files == {}
        assert data.request is None

    def test_maps_not_shared_between_instances(self) -> None:
        first = RequestData()
        second = RequestData()
        first.query["x"] = "1"
        assert "x" not in second.query


class TestFromStarlette:
    async def test_query_params(self, make_request: Any) -> None:
        request = make_request(query_string="page=2&tag=a&tag=b")
        data = await RequestData.from_starlette(request)
        assert data.query == {"page": "2", "tag": ["a", "b"]}
        assert data.request is request

    async def test_json_body(self, make_request: Any) -> None:
        payload = {"name": "Ada", "age": 36, "tags": ["x"]}
        request = make_request(
            method="POST",
            headers={"Content-Type": "application/json"},
            body=json.dumps(payload).encode(),
        )
        data = await RequestData.from_starlette(request)
        assert data.body == payload
        assert data.files == {}

    async def test_vendor_json_body(self, make_request: Any) -> None:
        request = make_request(
            method="POST",
            headers={"Content-Type": "application/vnd.api+json; charset=utf-8"},
            body=b'{"id": 1}',
        )
        data = await RequestData.from_starlette(request)
        assert data.body == {"id": 1}

    async def test_invalid_json_is_ignored(self, make_request: Any) -> None:
        request = make_request(
            method="POST",
            headers={"Content-Type": "application/json"},
            body=b"{not json",
        )
        assert (await RequestData.from_starlette(request)).body == {}

    async def test_non_object_json_is_ignored(self, make_request: Any) -> None:
        request = make_request(
            method="POST",
            headers={"Content-Type": "application/json"},
            body=b"[1, 2, 3]",
        )
        assert (await RequestData.from_starlette(request)).body == {}

    async def test_urlencoded_form(self, make_request: Any) -> None:
        request = make_request(
            method="POST",
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            body=b"name=Ada&role=admin&role=dev",
        )
        data = await RequestData.from_starlette(request)
        assert data.body == {"name": "Ada", "role": ["admin", "dev"]}
        assert data.files == {}

    async def test_multipart_fields_and_files(self, make_request: Any) -> None:
        request = make_request(
            method="POST",
            headers={"Content-Type": f"multipart/form-data; boundary={BOUNDARY}"},
            body=_multipart(
                _field("title", "Holiday"),
                _file("photo", "beach.jpg", b"JPEGDATA", "image/jpeg"),
            ),
        )
        data = await RequestData.from_starlette(request)
        assert data.body == {"title": "Holiday"}
        photo = data.files["photo"]
        assert photo["name"] == "beach.jpg"
        assert photo["type"] == "image/jpeg"
        assert photo["size"] == 8
        assert photo["error"] == UPLOAD_ERR_OK
        assert isinstance(photo["tmp_name"], str)
        assert photo["stream"] is not None

    async def test_repeated_file_parts_become_list(self, make_request: Any) -> None:
        request = make_request(
            method="POST",
            headers={"Content-Type": f"multipart/form-data; boundary={BOUNDARY}"},
            body=_multipart(
                _file("docs", "a.txt", b"a", "text/plain"),
                _file("docs", "b.txt", b"bb", "text/plain"),
            ),
        )
        data = await RequestData.from_starlette(request)
        assert [d["name"] for d in data.files["docs"]] == ["a.txt", "b.txt"]

    async def test_other_content_types_leave_body_empty(self, make_request: Any) -> None:
        request = make_request(
            method="POST",
            headers={"Content-Type": "text/plain"},
            body=b"hello",
        )
        data = await RequestData.from_starlette(request)
        assert data.body == {}
        assert data.files == {}
