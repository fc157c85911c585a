"""Integration tests for controller_endpoint dispatch."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from starlette.responses import PlainTextResponse, Response

from fastapi_request_binder.invoker import allowed_methods, controller_endpoint

_ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


class ItemController:
    id: int
    name: str | None

    async def get(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}

    def post(self) -> dict[str, Any]:
        return {"created": self.name}

    def delete(self) -> Response:
        return PlainTextResponse("gone", status_code=202)


class CatchAllController:
    id: int

    def get(self) -> dict[str, Any]:
        return {"verb": "get"}

    def action(self) -> dict[str, Any]:
        return {"verb": "action", "id": self.id}


class ReadOnlyController:
    id: int

    def get(self) -> dict[str, Any]:
        return {"id": self.id}


def _make_app(controller_type: type) -> FastAPI:
    app = FastAPI()
    app.add_route(
        "/items/{id}", controller_endpoint(controller_type), methods=_ALL_METHODS
    )
    return app


async def _send(app: FastAPI, method: str, path: str, **kwargs: Any) -> Any:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.request(method, path, **kwargs)


class TestControllerEndpoint:
    async def test_get_dispatches_async_handler(self) -> None:
        resp = await _send(_make_app(ItemController), "GET", "/items/3?name=lamp")
        assert resp.status_code == 200
        assert resp.json() == {"id": 3, "name": "lamp"}

    async def test_post_dispatches_sync_handler(self) -> None:
        resp = await _send(
            _make_app(ItemController), "POST", "/items/3", json={"name": "desk"}
        )
        assert resp.json() == {"created": "desk"}

    async def test_response_is_returned_as_is(self) -> None:
        resp = await _send(_make_app(ItemController), "DELETE", "/items/3")
        assert resp.status_code == 202
        assert resp.text == "gone"

    async def test_other_verbs_fall_back_to_action(self) -> None:
        resp = await _send(_make_app(CatchAllController), "PUT", "/items/9")
        assert resp.json() == {"verb": "action", "id": 9}

    async def test_missing_verb_method_falls_back_to_action(self) -> None:
        resp = await _send(_make_app(CatchAllController), "POST", "/items/9")
        assert resp.json()["verb"] == "action"

    async def test_missing_handler_returns_405(self) -> None:
        resp = await _send(_make_app(ReadOnlyController), "POST", "/items/1")
        assert resp.status_code == 405
        assert resp.headers["allow"] == "GET, OPTIONS"
        assert resp.json() == {"error": "Method not allowed"}

    async def test_coercion_failure_returns_422(self) -> None:
        resp = await _send(_make_app(ItemController), "GET", "/items/abc")
        assert resp.status_code == 422
        assert resp.json()["detail"]["field"] == "id"


class TestAllowedMethods:
    def test_defined_verbs(self) -> None:
        assert allowed_methods(ItemController) == ["GET", "POST", "DELETE", "OPTIONS"]

    def test_action_adds_missing_verbs(self) -> None:
        assert allowed_methods(CatchAllController) == [
            "GET",
            "POST",
            "DELETE",
            "OPTIONS",
        ]

    def test_only_get(self) -> None:
        assert allowed_methods(ReadOnlyController) == ["GET", "OPTIONS"]
