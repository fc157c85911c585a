"""controller_endpoint() — binds a controller and dispatches by HTTP method."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable

from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from fastapi_request_binder.binder import Binder
from fastapi_request_binder.dependency import bind_request
from fastapi_request_binder.descriptor import describe
from fastapi_request_binder.request import RequestData

logger = logging.getLogger(__name__)

_VERB_METHODS = {
    "GET": "get",
    "POST": "post",
    "DELETE": "delete",
}
_FALLBACK_METHOD = "action"


def allowed_methods(controller_type: type) -> list[str]:
    """HTTP methods *controller_type* answers, ending with OPTIONS."""
    methods = [
        verb
        for verb, name in _VERB_METHODS.items()
        if callable(getattr(controller_type, name, None))
    ]
    if callable(getattr(controller_type, _FALLBACK_METHOD, None)):
        methods.extend(verb for verb in _VERB_METHODS if verb not in methods)
    methods.append("OPTIONS")
    return methods


def controller_endpoint(
    controller_type: type,
    *,
    binder: Binder | None = None,
    debug: bool = False,
) -> Callable[[Request], Awaitable[Response]]:
    """Return a Starlette endpoint serving *controller_type*.

    ``GET``, ``POST`` and ``DELETE`` call the matching lowercase method; any
    other verb, or a verb without its method, falls back to ``action``.
    """
    binder = binder or Binder()
    describe(controller_type)

    async def endpoint(request: Request) -> Response:
        name = _VERB_METHODS.get(request.method, _FALLBACK_METHOD)
        if not callable(getattr(controller_type, name, None)):
            name = _FALLBACK_METHOD
        if not callable(getattr(controller_type, name, None)):
            logger.debug(
                "%s has no handler for %s", controller_type.__qualname__, request.method
            )
            return JSONResponse(
                {"error": "Method not allowed"},
                status_code=405,
                headers={"Allow": ", ".join(allowed_methods(controller_type))},
            )

        data = await RequestData.from_starlette(request)
        controller = bind_request(binder, controller_type, data, request, debug=debug)

        result = getattr(controller, name)()
        if inspect.isawaitable(result):
            result = await result
        if isinstance(result, Response):
            return result
        return JSONResponse(result)

    return endpoint
