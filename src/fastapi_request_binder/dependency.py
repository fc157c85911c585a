"""bind_dependency() — factory producing FastAPI-compatible dependency callables."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from fastapi import HTTPException
from starlette.requests import Request

from fastapi_request_binder.binder import Binder
from fastapi_request_binder.descriptor import describe
from fastapi_request_binder.exceptions import (
    BindingAbort,
    BindingException,
    BindingInternalError,
    CoercionError,
)
from fastapi_request_binder.request import RequestData
from fastapi_request_binder.trace import BindingTrace

logger = logging.getLogger(__name__)

T = TypeVar("T")


def bind_dependency(
    controller_type: type[T],
    *,
    binder: Binder | None = None,
    debug: bool = False,
) -> Callable[..., Awaitable[T]]:
    """Return a FastAPI dependency yielding a freshly bound *controller_type*."""
    binder = binder or Binder()
    descriptor = describe(controller_type)

    async def dependency(request: Request) -> Any:
        data = await RequestData.from_starlette(request)
        return bind_request(binder, controller_type, data, request, debug=debug)

    # Attach the binding plan for introspection
    dependency._binding_descriptor = descriptor  # type: ignore[attr-defined]

    return dependency


def bind_request(
    binder: Binder,
    controller_type: type[T],
    data: RequestData,
    request: Request,
    *,
    debug: bool = False,
) -> T:
    """Instantiate and bind a controller, translating failures to HTTP errors.

    With *debug* the BindingTrace is stored on ``request.state.binding_trace``,
    failed binds included.
    """
    route_params = dict(request.path_params)
    try:
        controller = controller_type()
        if debug:
            trace = BindingTrace()
            request.state.binding_trace = trace
            binder.bind_traced(controller, data, route_params, trace)
        else:
            binder.bind(controller, data, route_params)
    except BindingAbort as exc:
        logger.debug(
            "Binding %s failed: %s", controller_type.__qualname__, exc.detail
        )
        detail: Any = exc.to_detail() if isinstance(exc, CoercionError) else exc.detail
        raise HTTPException(status_code=exc.status_code, detail=detail) from exc
    except BindingException:
        raise
    except Exception as exc:
        logger.exception("Unexpected error binding %s", controller_type.__qualname__)
        wrapped = BindingInternalError("Internal binding error", cause=exc)
        raise HTTPException(status_code=500, detail=wrapped.detail) from wrapped
    return controller
