"""Binder — populates a controller's typed attributes from request data."""

from __future__ import annotations

from typing import Any

from fastapi_request_binder._types import RouteParamMapping
from fastapi_request_binder.coercion import TypeCoercer
from fastapi_request_binder.descriptor import describe
from fastapi_request_binder.exceptions import CoercionError
from fastapi_request_binder.resolver import PrecedenceResolver
from fastapi_request_binder.trace import BindingTrace, FieldOutcome, TraceEntry


class Binder:
    """Maps route params, query, body and files onto controller attributes.

    Per field: the first raw value found wins and is coerced to the declared
    type. Without a raw value an existing default is kept, a nullable field
    becomes ``None`` and anything else is left unset for later validation.
    The attribute named *request_field* receives the request object itself.
    """

    def __init__(
        self,
        *,
        resolver: PrecedenceResolver | None = None,
        coercer: TypeCoercer | None = None,
        request_field: str = "request",
    ) -> None:
        self._resolver = resolver or PrecedenceResolver()
        self._coercer = coercer or TypeCoercer()
        self._request_field = request_field

    def bind(
        self,
        controller: Any,
        request: Any,
        route_params: RouteParamMapping | None = None,
    ) -> None:
        self._bind(controller, request, route_params, None)

    def bind_traced(
        self,
        controller: Any,
        request: Any,
        route_params: RouteParamMapping | None = None,
        trace: BindingTrace | None = None,
    ) -> BindingTrace:
        """Bind like :meth:`bind` and record what happened to every field.

        Pass *trace* to keep the partial record when a CoercionError escapes.
        """
        trace = trace if trace is not None else BindingTrace()
        try:
            self._bind(controller, request, route_params, trace)
        except CoercionError as exc:
            trace.outcome = "FAILED"
            trace.error = exc
            raise
        return trace

    def _bind(
        self,
        controller: Any,
        request: Any,
        route_params: RouteParamMapping | None,
        trace: BindingTrace | None,
    ) -> None:
        descriptor = describe(type(controller))
        sources = self._resolver.sources(route_params, request)

        if self._request_field in descriptor.names or hasattr(
            type(controller), self._request_field
        ):
            setattr(controller, self._request_field, request)
            _record(trace, self._request_field, FieldOutcome.REQUEST)

        for field in descriptor.fields:
            if field.name == self._request_field:
                continue

            found = self._resolver.locate(field.name, sources)
            if found is None:
                if field.has_default:
                    _record(trace, field.name, FieldOutcome.DEFAULT)
                elif field.nullable:
                    setattr(controller, field.name, None)
                    _record(trace, field.name, FieldOutcome.NULL)
                else:
                    _record(trace, field.name, FieldOutcome.UNSET)
                continue

            try:
                value = self._coercer.coerce(
                    found.value, field.annotation, field=field.name
                )
            except CoercionError:
                _record(
                    trace, field.name, FieldOutcome.FAILED, found.source, found.key
                )
                raise
            setattr(controller, field.name, value)
            _record(trace, field.name, FieldOutcome.BOUND, found.source, found.key)


def _record(trace: BindingTrace | None, name: str, *args: Any) -> None:
    if trace is not None:
        trace.entries.append(TraceEntry(name, *args))


_default_binder = Binder()


def bind(
    controller: Any, request: Any, route_params: RouteParamMapping | None = None
) -> None:
    """Bind *controller* in place using the default Binder."""
    _default_binder.bind(controller, request, route_params)
