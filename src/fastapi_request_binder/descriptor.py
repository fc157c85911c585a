"""ControllerDescriptor — cached, immutable description of bindable fields."""

from __future__ import annotations

import dataclasses
import threading
import types
import typing
from dataclasses import dataclass
from typing import Any, ClassVar, Union, get_args, get_origin

from fastapi_request_binder.exceptions import DescriptorError

_NONE_TYPE = type(None)


@dataclass(frozen=True)
class FieldDescriptor:
    """One public, annotated attribute of a controller type.

    ``annotation`` is the declared type as written; ``type`` is the same
    annotation with ``None`` stripped from it.
    """

    name: str
    annotation: Any
    type: Any
    nullable: bool
    has_default: bool


@dataclass(frozen=True)
class ControllerDescriptor:
    """Immutable, pre-computed binding plan for a controller type."""

    controller_type: type
    fields: tuple[FieldDescriptor, ...]

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def get(self, name: str) -> FieldDescriptor | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None


_CACHE: dict[type, ControllerDescriptor] = {}
_LOCK = threading.Lock()


def describe(controller_type: type) -> ControllerDescriptor:
    """Return the descriptor for *controller_type*, building it at most once."""
    cached = _CACHE.get(controller_type)
    if cached is not None:
        return cached

    with _LOCK:
        cached = _CACHE.get(controller_type)
        if cached is None:
            cached = _build(controller_type)
            _CACHE[controller_type] = cached
        return cached


def clear_descriptor_cache() -> None:
    with _LOCK:
        _CACHE.clear()


def split_optional(annotation: Any) -> tuple[Any, bool]:
    """Split ``X | None`` into ``(X, True)``; other annotations pass through."""
    if annotation is Any:
        return Any, True
    if annotation is None or annotation is _NONE_TYPE:
        return Any, True

    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = get_args(annotation)
        rest = tuple(a for a in args if a is not _NONE_TYPE)
        if len(rest) == len(args):
            return annotation, False
        if len(rest) == 1:
            return rest[0], True
        return Union[rest], True  # noqa: UP007

    return annotation, False


def _build(controller_type: type) -> ControllerDescriptor:
    if not isinstance(controller_type, type):
        raise DescriptorError(f"{controller_type!r} is not a class")

    try:
        hints = typing.get_type_hints(controller_type)
    except (NameError, TypeError) as exc:
        raise DescriptorError(
            f"Cannot resolve annotations of {controller_type.__qualname__}: {exc}"
        ) from exc

    dataclass_fields: dict[str, dataclasses.Field[Any]] = {}
    if dataclasses.is_dataclass(controller_type):
        dataclass_fields = {f.name: f for f in dataclasses.fields(controller_type)}

    fields: list[FieldDescriptor] = []
    for name, annotation in hints.items():
        if name.startswith("_"):
            continue
        if get_origin(annotation) is ClassVar or annotation is ClassVar:
            continue
        if isinstance(annotation, dataclasses.InitVar):
            continue

        inner, nullable = split_optional(annotation)
        fields.append(
            FieldDescriptor(
                name=name,
                annotation=annotation,
                type=inner,
                nullable=nullable,
                has_default=_has_default(controller_type, name, dataclass_fields),
            )
        )

    return ControllerDescriptor(controller_type=controller_type, fields=tuple(fields))


def _has_default(
    controller_type: type,
    name: str,
    dataclass_fields: dict[str, dataclasses.Field[Any]],
) -> bool:
    dc_field = dataclass_fields.get(name)
    if dc_field is not None:
        return (
            dc_field.default is not dataclasses.MISSING
            or dc_field.default_factory is not dataclasses.MISSING
        )
    return hasattr(controller_type, name)
