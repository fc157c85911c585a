"""TypeCoercer — converts raw request values into declared field types.

Conversion rules, applied after ``None`` handling:

- ``int``: ints pass; integral floats convert; strings must be an integer
  literal or an integral number (``"3.0"``). ``"3.5"`` and non-numeric
  strings fail. Booleans are never accepted as numbers.
- ``float``: ints and finite numeric strings convert; ``nan``/``inf`` fail.
- ``bool``: ``1/true/on/yes`` and ``0/false/off/no/""`` (case-insensitive)
  and the numbers 0 and 1; anything else fails.
- ``str``: numbers are formatted with ``str()``, booleans as ``"true"`` /
  ``"false"``; containers fail.
- Unions return a value that already is an instance of a member class
  unchanged; otherwise the first member that converts wins.
- Collections are converted element-wise and fail as a whole when any
  element fails. Single values are not wrapped into lists.
- Dataclasses and annotated classes are built from mappings, each sub-field
  coerced by name.

A failed conversion raises :class:`CoercionError` carrying the field path,
the offending raw value and the target type.
"""

from __future__ import annotations

import dataclasses
import math
import re
import types
from collections.abc import Callable, Mapping, MutableMapping, MutableSequence, Sequence
from collections.abc import Set as AbstractSet
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Literal, Union, get_args, get_origin
from uuid import UUID

from fastapi_request_binder._types import MISSING, AltFormCallback
from fastapi_request_binder.descriptor import describe, split_optional
from fastapi_request_binder.exceptions import CoercionError, DescriptorError
from fastapi_request_binder.files import TEMP_PATH_KEY, UploadedFile, is_file_descriptor
from fastapi_request_binder.naming import camel_to_snake

_INT_RE = re.compile(r"[+-]?\d+")
_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

_TRUE = frozenset({"1", "true", "on", "yes"})
_FALSE = frozenset({"0", "false", "off", "no", ""})

# Same ceiling int() applies to decimal literals
_MAX_INT_DIGITS = 4300

_SEQUENCE_ORIGINS = (list, Sequence, MutableSequence)
_SET_ORIGINS = (set, frozenset, AbstractSet)
_MAPPING_ORIGINS = (dict, Mapping, MutableMapping)
_ARRAY_VALUES = (list, tuple, set, frozenset)


def to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError("bool is not a number")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise ValueError("non-integral float")
    if isinstance(value, Decimal):
        if value.is_finite() and value == value.to_integral_value():
            return int(value)
        raise ValueError("non-integral decimal")
    if isinstance(value, str):
        text = value.strip()
        if _INT_RE.fullmatch(text):
            return int(text)
        if _NUMBER_RE.fullmatch(text):
            number = Decimal(text)
            if number.adjusted() >= _MAX_INT_DIGITS:
                raise ValueError("integer too large")
            if number == number.to_integral_value():
                return int(number)
        raise ValueError("not an integer string")
    raise TypeError(type(value).__name__)


def to_float(value: Any) -> float:
    if isinstance(value, bool):
        raise TypeError("bool is not a number")
    if isinstance(value, float):
        return value
    if isinstance(value, (int, Decimal)):
        result = float(value)
    elif isinstance(value, str) and _NUMBER_RE.fullmatch(value.strip()):
        result = float(value.strip())
    else:
        raise ValueError("not a number")
    if not math.isfinite(result):
        raise ValueError("not finite")
    return result


def to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
        raise ValueError("not a boolean string")
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    raise ValueError("not a boolean")


def to_str(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, Decimal, UUID)):
        return str(value)
    raise TypeError(type(value).__name__)


def to_decimal(value: Any) -> Decimal:
    if isinstance(value, bool):
        raise TypeError("bool is not a number")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        result = Decimal(str(value).strip())
    else:
        raise TypeError(type(value).__name__)
    if not result.is_finite():
        raise ValueError("not finite")
    return result


def to_uuid(value: Any) -> UUID:
    if isinstance(value, UUID):
        return value
    if isinstance(value, str):
        return UUID(value.strip())
    raise TypeError(type(value).__name__)


def to_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value.strip())
    raise TypeError(type(value).__name__)


def to_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip())
    raise TypeError(type(value).__name__)


SCALAR_CONVERTERS: dict[type, Callable[[Any], Any]] = {
    bool: to_bool,
    int: to_int,
    float: to_float,
    str: to_str,
    Decimal: to_decimal,
    UUID: to_uuid,
    datetime: to_datetime,
    date: to_date,
}


class TypeCoercer:
    """Converts untyped raw values into values of a declared type."""

    def __init__(
        self,
        *,
        temp_path_key: str = TEMP_PATH_KEY,
        alt_form: AltFormCallback = camel_to_snake,
    ) -> None:
        self._temp_path_key = temp_path_key
        self._alt_form = alt_form

    def coerce(self, value: Any, declared_type: Any, *, field: str = "") -> Any:
        target, nullable = split_optional(declared_type)
        if value is None:
            if nullable:
                return None
            raise CoercionError(field, value, declared_type)
        return self._coerce(value, target, field)

    def _coerce(self, value: Any, target: Any, path: str) -> Any:
        if target is Any or target is object:
            return value

        origin = get_origin(target)
        if origin is Union or origin is types.UnionType:
            return self._coerce_union(value, target, path)
        if origin is Literal:
            return self._coerce_literal(value, target, path)
        if origin is not None:
            return self._coerce_generic(value, target, origin, path)

        if not isinstance(target, type):
            raise CoercionError(path, value, target)

        if target in (list, tuple, set, frozenset, dict):
            return self._coerce_generic(value, target, target, path)

        converter = SCALAR_CONVERTERS.get(target)
        if converter is not None:
            try:
                return converter(value)
            except (ValueError, TypeError, ArithmeticError):
                raise CoercionError(path, value, target) from None

        if issubclass(target, Enum):
            return self._coerce_enum(value, target, path)
        if issubclass(target, UploadedFile):
            return self._coerce_file(value, target, path)
        if isinstance(value, target):
            return value
        if isinstance(value, Mapping) and _is_structured(target):
            return self._build(value, target, path)

        raise CoercionError(path, value, target)

    def _coerce_union(self, value: Any, target: Any, path: str) -> Any:
        members = get_args(target)
        if any(_is_instance(value, member) for member in members):
            return value
        for member in members:
            try:
                return self.coerce(value, member, field=path)
            except CoercionError:
                continue
        raise CoercionError(path, value, target)

    def _coerce_literal(self, value: Any, target: Any, path: str) -> Any:
        for choice in get_args(target):
            if value == choice and type(value) is type(choice):
                return choice
        for choice in get_args(target):
            try:
                if self.coerce(value, type(choice), field=path) == choice:
                    return choice
            except CoercionError:
                continue
        raise CoercionError(path, value, target)

    def _coerce_generic(self, value: Any, target: Any, origin: Any, path: str) -> Any:
        args = get_args(target)

        if origin in _MAPPING_ORIGINS:
            if not isinstance(value, Mapping):
                raise CoercionError(path, value, target)
            key_type, item_type = args if len(args) == 2 else (Any, Any)
            return {
                self.coerce(key, key_type, field=_entry_path(path, key)): self.coerce(
                    item, item_type, field=_entry_path(path, key)
                )
                for key, item in value.items()
            }

        if origin is tuple:
            if not isinstance(value, _ARRAY_VALUES):
                raise CoercionError(path, value, target)
            items = list(value)
            if args and args[-1] is not Ellipsis:
                if len(items) != len(args):
                    raise CoercionError(path, value, target)
                return tuple(
                    self.coerce(item, item_type, field=f"{path}[{index}]")
                    for index, (item, item_type) in enumerate(zip(items, args))
                )
            item_type = args[0] if args else Any
            return tuple(self._coerce_items(items, item_type, path))

        if origin in _SEQUENCE_ORIGINS or origin in _SET_ORIGINS:
            if not isinstance(value, _ARRAY_VALUES):
                raise CoercionError(path, value, target)
            item_type = args[0] if args else Any
            items = self._coerce_items(list(value), item_type, path)
            if origin is frozenset:
                return frozenset(items)
            if origin in _SET_ORIGINS:
                return set(items)
            return items

        if isinstance(origin, type) and isinstance(value, origin):
            return value
        raise CoercionError(path, value, target)

    def _coerce_items(self, items: list[Any], item_type: Any, path: str) -> list[Any]:
        return [
            self.coerce(item, item_type, field=f"{path}[{index}]")
            for index, item in enumerate(items)
        ]

    def _coerce_enum(self, value: Any, target: type[Enum], path: str) -> Any:
        if isinstance(value, target):
            return value
        try:
            return target(value)
        except (ValueError, TypeError):
            pass
        for member in target:
            try:
                if self.coerce(value, type(member.value), field=path) == member.value:
                    return member
            except CoercionError:
                continue
        raise CoercionError(path, value, target)

    def _coerce_file(self, value: Any, target: type[UploadedFile], path: str) -> Any:
        if isinstance(value, target):
            return value
        if is_file_descriptor(value, self._temp_path_key):
            return target.from_descriptor(value, temp_path_key=self._temp_path_key)
        raise CoercionError(path, value, target)

    def _build(self, value: Mapping[str, Any], target: type, path: str) -> Any:
        descriptor = describe(target)
        is_dataclass = dataclasses.is_dataclass(target)
        bound: dict[str, Any] = {}
        for f in descriptor.fields:
            raw = self._lookup(value, f.name)
            sub_path = f"{path}.{f.name}" if path else f.name
            if raw is not MISSING:
                bound[f.name] = self.coerce(raw, f.annotation, field=sub_path)
            elif f.has_default:
                continue
            elif f.nullable:
                bound[f.name] = None
            elif is_dataclass:
                raise CoercionError(sub_path, MISSING, f.annotation)

        if is_dataclass:
            init_names = {f.name for f in dataclasses.fields(target) if f.init}
            kwargs = {k: v for k, v in bound.items() if k in init_names}
            try:
                obj = target(**kwargs)
            except (TypeError, ValueError):
                raise CoercionError(path, value, target) from None
            for name, item in bound.items():
                if name not in init_names:
                    setattr(obj, name, item)
            return obj

        try:
            obj = target()
        except TypeError:
            raise CoercionError(path, value, target) from None
        for name, item in bound.items():
            setattr(obj, name, item)
        return obj

    def _lookup(self, value: Mapping[str, Any], name: str) -> Any:
        if name in value:
            return value[name]
        alt_name = self._alt_form(name)
        if alt_name != name and alt_name in value:
            return value[alt_name]
        return MISSING


def _is_instance(value: Any, member: Any) -> bool:
    if not isinstance(member, type) or get_origin(member) is not None:
        return False
    if isinstance(value, bool) and member in (int, float):
        return False
    return isinstance(value, member)


def _entry_path(path: str, key: Any) -> str:
    return f"{path}.{key}" if path else str(key)


def _is_structured(target: type) -> bool:
    if dataclasses.is_dataclass(target):
        return True
    if target.__module__ == "builtins":
        return False
    try:
        return bool(describe(target).fields)
    except DescriptorError:
        return False
