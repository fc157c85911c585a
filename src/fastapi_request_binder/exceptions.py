"""BindingException hierarchy for binding failures."""

from __future__ import annotations

from typing import Any, get_origin


class BindingException(Exception):
    """Base for all binding exceptions."""


class BindingAbort(BindingException):
    """Controlled abort with HTTP status code and detail."""

    def __init__(self, detail: str, *, status_code: int = 400) -> None:
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


class CoercionError(BindingAbort):
    """A raw value cannot be converted to a field's declared type (422)."""

    def __init__(self, field: str, value: Any, target_type: Any) -> None:
        self.field = field
        self.value = value
        self.target_type = target_type
        super().__init__(
            f"Cannot convert {value!r} to {type_name(target_type)}"
            f" for field '{field}'",
            status_code=422,
        )

    def to_detail(self) -> dict[str, Any]:
        value = self.value
        if not isinstance(value, (str, int, float, bool, type(None))):
            value = repr(value)
        return {
            "field": self.field,
            "value": value,
            "type": type_name(self.target_type),
            "message": self.detail,
        }


class DescriptorError(BindingException):
    """A controller type cannot be described for binding."""


class BindingInternalError(BindingException):
    """Engine-level error wrapping unexpected exceptions."""

    def __init__(self, detail: str, *, cause: Exception | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.cause = cause


def type_name(tp: Any) -> str:
    """Readable name for a type or annotation."""
    if isinstance(tp, type) and get_origin(tp) is None:
        return tp.__name__
    return str(tp).replace("typing.", "")
