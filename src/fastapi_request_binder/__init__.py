"""FastAPI Request Binder - typed controller binding for FastAPI requests."""

from fastapi_request_binder._types import MISSING
from fastapi_request_binder.binder import Binder, bind
from fastapi_request_binder.coercion import TypeCoercer
from fastapi_request_binder.dependency import bind_dependency
from fastapi_request_binder.descriptor import (
    ControllerDescriptor,
    FieldDescriptor,
    clear_descriptor_cache,
    describe,
)
from fastapi_request_binder.exceptions import (
    BindingAbort,
    BindingException,
    BindingInternalError,
    CoercionError,
    DescriptorError,
)
from fastapi_request_binder.files import (
    FileShape,
    NormalizedFileValue,
    UploadedFile,
    classify_file_value,
    normalize_file_value,
)
from fastapi_request_binder.invoker import allowed_methods, controller_endpoint
from fastapi_request_binder.naming import camel_to_snake
from fastapi_request_binder.request import RequestData
from fastapi_request_binder.resolver import PrecedenceResolver, Resolution
from fastapi_request_binder.source import MappingSource, SourceKind, ValueSource
from fastapi_request_binder.sources import (
    BodyFields,
    QueryParams,
    RouteParams,
    UploadedFiles,
)
from fastapi_request_binder.trace import BindingTrace, FieldOutcome, TraceEntry

__all__ = [
    "MISSING",
    "Binder",
    "BindingAbort",
    "BindingException",
    "BindingInternalError",
    "BindingTrace",
    "BodyFields",
    "CoercionError",
    "ControllerDescriptor",
    "DescriptorError",
    "FieldDescriptor",
    "FieldOutcome",
    "FileShape",
    "MappingSource",
    "NormalizedFileValue",
    "PrecedenceResolver",
    "QueryParams",
    "RequestData",
    "Resolution",
    "RouteParams",
    "SourceKind",
    "TraceEntry",
    "TypeCoercer",
    "UploadedFile",
    "UploadedFiles",
    "ValueSource",
    "allowed_methods",
    "bind",
    "bind_dependency",
    "camel_to_snake",
    "classify_file_value",
    "clear_descriptor_cache",
    "controller_endpoint",
    "describe",
    "normalize_file_value",
]
