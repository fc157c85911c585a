"""Built-in value sources."""

from fastapi_request_binder.sources.mapping import BodyFields, QueryParams, RouteParams
from fastapi_request_binder.sources.uploads import UploadedFiles

__all__ = [
    "BodyFields",
    "QueryParams",
    "RouteParams",
    "UploadedFiles",
]
