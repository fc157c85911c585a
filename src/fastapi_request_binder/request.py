"""RequestData — per-request raw value maps."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from starlette.datastructures import UploadFile
from starlette.requests import Request

from fastapi_request_binder.files import TEMP_PATH_KEY, UPLOAD_ERR_OK

logger = logging.getLogger(__name__)

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


@dataclass
class RequestData:
    """Query, body and file maps of one inbound request.

    ``request`` keeps the transport request the maps were read from, if any.
    """

    query: dict[str, Any] = field(default_factory=dict)
    body: dict[str, Any] = field(default_factory=dict)
    files: dict[str, Any] = field(default_factory=dict)
    request: Request | None = None

    @classmethod
    async def from_starlette(cls, request: Request) -> RequestData:
        query = _group(request.query_params.multi_items())
        body: dict[str, Any] = {}
        files: dict[str, Any] = {}

        content_type = request.headers.get("content-type", "")
        media_type = content_type.split(";", 1)[0].strip().lower()

        if media_type == "application/json" or media_type.endswith("+json"):
            body = await _read_json(request)
        elif media_type in _FORM_TYPES:
            form = await request.form()
            fields: list[tuple[str, Any]] = []
            uploads: list[tuple[str, Any]] = []
            for key, value in form.multi_items():
                if isinstance(value, UploadFile):
                    uploads.append((key, upload_descriptor(value)))
                else:
                    fields.append((key, value))
            body = _group(fields)
            files = _group(uploads)

        return cls(query=query, body=body, files=files, request=request)


def upload_descriptor(upload: UploadFile) -> dict[str, Any]:
    """Describe a Starlette upload the way the file normalizer expects."""
    tmp_name = getattr(upload.file, "name", None)
    return {
        TEMP_PATH_KEY: tmp_name if isinstance(tmp_name, str) else "",
        "name": upload.filename or "",
        "type": upload.content_type or "",
        "size": upload.size or 0,
        "error": UPLOAD_ERR_OK,
        "stream": upload.file,
    }


async def _read_json(request: Request) -> dict[str, Any]:
    try:
        payload = await request.json()
    except ValueError:
        logger.debug("Ignoring undecodable JSON body on %s", request.url.path)
        return {}
    if not isinstance(payload, dict):
        logger.debug(
            "Ignoring non-object JSON body (%s) on %s",
            type(payload).__name__,
            request.url.path,
        )
        return {}
    return payload


def _group(items: Iterable[tuple[str, Any]]) -> dict[str, Any]:
    """Collapse multi-items into a dict; repeated keys become lists."""
    grouped: dict[str, Any] = {}
    for key, value in items:
        if key not in grouped:
            grouped[key] = value
        elif isinstance(grouped[key], list):
            grouped[key].append(value)
        else:
            grouped[key] = [grouped[key], value]
    return grouped
