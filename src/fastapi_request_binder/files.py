"""Uploaded file values and normalization of raw upload shapes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import IO, Any

TEMP_PATH_KEY = "tmp_name"

UPLOAD_ERR_OK = 0
UPLOAD_ERR_NO_FILE = 4


@dataclass
class UploadedFile:
    """Typed upload value built one-to-one from an upload descriptor."""

    name: str = ""
    type: str = ""
    tmp_name: str = ""
    error: int = UPLOAD_ERR_NO_FILE
    size: int = 0
    stream: IO[bytes] | None = None

    @classmethod
    def from_descriptor(
        cls, descriptor: Mapping[str, Any], *, temp_path_key: str = TEMP_PATH_KEY
    ) -> UploadedFile:
        error = descriptor.get("error")
        return cls(
            name=descriptor.get("name") or "",
            type=descriptor.get("type") or "",
            tmp_name=descriptor.get(temp_path_key) or "",
            error=UPLOAD_ERR_NO_FILE if error is None else error,
            size=descriptor.get("size") or 0,
            stream=descriptor.get("stream"),
        )

    def is_valid(self) -> bool:
        return self.error == UPLOAD_ERR_OK

    @property
    def extension(self) -> str:
        return os.path.splitext(self.name)[1].lstrip(".").lower()

    @property
    def size_in_mb(self) -> float:
        return self.size / (1024 * 1024)


class FileShape(Enum):
    """Shapes a raw upload value can take."""

    SINGLE = "single"
    LIST = "list"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class NormalizedFileValue:
    """Tagged result of classifying a raw upload value."""

    shape: FileShape
    value: Any


def is_file_descriptor(value: Any, temp_path_key: str = TEMP_PATH_KEY) -> bool:
    return isinstance(value, Mapping) and temp_path_key in value


def classify_file_value(
    raw: Any, *, temp_path_key: str = TEMP_PATH_KEY
) -> NormalizedFileValue:
    """Classify *raw* and wrap recognized descriptors into UploadedFile values.

    Unrecognized shapes are carried unchanged; this never raises.
    """
    if is_file_descriptor(raw, temp_path_key):
        return NormalizedFileValue(
            FileShape.SINGLE,
            UploadedFile.from_descriptor(raw, temp_path_key=temp_path_key),
        )

    if (
        isinstance(raw, (list, tuple))
        and raw
        and all(is_file_descriptor(item, temp_path_key) for item in raw)
    ):
        files = [
            UploadedFile.from_descriptor(item, temp_path_key=temp_path_key)
            for item in raw
        ]
        return NormalizedFileValue(FileShape.LIST, files)

    return NormalizedFileValue(FileShape.UNRECOGNIZED, raw)


def normalize_file_value(raw: Any, *, temp_path_key: str = TEMP_PATH_KEY) -> Any:
    """Return an UploadedFile, a list of them, or *raw* unchanged."""
    return classify_file_value(raw, temp_path_key=temp_path_key).value
