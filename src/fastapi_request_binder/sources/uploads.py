"""Upload source — UploadedFiles."""

from __future__ import annotations

from fastapi_request_binder._types import MISSING, RawValue, SourceMapping
from fastapi_request_binder.files import TEMP_PATH_KEY, normalize_file_value
from fastapi_request_binder.source import MappingSource, SourceKind


class UploadedFiles(MappingSource):
    """Uploaded files; hits are normalized into UploadedFile values."""

    kind = SourceKind.FILES

    def __init__(
        self,
        values: SourceMapping | None = None,
        *,
        temp_path_key: str = TEMP_PATH_KEY,
    ) -> None:
        super().__init__(values)
        self._temp_path_key = temp_path_key

    def get(self, name: str) -> RawValue:
        raw = super().get(name)
        if raw is MISSING:
            return MISSING
        return normalize_file_value(raw, temp_path_key=self._temp_path_key)
