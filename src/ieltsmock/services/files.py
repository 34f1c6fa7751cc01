from __future__ import annotations

import mimetypes
from pathlib import Path
from typing import Optional, Union

from ieltsmock.models.api_types import ResponseDtoFileDto
from ieltsmock.services.base import BaseService


class FileService(BaseService):
    def upload_file(
        self,
        file: Union[str, Path, bytes],
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> ResponseDtoFileDto:
        """Upload an image or audio file. Returns the stored ``FileDto``."""
        if isinstance(file, (str, Path)):
            path = Path(file)
            content = path.read_bytes()
            filename = filename or path.name
        else:
            content = file
            if not filename:
                raise ValueError("filename is required when uploading raw bytes")

        if content_type is None:
            content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"

        files = {"file": (filename, content, content_type)}
        return self._call(ResponseDtoFileDto, "POST", "/file/upload", files=files)

    def download(self, file_id: str) -> bytes:
        return self.transport.download(f"/file/download/{file_id}")

    def download_url(self, file_id: str) -> str:
        return self.transport.url_for(f"/file/download/{file_id}")

    def file_url(self, file_id: Optional[str]) -> Optional[str]:
        """Download URL for a stored image/audio id, or None when there is no id."""
        return self.download_url(file_id) if file_id else None
