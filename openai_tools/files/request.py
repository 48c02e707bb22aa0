"""Client for uploading and managing files (``/files``)."""

import logging
import mimetypes
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from openai_tools.common.client import BaseClient
from openai_tools.common.errors import ConfigError
from openai_tools.common.pagination import DeletedObject
from openai_tools.config.constants import LOGGER_NAME
from openai_tools.files.response import File, FileList

logger = logging.getLogger(LOGGER_NAME)

FILES_PATH = "files"


class FilePurpose(str, Enum):
    ASSISTANTS = "assistants"
    ASSISTANTS_OUTPUT = "assistants_output"
    BATCH = "batch"
    BATCH_OUTPUT = "batch_output"
    FINE_TUNE = "fine-tune"
    FINE_TUNE_RESULTS = "fine-tune-results"
    VISION = "vision"
    USER_DATA = "user_data"


class Files(BaseClient):
    """Upload, list, retrieve, download and delete files."""

    def upload_bytes(self, filename: str, content: bytes, purpose: Union[FilePurpose, str]) -> File:
        if not filename:
            raise ConfigError("A filename is required for uploads")
        purpose = FilePurpose(purpose)
        content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
        logger.info(f"Uploading {filename} ({len(content)} bytes) for {purpose.value}")
        return self.http.post_form(
            FILES_PATH,
            File,
            data={"purpose": purpose.value},
            files={"file": (filename, content, content_type)},
        )

    def upload_path(self, path: Union[str, Path], purpose: Union[FilePurpose, str]) -> File:
        path = Path(path)
        return self.upload_bytes(path.name, path.read_bytes(), purpose)

    def list(self, purpose: Optional[Union[FilePurpose, str]] = None) -> FileList:
        params = {"purpose": FilePurpose(purpose).value} if purpose is not None else None
        return self.http.get(FILES_PATH, FileList, params)

    def retrieve(self, file_id: str) -> File:
        return self.http.get(f"{FILES_PATH}/{file_id}", File)

    def delete(self, file_id: str) -> DeletedObject:
        return self.http.delete(f"{FILES_PATH}/{file_id}", DeletedObject)

    def content(self, file_id: str) -> bytes:
        return self.http.get_bytes(f"{FILES_PATH}/{file_id}/content")
