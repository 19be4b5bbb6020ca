"""
Image upload storage.

Uploaded files are written to a single local directory under a generated
name, `<epoch-millis>-<uuid4><ext>`, which keeps the client's extension
and makes collisions practically impossible without any locking. The
directory is served back by the `/uploads` static mount in `main.py`.
"""

import logging
import shutil
import time
import uuid
from pathlib import Path
from typing import BinaryIO, Optional

from errors import MissingUploadError

logger = logging.getLogger(__name__)

UPLOADS_MOUNT = "/uploads"


class UploadService:
    """Writes uploaded files to disk and builds their public URLs."""

    def __init__(self, upload_dir: str):
        self.upload_dir = Path(upload_dir)

    def ensure_dir(self) -> Path:
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        return self.upload_dir

    @staticmethod
    def generate_filename(original_name: str) -> str:
        """Fresh stored name that keeps the extension of `original_name`."""

        ext = Path(original_name).suffix
        return f"{int(time.time() * 1000)}-{uuid.uuid4()}{ext}"

    def save(self, original_name: Optional[str], data: Optional[BinaryIO]) -> str:
        """Copy `data` to a new file and return the stored filename.

        Raises `MissingUploadError` when no file was supplied.
        """

        if data is None or not original_name:
            raise MissingUploadError("No file uploaded")

        filename = self.generate_filename(original_name)
        with open(self.ensure_dir() / filename, "wb") as out:
            shutil.copyfileobj(data, out)

        logger.info(f"Image uploaded: {filename}")
        return filename

    @staticmethod
    def url_for(base_url: str, filename: str) -> str:
        return f"{base_url.rstrip('/')}{UPLOADS_MOUNT}/{filename}"
