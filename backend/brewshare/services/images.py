"""Local image storage for review and profile pictures"""

import os
import uuid
from pathlib import Path
from typing import Dict

from fastapi import UploadFile

from ..config import settings
from ..exceptions import ValidationError
from ..utils.logging import get_logger

logger = get_logger(__name__)

ALLOWED_IMAGE_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
}

CHUNK_SIZE = 64 * 1024


class ImageStorage:
    """Stores uploads on disk and hands back the URL they are served from"""

    def __init__(self, upload_dir: str = None, url_prefix: str = None, max_bytes: int = None):
        self.upload_dir = Path(upload_dir or settings.UPLOAD_DIR)
        self.url_prefix = (url_prefix or settings.UPLOAD_URL_PREFIX).rstrip("/")
        self.max_bytes = max_bytes or settings.MAX_UPLOAD_BYTES

    def save(self, upload: UploadFile) -> Dict[str, str]:
        """
        Validate and persist an uploaded image

        Args:
            upload: Uploaded file

        Returns:
            Dict with the public ``url`` and stored ``filename``

        Raises:
            ValidationError: If the file is not a jpg/jpeg/png/gif image or is too large
        """

        extension = os.path.splitext(upload.filename or "")[1].lower()
        if extension not in ALLOWED_IMAGE_TYPES:
            raise ValidationError("Only image files are allowed!")

        if upload.content_type and upload.content_type != ALLOWED_IMAGE_TYPES[extension]:
            raise ValidationError("Only image files are allowed!")

        self.upload_dir.mkdir(parents=True, exist_ok=True)
        filename = f"{uuid.uuid4().hex}{extension}"
        target = self.upload_dir / filename

        written = 0
        try:
            with open(target, "wb") as out:
                while True:
                    chunk = upload.file.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self.max_bytes:
                        raise ValidationError(f"File too large (max {self.max_bytes} bytes)")
                    out.write(chunk)
        except ValidationError:
            target.unlink(missing_ok=True)
            raise

        logger.info("Image stored", filename=filename, size=written)
        return {"url": f"{self.url_prefix}/{filename}", "filename": filename}
