"""
Item Image Storage
==================
Stores item images uploaded through the listing form on the local
filesystem. Each upload gets its own uuid directory so the original
(sanitized) filename is kept and shows up at the end of the image URL.

Stored values are paths relative to the upload folder, e.g.
``3f2c.../sample.png``; Flask serves them from ``/uploads/<path>``.
"""

import logging
import shutil
import uuid
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename


logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif"}
ALLOWED_FORMATS = {"PNG", "JPEG", "GIF"}


class InvalidImageError(ValueError):
    """Upload is missing or is not a supported image"""


class ImageStore:
    """Saves, verifies and removes item images"""

    def __init__(self, upload_folder):
        self.root = Path(upload_folder)
        self.root.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def has_file(upload: Optional[FileStorage]) -> bool:
        return bool(upload and upload.filename)

    def verify(self, upload: FileStorage) -> None:
        """Raise InvalidImageError unless the upload is a PNG/JPEG/GIF image"""
        if not self.has_file(upload):
            raise InvalidImageError("no file attached")

        suffix = Path(upload.filename).suffix.lower()
        if suffix not in ALLOWED_EXTENSIONS:
            raise InvalidImageError(f"unsupported extension {suffix!r}")

        try:
            with Image.open(upload.stream) as img:
                image_format = img.format
                img.verify()
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            raise InvalidImageError(f"unreadable image: {e}") from e
        finally:
            upload.stream.seek(0)

        if image_format not in ALLOWED_FORMATS:
            raise InvalidImageError(f"unsupported format {image_format!r}")

    def save(self, upload: FileStorage) -> str:
        """Verify and store an upload; returns its path relative to the root"""
        self.verify(upload)

        filename = secure_filename(upload.filename)
        suffix = Path(upload.filename).suffix.lower()
        # secure_filename drops non-ASCII names entirely
        if not filename or Path(filename).suffix.lower() != suffix:
            filename = f"image{suffix}"

        upload_dir = self.root / uuid.uuid4().hex
        upload_dir.mkdir(parents=True, exist_ok=True)
        upload.save(str(upload_dir / filename))

        relative_path = f"{upload_dir.name}/{filename}"
        logger.info("[IMAGES] Stored %s", relative_path)
        return relative_path

    def path_for(self, relative_path: str) -> Path:
        return self.root / relative_path

    def delete(self, relative_path: Optional[str]) -> bool:
        """Remove a stored image and its upload directory"""
        if not relative_path:
            return False

        path = self.path_for(relative_path).resolve()
        if self.root.resolve() not in path.parents:
            logger.warning("[IMAGES] Refusing to delete outside upload root: %s", relative_path)
            return False

        upload_dir = path.parent
        if not upload_dir.exists():
            return False

        if upload_dir == self.root.resolve():
            path.unlink(missing_ok=True)
        else:
            shutil.rmtree(upload_dir)
        logger.info("[IMAGES] Deleted %s", relative_path)
        return True
