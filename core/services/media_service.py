"""
Media service - image uploads into the public storage bucket.
"""

import io
import logging
import random
import string
import time
from typing import Optional, Tuple
from urllib.parse import unquote
from PIL import Image, UnidentifiedImageError
from core.domain.constants import IMAGE_FOLDERS, MAX_IMAGE_BYTES
from core.interfaces.auth import IFileStorage

logger = logging.getLogger(__name__)

# Pillow format -> (extension, content type)
IMAGE_FORMATS = {
    "JPEG": ("jpg", "image/jpeg"),
    "PNG": ("png", "image/png"),
    "GIF": ("gif", "image/gif"),
    "WEBP": ("webp", "image/webp"),
}

_ALPHABET = string.ascii_lowercase + string.digits


def storage_path_from_url(url: Optional[str], bucket: str = "media") -> Optional[str]:
    """Object path inside the bucket for one of its public URLs"""
    if not url:
        return None
    marker = f"/{bucket}/"
    if marker not in url:
        return None
    path = url.split(marker, 1)[1].split("?", 1)[0]
    return unquote(path) or None


def sniff_image(data: bytes) -> Tuple[str, str]:
    """Returns (extension, content type); raises ValueError when data is not a supported image"""
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
            fmt = img.format
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise ValueError("File is not a valid image") from e
    if fmt not in IMAGE_FORMATS:
        raise ValueError(f"Unsupported image format: {fmt}")
    return IMAGE_FORMATS[fmt]


class MediaService:
    """Uploads images and cleans up the ones they replace"""

    def __init__(self, storage: IFileStorage, bucket: str = "media"):
        self.storage = storage
        self.bucket = bucket

    @staticmethod
    def object_name(extension: str) -> str:
        suffix = "".join(random.choices(_ALPHABET, k=13))
        return f"{int(time.time() * 1000)}-{suffix}.{extension}"

    async def upload_image(
        self,
        folder: str,
        filename: str,
        data: bytes,
        current_url: Optional[str] = None,
    ) -> Tuple[bool, str, Optional[str]]:
        """
        Store an image under folder/ and return its public URL.
        Returns: (success, message, url)
        """
        if folder not in IMAGE_FOLDERS:
            return False, f"Unknown image folder: {folder}", None
        if not data:
            return False, "No file selected", None
        if len(data) > MAX_IMAGE_BYTES:
            return False, "Image must be 5MB or smaller", None
        try:
            extension, content_type = sniff_image(data)
        except ValueError as e:
            return False, str(e), None

        path = f"{folder}/{self.object_name(extension)}"
        await self.storage.upload(path, data, content_type)
        url = self.storage.public_url(path)
        logger.info(f"[MEDIA] Uploaded {filename} as {path} ({len(data)} bytes)")

        if current_url:
            await self._remove_quietly(current_url)
        return True, "Your image was uploaded successfully.", url

    async def _remove_quietly(self, url: str) -> None:
        old_path = storage_path_from_url(url, self.bucket)
        if not old_path:
            return
        try:
            await self.storage.remove([old_path])
            logger.info(f"[MEDIA] Removed replaced image {old_path}")
        except Exception as e:
            logger.warning(f"[MEDIA] Could not remove old image {old_path}: {e}")
