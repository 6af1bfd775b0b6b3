"""
Image Saver

Decodes downloaded bytes with Pillow and writes the image below the output
directory, grouped by the URL-list file's parent folder name.

Output layout:
directory/
└── <parent folder of filename>/
    ├── 3f2a9c0d81b4e6f7.png
    └── ...

File names are a prefix of the SHA-256 digest of the raw bytes, so the same
image always lands on the same path.
"""

import asyncio
import hashlib
import logging
from io import BytesIO
from pathlib import Path, PurePath
from typing import Optional, Union

from PIL import Image

from .config import DownloaderConfig
from .constants import FORMAT_TO_EXTENSION
from .models import SaveResult

logger = logging.getLogger(__name__)


def ensure_directory(path: Path) -> bool:
    """
    Create ``path`` (and its parents) if missing.

    Safe to call repeatedly and from concurrent workers.

    Returns:
        True if this call created the directory, False if it already existed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        path.mkdir()
    except FileExistsError:
        return False
    return True


class ImageSaver:
    """Writes decoded images to disk."""

    def __init__(self, config: Optional[DownloaderConfig] = None):
        self.config = config or DownloaderConfig()

    def _content_name(self, data: bytes) -> str:
        """Stable file stem derived from the raw bytes."""
        return hashlib.sha256(data).hexdigest()[:self.config.digest_length]

    @staticmethod
    def _extension(filename: PurePath, image_format: Optional[str]) -> str:
        if filename.suffix:
            return filename.suffix
        return FORMAT_TO_EXTENSION.get(image_format or "", "")

    def save(self, filename: Union[str, PurePath], data: bytes, directory: Union[str, Path]) -> SaveResult:
        """
        Decode ``data`` and write it below ``directory``.

        Args:
            filename: Logical name; only its extension and the name of its
                parent folder are used
            data: Raw image bytes as downloaded
            directory: Output directory for the URL-list file

        Returns:
            SaveResult; decode and write errors are reported, not raised.
        """
        logical = PurePath(filename)
        folder = Path(directory) / logical.parent.name

        try:
            image = Image.open(BytesIO(data))
            image.load()
        except Exception as e:
            logger.debug(f"[Saver] Cannot decode {logical.name}: {e}")
            return SaveResult(success=False, error=f"decode failed: {e}")

        try:
            created = ensure_directory(folder)
            if created:
                logger.info(f"[Saver] {folder} created")

            file_path = folder / f"{self._content_name(data)}{self._extension(logical, image.format)}"
            image.save(file_path, format=image.format)
        except Exception as e:
            logger.debug(f"[Saver] Cannot write {logical.name}: {e}")
            return SaveResult(success=False, error=f"write failed: {e}")
        finally:
            image.close()

        logger.info(f"[Saver] Saved an image to: {file_path}")
        return SaveResult(success=True, path=file_path, directory_created=created)

    async def save_async(self, filename: Union[str, PurePath], data: bytes, directory: Union[str, Path]) -> SaveResult:
        """Run ``save`` in the default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, lambda: self.save(filename, data, directory))
