"""
Image Downloader Core Logic

Handles:
- Discovering URL-list files below a root directory
- Fetching every URL concurrently, bounded by a semaphore
- Saving fetched images below the application output root
- Collecting a per-batch summary
"""

import asyncio
import logging
from pathlib import Path, PurePosixPath
from typing import Callable, Iterable, List, Optional, Sequence
from urllib.parse import urlparse

import httpx

from .config import DownloaderConfig
from .fetcher import ImageFetcher
from .models import BatchSummary, FetchStatus, UnitResult, UnitStage, UnitStatus
from .reader import read_urls
from .saver import ImageSaver, ensure_directory

logger = logging.getLogger(__name__)


def discover_url_files(root: Path, extension: str = ".txt") -> List[Path]:
    """Recursively list files under ``root`` whose suffix matches ``extension``."""
    extension = extension.lower()
    return sorted(
        path for path in Path(root).rglob("*")
        if path.is_file() and path.suffix.lower() == extension
    )


def logical_filename(url: str, url_file: Path) -> PurePosixPath:
    """
    Name handed to the saver for ``url``.

    Its parent is the URL-list file's folder name and its suffix is the
    extension of the URL path (query and fragment ignored).
    """
    url_name = PurePosixPath(urlparse(url).path).name or "image"
    return PurePosixPath(Path(url_file).parent.name) / url_name


class ImageDownloader:
    """
    Downloads every URL of a set of URL-list files.

    Usage:
        async with ImageDownloader(config) as downloader:
            summary = await downloader.run(url_files)
    """

    def __init__(
        self,
        config: Optional[DownloaderConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config or DownloaderConfig()
        self.fetcher = ImageFetcher(self.config, client=client)
        self.saver = ImageSaver(self.config)

        # Created lazily inside the running loop
        self._semaphore: Optional[asyncio.Semaphore] = None

    async def close(self):
        """Close HTTP client."""
        await self.fetcher.close()

    async def __aenter__(self) -> "ImageDownloader":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    # ============================================
    # Paths
    # ============================================

    def ensure_output_root(self) -> bool:
        """Create the application output root if missing."""
        created = ensure_directory(self.config.output_root)
        if created:
            logger.info(f"[ImageDownloader] {self.config.output_root} created")
        return created

    def output_directory_for(self, url_file: Path) -> Path:
        return self.config.output_root / Path(url_file).stem

    def discover(self, root: Path) -> List[Path]:
        return discover_url_files(root, self.config.url_file_extension)

    # ============================================
    # Units of work
    # ============================================

    async def process_url(self, url: str, url_file: Path) -> UnitResult:
        """
        Fetch ``url`` and save it on success.

        Returns:
            UnitResult describing the outcome; never raises for network,
            HTTP or decode problems.
        """
        fetched = await self.fetcher.fetch(url)

        if not fetched.success:
            status = UnitStatus.EMPTY if fetched.status == FetchStatus.EMPTY else UnitStatus.ERROR
            if fetched.error is not None:
                logger.debug(f"[ImageDownloader] Request failed: {url[:60]} - {fetched.error}")
            elif fetched.status_code != 200:
                logger.debug(f"[ImageDownloader] HTTP {fetched.status_code}: {url[:60]}")
            else:
                logger.debug(f"[ImageDownloader] Blacklisted response: {fetched.response_url}")
            return UnitResult(
                url=url,
                url_file=url_file,
                status=status,
                stage=UnitStage.FETCH,
                error=fetched.error,
            )

        saved = await self.saver.save_async(
            logical_filename(url, url_file),
            fetched.data,
            self.output_directory_for(url_file),
        )

        if not saved.success:
            return UnitResult(
                url=url,
                url_file=url_file,
                status=UnitStatus.ERROR,
                stage=UnitStage.SAVE,
                error=saved.error,
            )

        return UnitResult(
            url=url,
            url_file=url_file,
            status=UnitStatus.SAVED,
            stage=UnitStage.SAVE,
            path=saved.path,
        )

    async def _bounded(self, url: str, url_file: Path) -> UnitResult:
        async with self._semaphore:
            return await self.process_url(url, url_file)

    # ============================================
    # Batch
    # ============================================

    async def run(self, url_files: Iterable[Path]) -> BatchSummary:
        """
        Download every URL of every file in ``url_files``.

        One task is started per URL; at most ``max_concurrent`` of them do
        work at the same time. A failing unit never cancels the others.

        Returns:
            BatchSummary with counts and saved paths
        """
        self._semaphore = asyncio.Semaphore(self.config.max_concurrent)
        summary = BatchSummary()
        tasks = []

        for url_file in url_files:
            url_file = Path(url_file)
            try:
                with read_urls(url_file) as reader:
                    for url in reader:
                        tasks.append(asyncio.ensure_future(self._bounded(url, url_file)))
            except OSError as e:
                logger.warning(f"[ImageDownloader] Skipping unreadable file {url_file}: {e}")
                summary.files_failed += 1
                continue
            summary.files_processed += 1

        if not tasks:
            return summary

        logger.info(f"[ImageDownloader] Starting batch download of {len(tasks)} images")

        results = await asyncio.gather(*tasks, return_exceptions=True)

        for result in results:
            if isinstance(result, BaseException):
                logger.error(f"[ImageDownloader] Unit crashed: {result!r}")
                summary.record_exception()
            else:
                summary.record(result)

        logger.info(
            f"[ImageDownloader] Batch complete: {summary.saved}/{summary.units} saved, "
            f"{summary.empty} empty, {summary.failed} failed, "
            f"{summary.files_failed} unreadable files"
        )
        return summary

    async def run_path(
        self,
        root: Path,
        select: Optional[Callable[[Sequence[Path]], List[Path]]] = None,
    ) -> BatchSummary:
        """
        Discover URL-list files under ``root``, let ``select`` filter them,
        make sure the output root exists, then run the batch.
        """
        url_files = self.discover(root)
        if select is not None:
            url_files = select(url_files)

        self.ensure_output_root()
        return await self.run(url_files)
