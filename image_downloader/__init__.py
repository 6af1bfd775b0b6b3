"""
Image Downloader

Batch download of images listed in URL-list files.

Features:
- Recursive discovery of *.txt URL-list files
- Interactive exclusion of files before the run
- Concurrent fetching with a configurable limit
- Output grouped per URL-list file under the application data directory
- Content-hash file names
"""

from .config import DownloaderConfig
from .downloader import ImageDownloader, discover_url_files
from .fetcher import ImageFetcher
from .models import BatchSummary, FetchResult, FetchStatus, SaveResult, UnitResult, UnitStatus
from .reader import read_urls
from .saver import ImageSaver, ensure_directory
from .selection import select_url_files

__all__ = [
    "DownloaderConfig",
    "ImageDownloader",
    "ImageFetcher",
    "ImageSaver",
    "BatchSummary",
    "FetchResult",
    "FetchStatus",
    "SaveResult",
    "UnitResult",
    "UnitStatus",
    "discover_url_files",
    "ensure_directory",
    "read_urls",
    "select_url_files",
]
