"""
URL Source Reader

Streams URLs, one per line, from a URL-list file.
"""

from pathlib import Path
from typing import Iterator, Union


class UrlFileReader:
    """
    Lazy, forward-only iterator over the lines of a URL-list file.

    The file is opened in the constructor, so a missing or unreadable file
    raises ``OSError`` immediately rather than on first iteration. A leading
    byte-order mark is dropped and undecodable bytes become U+FFFD, so a bad
    byte only spoils its own line. The handle is closed when the lines run
    out, on ``close()``, or when leaving a ``with`` block, whichever comes
    first.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._handle = open(self.path, "r", encoding="utf-8-sig", errors="replace")

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        if self._handle.closed:
            raise StopIteration
        line = self._handle.readline()
        if not line:
            self.close()
            raise StopIteration
        return line.rstrip("\r\n")

    def __enter__(self) -> "UrlFileReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._handle.closed

    def close(self) -> None:
        self._handle.close()


def read_urls(path: Union[str, Path]) -> UrlFileReader:
    """Open ``path`` and return a lazy iterator over its URLs."""
    return UrlFileReader(path)
