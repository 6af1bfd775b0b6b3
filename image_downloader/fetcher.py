"""
Image Fetcher

Issues a single GET per URL over a shared async HTTP client and filters out
responses that cannot be a usable image (non-200, placeholder URLs).
"""

from typing import Optional, AbstractSet

import httpx

from .config import DownloaderConfig
from .constants import RESPONSE_URL_BLACKLIST
from .models import FetchResult, FetchStatus


class ImageFetcher:
    """
    Fetches raw image bytes.

    Usage:
        async with ImageFetcher(config) as fetcher:
            result = await fetcher.fetch(url)
    """

    def __init__(
        self,
        config: Optional[DownloaderConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
        blacklist: AbstractSet[str] = RESPONSE_URL_BLACKLIST,
    ):
        self.config = config or DownloaderConfig()
        self.blacklist = blacklist

        # A client passed in belongs to the caller and is not closed here
        self._owns_client = client is None
        self.http_client = client or httpx.AsyncClient(
            timeout=self.config.timeout,
            follow_redirects=self.config.follow_redirects,
        )

    async def close(self):
        """Close HTTP client."""
        if self._owns_client:
            await self.http_client.aclose()

    async def __aenter__(self) -> "ImageFetcher":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def is_blacklisted(self, response_url: Optional[str]) -> bool:
        return response_url is not None and response_url in self.blacklist

    async def fetch(self, url: str) -> FetchResult:
        """
        Download ``url`` once.

        Returns:
            FetchResult with status SUCCESS and the body, EMPTY for a non-200
            or blacklisted response, ERROR for a transport fault. Never raises
            for network problems.
        """
        try:
            response = await self.http_client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return FetchResult(url=url, status=FetchStatus.ERROR, error=str(e) or type(e).__name__)

        response_url = str(response.url)

        if response.status_code != httpx.codes.OK:
            return FetchResult(
                url=url,
                status=FetchStatus.EMPTY,
                response_url=response_url,
                status_code=response.status_code,
            )

        if self.is_blacklisted(response_url):
            return FetchResult(
                url=url,
                status=FetchStatus.EMPTY,
                response_url=response_url,
                status_code=response.status_code,
            )

        return FetchResult(
            url=url,
            status=FetchStatus.SUCCESS,
            data=response.content,
            response_url=response_url,
            status_code=response.status_code,
        )
