"""
Image Downloader test configuration

Fixtures shared by the test modules:
- in-memory images produced with Pillow
- httpx clients backed by ``httpx.MockTransport`` so no test touches the network
- a config whose output root lives in ``tmp_path``
"""

import sys
from io import BytesIO
from pathlib import Path
from typing import Callable, Dict, Tuple, Union

import httpx
import pytest
from PIL import Image

# Make the package importable when running from a source checkout
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

from image_downloader.config import DownloaderConfig


# ============================================
# Images
# ============================================

def make_image_bytes(fmt: str = "PNG", color=(255, 0, 0), size=(8, 8)) -> bytes:
    """Encode a solid-color image in ``fmt``."""
    image = Image.new("RGB", size, color=color)
    buffer = BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return make_image_bytes("PNG")


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_image_bytes("JPEG", color=(0, 128, 255))


# ============================================
# HTTP
# ============================================

# url -> (status, body) or url -> (status, body, headers)
Routes = Dict[str, Union[Tuple[int, bytes], Tuple[int, bytes, dict]]]


def routes_handler(routes: Routes) -> Callable[[httpx.Request], httpx.Response]:
    """
    Build a MockTransport handler serving ``routes``.

    Unknown URLs behave like an unreachable host.
    """
    def handler(request: httpx.Request) -> httpx.Response:
        route = routes.get(str(request.url))
        if route is None:
            raise httpx.ConnectError("Connection refused", request=request)
        status, body, *rest = route
        headers = rest[0] if rest else {}
        return httpx.Response(status, content=body, headers=headers)

    return handler


@pytest.fixture
def make_client() -> Callable[..., httpx.AsyncClient]:
    """
    Factory for mock-backed clients.

    Usage:
    ```python
    async with make_client({"https://a/x.png": (200, png)}) as client:
        ...
    ```
    """
    def factory(routes_or_handler) -> httpx.AsyncClient:
        handler = routes_or_handler
        if isinstance(routes_or_handler, dict):
            handler = routes_handler(routes_or_handler)
        return httpx.AsyncClient(
            transport=httpx.MockTransport(handler),
            follow_redirects=True,
        )

    return factory


# ============================================
# Config
# ============================================

@pytest.fixture
def output_root(tmp_path) -> Path:
    return tmp_path / "appdata" / "image-downloader"


@pytest.fixture
def config(output_root) -> DownloaderConfig:
    return DownloaderConfig(output_root=output_root, max_concurrent=4)


# ============================================
# Helper Functions
# ============================================

def write_url_file(path: Path, urls) -> Path:
    """Write ``urls`` one per line, creating parent folders."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("".join(f"{url}\n" for url in urls), encoding="utf-8")
    return path


def files_under(path: Path):
    """All regular files below ``path``, sorted."""
    if not path.exists():
        return []
    return sorted(p for p in path.rglob("*") if p.is_file())
