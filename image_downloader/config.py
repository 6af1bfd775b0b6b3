"""
Image Downloader Configuration

Runtime settings for a batch run. Defaults come from constants, can be
overridden from the environment (``IMAGE_DOWNLOADER_*``) and finally from the
command line.
"""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .constants import (
    APP_NAME,
    URL_FILE_EXTENSION,
    DEFAULT_MAX_CONCURRENT,
    DEFAULT_TIMEOUT,
    DEFAULT_DIGEST_LENGTH,
    ENV_DATA_ROOT,
    ENV_MAX_CONCURRENT,
    ENV_TIMEOUT,
    ENV_DIGEST_LENGTH,
)


def application_data_root() -> Path:
    """
    Resolve the per-user application data directory.

    Order: ``IMAGE_DOWNLOADER_DATA_ROOT``, ``%APPDATA%`` on Windows,
    ``$XDG_CONFIG_HOME``, then ``~/.config``.
    """
    override = os.getenv(ENV_DATA_ROOT)
    if override:
        return Path(override).expanduser()

    if sys.platform == "win32":
        appdata = os.getenv("APPDATA")
        if appdata:
            return Path(appdata)
        return Path.home() / "AppData" / "Roaming"

    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)
    return Path.home() / ".config"


def default_output_root() -> Path:
    return application_data_root() / APP_NAME


@dataclass
class DownloaderConfig:
    """Configuration for a batch download."""
    # Output settings
    output_root: Path = field(default_factory=default_output_root)
    digest_length: int = DEFAULT_DIGEST_LENGTH

    # Download settings
    max_concurrent: int = DEFAULT_MAX_CONCURRENT
    timeout: float = DEFAULT_TIMEOUT
    follow_redirects: bool = True

    # Discovery settings
    url_file_extension: str = URL_FILE_EXTENSION

    def __post_init__(self):
        self.output_root = Path(self.output_root)
        if self.max_concurrent < 1:
            raise ValueError(f"max_concurrent must be >= 1, got {self.max_concurrent}")
        if not 1 <= self.digest_length <= 64:
            raise ValueError(f"digest_length must be in 1..64, got {self.digest_length}")

    @classmethod
    def from_env(cls, output_root: Optional[Path] = None, **overrides) -> "DownloaderConfig":
        """Build a config from ``IMAGE_DOWNLOADER_*`` variables, then apply overrides."""
        values = {
            "max_concurrent": int(os.getenv(ENV_MAX_CONCURRENT, str(DEFAULT_MAX_CONCURRENT))),
            "timeout": float(os.getenv(ENV_TIMEOUT, str(DEFAULT_TIMEOUT))),
            "digest_length": int(os.getenv(ENV_DIGEST_LENGTH, str(DEFAULT_DIGEST_LENGTH))),
        }
        if output_root is not None:
            values["output_root"] = Path(output_root)
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
