"""
Command line entry point

    image-downloader <path> [-v|--verbose] [-j N] [-o DIR]
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from .config import DownloaderConfig
from .downloader import ImageDownloader, discover_url_files
from .models import CommandLineOptions
from .selection import select_url_files


def parse_args(argv: Optional[List[str]] = None) -> CommandLineOptions:
    parser = argparse.ArgumentParser(
        prog="image-downloader",
        description="Download every image listed in the *.txt URL files under PATH",
    )
    parser.add_argument("path", nargs="?", help="Directory scanned for URL-list files")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose")
    parser.add_argument("-j", "--max-concurrent", type=int, help="Concurrent downloads")
    parser.add_argument("-o", "--output-root", help="Output root directory")

    args = parser.parse_args(argv)
    return CommandLineOptions(
        path=args.path,
        verbose=args.verbose,
        max_concurrent=args.max_concurrent,
        output_root=args.output_root,
    )


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


async def run(config: DownloaderConfig, url_files: List[Path]) -> None:
    async with ImageDownloader(config) as downloader:
        downloader.ensure_output_root()
        await downloader.run(url_files)


def main(argv: Optional[List[str]] = None) -> int:
    try:
        options = parse_args(argv)
    except ValidationError as e:
        print(f"Invalid arguments: {e}")
        return 0

    setup_logging(options.verbose)

    if options.path is None:
        print("No PATH provided!")
        return 0

    if not options.path.is_dir():
        print(f"Not a directory: {options.path}")
        return 0

    try:
        config = DownloaderConfig.from_env(
            output_root=options.output_root,
            max_concurrent=options.max_concurrent,
        )
    except ValueError as e:
        print(f"Invalid configuration: {e}")
        return 0

    # stdin is read before the event loop starts
    url_files = select_url_files(discover_url_files(options.path, config.url_file_extension))

    asyncio.run(run(config, url_files))
    return 0


if __name__ == "__main__":
    sys.exit(main())
