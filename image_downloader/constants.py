"""
Image Downloader Constants

Fixed values shared by the fetcher, saver and orchestrator.
"""

# ============================================
# Application
# ============================================

APP_NAME = "image-downloader"

# URL-list files are discovered by this suffix (compared case-insensitively)
URL_FILE_EXTENSION = ".txt"


# ============================================
# Blacklist
# ============================================

# Final response URLs that serve a "content removed" placeholder image
RESPONSE_URL_BLACKLIST = frozenset({
    "https://assets.tumblr.com/images/media_violation/community_guidelines_v1_500.png",
    "https://i.imgur.com/removed.png",
})


# ============================================
# Defaults
# ============================================

DEFAULT_MAX_CONCURRENT = 16
DEFAULT_TIMEOUT = 30.0          # seconds, per request
DEFAULT_DIGEST_LENGTH = 16      # hex characters of the SHA-256 digest

# Pillow format name -> extension used when the URL carries none
FORMAT_TO_EXTENSION = {
    "PNG": ".png",
    "JPEG": ".jpg",
    "GIF": ".gif",
    "BMP": ".bmp",
    "WEBP": ".webp",
    "TIFF": ".tiff",
    "ICO": ".ico",
}


# ============================================
# Environment variables
# ============================================

ENV_DATA_ROOT = "IMAGE_DOWNLOADER_DATA_ROOT"
ENV_MAX_CONCURRENT = "IMAGE_DOWNLOADER_MAX_CONCURRENT"
ENV_TIMEOUT = "IMAGE_DOWNLOADER_TIMEOUT"
ENV_DIGEST_LENGTH = "IMAGE_DOWNLOADER_DIGEST_LENGTH"
