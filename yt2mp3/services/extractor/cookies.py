"""
Cookie setup for yt-dlp.

YouTube throttles or blocks datacenter IPs without a signed-in session. Two
cookie sources are supported: a local browser profile, or a cookies.txt file
shipped as a base64 blob in the environment and decoded once at startup.
"""

import base64
import binascii
import logging
import os
import tempfile
from typing import List, Optional

from yt2mp3.core.config import ExtractorConfig

logger = logging.getLogger(__name__)

COOKIES_FILENAME = "yt_cookies.txt"


def write_cookie_file(cookies_b64: str, directory: Optional[str] = None) -> Optional[str]:
    """
    Decode a base64 cookies.txt blob to disk.

    Returns:
        Path of the written file, or None if the blob could not be decoded
    """
    path = os.path.join(directory or tempfile.gettempdir(), COOKIES_FILENAME)
    try:
        # Wrapped output from `base64` is fine; anything else outside the alphabet is not
        decoded = base64.b64decode("".join(cookies_b64.split()), validate=True).decode("utf-8")
        with open(path, "w", encoding="utf-8") as f:
            f.write(decoded)
    except (binascii.Error, UnicodeDecodeError, OSError) as e:
        logger.error(f"Failed to load YT_COOKIES: {e}")
        return None

    logger.info("YouTube cookies loaded from YT_COOKIES env var")
    return path


def cookie_args(config: ExtractorConfig, cookie_dir: Optional[str] = None) -> List[str]:
    """Build the cookie-related yt-dlp arguments for config."""
    args: List[str] = []
    if config.browser_cookies:
        args += ["--cookies-from-browser", config.browser_cookies]
    if config.cookies_b64:
        path = write_cookie_file(config.cookies_b64, cookie_dir)
        if path:
            args += ["--cookies", path]
    return args
