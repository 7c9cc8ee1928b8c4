"""
URL Normalizer

Validates YouTube URLs and rewrites them to a single canonical watch URL.
"""

import logging
import re
from typing import Optional

from yt2mp3.core.exceptions import InvalidReferenceError

logger = logging.getLogger(__name__)

CANONICAL_URL = "https://www.youtube.com/watch?v={video_id}"

# Accepted shapes: watch, shorts, embed, youtu.be short links, YouTube Music
ACCEPTED_URL = re.compile(
    r"^(https?://)?(www\.)?"
    r"(youtube\.com/(watch\?v=|shorts/|embed/)|youtu\.be/|music\.youtube\.com/watch\?v=)"
)

# Evaluated in order; a later match overrides an earlier one.
ID_PATTERNS = (
    re.compile(r"youtu\.be/([a-zA-Z0-9_-]{11})"),
    re.compile(r"[?&]v=([a-zA-Z0-9_-]{11})"),
    re.compile(r"shorts/([a-zA-Z0-9_-]{11})"),
    re.compile(r"embed/([a-zA-Z0-9_-]{11})"),
)


def is_valid_reference(value) -> bool:
    """Return True if value is a string in one of the accepted URL shapes."""
    return isinstance(value, str) and ACCEPTED_URL.match(value.strip()) is not None


def extract_video_id(url: str) -> Optional[str]:
    """Extract the 11-character video ID, or None if no pattern matches."""
    video_id = None
    for pattern in ID_PATTERNS:
        match = pattern.search(url)
        if match:
            video_id = match.group(1)
    return video_id


def normalize_reference(value) -> str:
    """
    Validate a user-supplied URL and return its canonical form.

    Args:
        value: Raw URL as submitted by the client

    Returns:
        ``https://www.youtube.com/watch?v=<id>``, or the trimmed input when
        it passes validation but no ID can be extracted from it

    Raises:
        InvalidReferenceError: value is not an accepted YouTube URL
    """
    if not is_valid_reference(value):
        raise InvalidReferenceError(value)

    url = value.strip()
    video_id = extract_video_id(url)
    if video_id:
        return CANONICAL_URL.format(video_id=video_id)

    # Accepted but unparseable (e.g. truncated ID): hand it to yt-dlp as-is
    logger.debug(f"No video ID found in accepted URL, passing through: {url}")
    return url
