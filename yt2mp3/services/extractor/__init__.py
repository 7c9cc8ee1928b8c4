"""
Extractor Module

Metadata lookup and audio transcoding through yt-dlp.
"""

from yt2mp3.services.extractor.base import (
    MediaExtractor,
    VideoMetadata,
)
from yt2mp3.services.extractor.ytdlp import (
    YtDlpExtractor,
    BASE_ARGS,
    AUDIO_ARGS,
)
from yt2mp3.services.extractor.cookies import (
    cookie_args,
    write_cookie_file,
)

__all__ = [
    # Interface
    "MediaExtractor",
    "VideoMetadata",
    # yt-dlp
    "YtDlpExtractor",
    "BASE_ARGS",
    "AUDIO_ARGS",
    # Cookies
    "cookie_args",
    "write_cookie_file",
]
