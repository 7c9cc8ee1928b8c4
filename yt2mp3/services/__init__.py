"""
yt2mp3 Services

Business logic layer for the conversion API.
"""

# Extraction
from yt2mp3.services.extractor import (
    MediaExtractor,
    VideoMetadata,
    YtDlpExtractor,
)

# Pipeline
from yt2mp3.services.media import (
    MediaService,
    ConversionResult,
    sanitize_filename,
    content_disposition,
)
from yt2mp3.services.artifacts import ConversionArtifact

# Request guards
from yt2mp3.services.rate_limiter import SlidingWindowRateLimiter
from yt2mp3.services.url_normalizer import (
    normalize_reference,
    is_valid_reference,
    extract_video_id,
)

__all__ = [
    # Extraction
    "MediaExtractor",
    "VideoMetadata",
    "YtDlpExtractor",
    # Pipeline
    "MediaService",
    "ConversionResult",
    "ConversionArtifact",
    "sanitize_filename",
    "content_disposition",
    # Request guards
    "SlidingWindowRateLimiter",
    "normalize_reference",
    "is_valid_reference",
    "extract_video_id",
]
