"""
Extractor interface and metadata model.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass
class VideoMetadata:
    """Video metadata as reported by the extractor."""
    title: str
    duration: int  # seconds
    thumbnail: Optional[str] = None
    channel: Optional[str] = None

    @classmethod
    def from_info_dict(cls, info: Dict[str, Any]) -> "VideoMetadata":
        """Build from a yt-dlp ``--dump-json`` document."""
        duration = info.get("duration") or 0
        return cls(
            title=info.get("title") or "",
            duration=max(int(duration), 0),
            thumbnail=info.get("thumbnail"),
            channel=info.get("channel") or info.get("uploader"),
        )

    def to_dict(self) -> Dict:
        return asdict(self)


class MediaExtractor(ABC):
    """Capability to fetch metadata and transcode audio for a video URL."""

    @abstractmethod
    async def fetch_metadata(self, url: str) -> VideoMetadata:
        """Return metadata for url. Raises ExtractorError on failure."""

    @abstractmethod
    async def download_audio(self, url: str, output_template: str) -> None:
        """
        Download url and transcode it to MP3.

        ``output_template`` contains a ``%(ext)s`` placeholder that the
        extractor replaces with the final extension.
        """
