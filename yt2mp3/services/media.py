"""
Media Service

Metadata lookup and MP3 conversion for a submitted YouTube URL.
"""

import logging
import re
from dataclasses import dataclass
from urllib.parse import quote

from yt2mp3.core.exceptions import ArtifactMissingError, ConversionError, ExtractorError
from yt2mp3.services.artifacts import ConversionArtifact
from yt2mp3.services.extractor import MediaExtractor, VideoMetadata
from yt2mp3.services.url_normalizer import normalize_reference

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "audio"

# Everything except ASCII letters, digits, underscore, whitespace, hyphen, brackets and parens
_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9_\s\-()\[\]]")

# Characters encodeURIComponent leaves alone beyond quote()'s defaults
_URI_COMPONENT_SAFE = "!*'()"


def sanitize_filename(title) -> str:
    """Strip a title down to filesystem and header safe characters."""
    cleaned = _UNSAFE_FILENAME_CHARS.sub("", title or "").strip()
    return cleaned or DEFAULT_FILENAME


def content_disposition(filename: str, extension: str = "mp3") -> str:
    """Attachment header with the filename percent-encoded like encodeURIComponent."""
    return f'attachment; filename="{quote(filename, safe=_URI_COMPONENT_SAFE)}.{extension}"'


@dataclass
class ConversionResult:
    """A finished conversion, ready to stream."""
    artifact: ConversionArtifact
    filename: str
    size: int

    @property
    def content_disposition(self) -> str:
        return content_disposition(self.filename)


class MediaService:
    """
    Metadata and conversion pipeline.

    Usage:
        service = MediaService(YtDlpExtractor(), "/tmp")
        info = await service.get_info("https://youtu.be/dQw4w9WgXcQ")
        result = await service.convert("https://youtu.be/dQw4w9WgXcQ")
    """

    def __init__(self, extractor: MediaExtractor, artifact_dir: str):
        self.extractor = extractor
        self.artifact_dir = artifact_dir

    async def get_info(self, url) -> VideoMetadata:
        """
        Look up video metadata.

        Raises:
            InvalidReferenceError: url is not an accepted YouTube URL
            ExtractorError: yt-dlp failed; message is its diagnostic
        """
        clean_url = normalize_reference(url)
        logger.info(f"Clean URL: {clean_url}")
        return await self.extractor.fetch_metadata(clean_url)

    async def convert(self, url) -> ConversionResult:
        """
        Download and transcode url to a temporary MP3.

        The returned artifact is owned by the caller, which must stream or
        discard it. On any failure here the artifact is already discarded.

        Raises:
            InvalidReferenceError: url is not an accepted YouTube URL
            ConversionError: yt-dlp failed
            ArtifactMissingError: yt-dlp succeeded but produced no MP3
        """
        clean_url = normalize_reference(url)
        artifact = ConversionArtifact(self.artifact_dir)

        try:
            meta = await self.extractor.fetch_metadata(clean_url)
            filename = sanitize_filename(meta.title)

            await self.extractor.download_audio(clean_url, artifact.output_template)

            if not artifact.exists():
                raise ArtifactMissingError(artifact.path)

            size = artifact.size()
        except ExtractorError as e:
            logger.error(f"CONVERT ERROR: {e.diagnostic}")
            artifact.discard()
            raise ConversionError(e.diagnostic) from e
        except Exception as e:
            logger.error(f"CONVERT ERROR: {e}")
            artifact.discard()
            raise

        logger.info(f"Converted {clean_url} -> {artifact.path} ({size} bytes)")
        return ConversionResult(artifact=artifact, filename=filename, size=size)
