"""
Conversion Artifacts

Temporary MP3 files produced by a single convert request.
"""

import logging
import os
import secrets
from typing import Iterator

logger = logging.getLogger(__name__)

ARTIFACT_PREFIX = "yt2mp3_"
CHUNK_SIZE = 64 * 1024


class ConversionArtifact:
    """
    A temporary MP3 owned by exactly one request.

    ``discard()`` removes the file at most once no matter how many exit
    paths call it; removal errors are logged and swallowed.
    """

    def __init__(self, directory: str, artifact_id: str = None):
        self.artifact_id = artifact_id or secrets.token_hex(8)
        self.directory = directory
        self._discarded = False

    @property
    def output_template(self) -> str:
        """yt-dlp ``-o`` template; ``%(ext)s`` becomes the final extension."""
        return os.path.join(self.directory, f"{ARTIFACT_PREFIX}{self.artifact_id}.%(ext)s")

    @property
    def path(self) -> str:
        return os.path.join(self.directory, f"{ARTIFACT_PREFIX}{self.artifact_id}.mp3")

    @property
    def discarded(self) -> bool:
        return self._discarded

    def exists(self) -> bool:
        return os.path.isfile(self.path)

    def size(self) -> int:
        return os.stat(self.path).st_size

    def iter_bytes(self, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
        """Yield the file contents, discarding the file once iteration ends."""
        try:
            with open(self.path, "rb") as f:
                while True:
                    chunk = f.read(chunk_size)
                    if not chunk:
                        break
                    yield chunk
        except OSError as e:
            logger.error(f"STREAM ERROR: {e}")
            raise
        finally:
            self.discard()

    def discard(self) -> None:
        if self._discarded:
            return
        self._discarded = True
        try:
            os.remove(self.path)
            logger.debug(f"Removed artifact {self.path}")
        except OSError as e:
            logger.debug(f"Could not remove artifact {self.path}: {e}")
