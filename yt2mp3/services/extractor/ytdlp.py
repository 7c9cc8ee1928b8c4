"""
yt-dlp Extractor

Runs the yt-dlp executable as a child process. Arguments are always passed
as an argument vector; nothing is interpolated into a shell.
"""

import asyncio
import json
import logging
from typing import List, Optional, Sequence, Tuple

from yt2mp3.core.config import ExtractorConfig
from yt2mp3.core.exceptions import ExtractorError
from yt2mp3.services.extractor.base import MediaExtractor, VideoMetadata
from yt2mp3.services.extractor.cookies import cookie_args

logger = logging.getLogger(__name__)

READ_CHUNK = 64 * 1024

# Avoids most bot checks on datacenter IPs
BASE_ARGS = [
    "--no-playlist",
    "--no-warnings",
    "--no-check-formats",
    "--extractor-args", "youtube:player_client=ios,web",
]

# Format preference: h264 video, then 720p, then AAC audio; keep audio only
AUDIO_ARGS = [
    "-S", "vcodec:h264,res:720,acodec:aac",
    "-x",
    "--audio-format", "mp3",
    "--audio-quality", "0",
]


class YtDlpExtractor(MediaExtractor):
    """
    MediaExtractor backed by the yt-dlp command line tool.

    Usage:
        extractor = YtDlpExtractor.from_config(config.extractor)
        meta = await extractor.fetch_metadata("https://www.youtube.com/watch?v=dQw4w9WgXcQ")
    """

    def __init__(
        self,
        binary: str = "yt-dlp",
        base_args: Optional[Sequence[str]] = None,
        timeout: float = 300.0,
        max_output_bytes: int = 10 * 1024 * 1024,
    ):
        self.binary = binary
        self.base_args = list(BASE_ARGS if base_args is None else base_args)
        self.timeout = timeout
        self.max_output_bytes = max_output_bytes

    @classmethod
    def from_config(cls, config: ExtractorConfig) -> "YtDlpExtractor":
        """Build an extractor, decoding any configured cookies once."""
        return cls(
            binary=config.binary,
            base_args=BASE_ARGS + cookie_args(config),
            timeout=config.timeout,
            max_output_bytes=config.max_output_bytes,
        )

    async def run(self, args: List[str]) -> str:
        """
        Run yt-dlp with the base arguments followed by args.

        Returns:
            Trimmed stdout

        Raises:
            ExtractorError: binary missing, timeout, non-zero exit or
                oversized output. The message is yt-dlp's stderr when present.
        """
        full_args = [*self.base_args, *args]
        logger.info(f"Running yt-dlp with args: {' '.join(full_args)}")

        try:
            proc = await asyncio.create_subprocess_exec(
                self.binary, *full_args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ExtractorError(f"Could not start {self.binary}: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(self._collect(proc), timeout=self.timeout)
        except asyncio.TimeoutError:
            await self._kill(proc)
            raise ExtractorError(f"{self.binary} timed out after {self.timeout:g} seconds")
        except ExtractorError:
            await self._kill(proc)
            raise

        if proc.returncode != 0:
            diagnostic = stderr.decode("utf-8", errors="replace").strip()
            raise ExtractorError(
                diagnostic or f"{self.binary} exited with code {proc.returncode}",
                returncode=proc.returncode,
            )

        return stdout.decode("utf-8", errors="replace").strip()

    async def _collect(self, proc) -> Tuple[bytes, bytes]:
        """Read stdout up to the output cap while stderr drains alongside."""
        stderr_task = asyncio.ensure_future(proc.stderr.read())
        try:
            chunks = []
            total = 0
            while True:
                chunk = await proc.stdout.read(READ_CHUNK)
                if not chunk:
                    break
                total += len(chunk)
                if total > self.max_output_bytes:
                    raise ExtractorError(
                        f"{self.binary} output exceeded {self.max_output_bytes} bytes"
                    )
                chunks.append(chunk)

            await proc.wait()
            stderr = await stderr_task
        finally:
            if not stderr_task.done():
                stderr_task.cancel()

        return b"".join(chunks), stderr

    @staticmethod
    async def _kill(proc):
        if proc.returncode is None:
            try:
                proc.kill()
            except ProcessLookupError:
                pass
            await proc.wait()

    async def fetch_metadata(self, url: str) -> VideoMetadata:
        raw = await self.run(["--dump-json", url])
        try:
            info = json.loads(raw)
            return VideoMetadata.from_info_dict(info)
        except (ValueError, TypeError, AttributeError) as e:
            raise ExtractorError(f"Could not parse yt-dlp output: {e}") from e

    async def download_audio(self, url: str, output_template: str) -> None:
        await self.run([*AUDIO_ARGS, "-o", output_template, url])
