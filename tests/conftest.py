"""Shared fixtures for yt2mp3 tests."""

import os
import sys
import textwrap
from pathlib import Path
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from yt2mp3.api import create_app
from yt2mp3.core.config import AppConfig, ExtractorConfig, RateLimitConfig
from yt2mp3.services import artifacts
from yt2mp3.services.extractor import MediaExtractor, VideoMetadata
from yt2mp3.services.rate_limiter import SlidingWindowRateLimiter

VIDEO_ID = "dQw4w9WgXcQ"
CANONICAL_URL = f"https://www.youtube.com/watch?v={VIDEO_ID}"

RICK_INFO = {
    "id": VIDEO_ID,
    "title": "Rick Astley - Never Gonna Give You Up (Official Music Video)",
    "duration": 212,
    "thumbnail": f"https://i.ytimg.com/vi/{VIDEO_ID}/maxresdefault.jpg",
    "channel": "Rick Astley",
    "uploader": "RickAstleyVEVO",
}

FAKE_MP3 = b"ID3\x04\x00\x00\x00\x00\x00\x00" + b"\xff\xfb\x90\x00" * 4096


class FakeExtractor(MediaExtractor):
    """In-memory stand-in for yt-dlp that records every call."""

    def __init__(
        self,
        info: Optional[Dict] = None,
        payload: bytes = FAKE_MP3,
        metadata_error: Optional[Exception] = None,
        download_error: Optional[Exception] = None,
        write_file: bool = True,
    ):
        self.info = dict(RICK_INFO if info is None else info)
        self.payload = payload
        self.metadata_error = metadata_error
        self.download_error = download_error
        self.write_file = write_file
        self.calls: List[tuple] = []

    async def fetch_metadata(self, url: str) -> VideoMetadata:
        self.calls.append(("metadata", url))
        if self.metadata_error:
            raise self.metadata_error
        return VideoMetadata.from_info_dict(self.info)

    async def download_audio(self, url: str, output_template: str) -> None:
        self.calls.append(("download", url, output_template))
        if self.download_error:
            raise self.download_error
        if self.write_file:
            Path(output_template.replace("%(ext)s", "mp3")).write_bytes(self.payload)


@pytest.fixture
def artifact_dir(tmp_path):
    """Directory that receives conversion artifacts"""
    path = tmp_path / "artifacts"
    path.mkdir()
    return path


@pytest.fixture
def config(artifact_dir):
    """App config pointing at the test artifact directory"""
    return AppConfig(
        extractor=ExtractorConfig(artifact_dir=str(artifact_dir)),
        rate_limit=RateLimitConfig(limit=10, window=60),
    )


@pytest.fixture
def extractor():
    return FakeExtractor()


@pytest.fixture
def limiter():
    return SlidingWindowRateLimiter(limit=10, window=60)


@pytest.fixture
def app(config, extractor, limiter):
    return create_app(config, extractor=extractor, rate_limiter=limiter)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def removals(monkeypatch):
    """Record every artifact removal attempt (real removal still happens)"""
    calls = []
    real_remove = os.remove

    def spy(path, *args, **kwargs):
        if os.path.basename(str(path)).startswith(artifacts.ARTIFACT_PREFIX):
            calls.append(str(path))
        return real_remove(path, *args, **kwargs)

    monkeypatch.setattr(artifacts.os, "remove", spy)
    return calls


@pytest.fixture
def fake_ytdlp(tmp_path):
    """Factory for throwaway executables that stand in for yt-dlp"""

    def make(body: str, name: str = "yt-dlp") -> str:
        script = tmp_path / name
        script.write_text(f"#!{sys.executable}\n" + textwrap.dedent(body))
        script.chmod(0o755)
        return str(script)

    return make
