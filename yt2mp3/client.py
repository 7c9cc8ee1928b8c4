"""
Conversion Client

Drives the two-step preview-then-convert flow against a running yt2mp3 API.

States:
    IDLE -> PREVIEWING -> CONVERTING -> READY | FAILED

READY and FAILED go back to IDLE through ``reset()``, which also drops any
downloaded payload. Requests are strictly sequential and never retried.
"""

from __future__ import annotations

import logging
import os
import re
from enum import Enum
from typing import Optional
from urllib.parse import unquote

import httpx

from yt2mp3.services.extractor.base import VideoMetadata
from yt2mp3.services.url_normalizer import is_valid_reference

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "http://localhost:3001"
DEFAULT_DOWNLOAD_NAME = "audio.mp3"

_DISPOSITION_FILENAME = re.compile(r'filename="?([^"]+)"?')


class ClientState(str, Enum):
    IDLE = "idle"
    PREVIEWING = "previewing"
    CONVERTING = "converting"
    READY = "ready"
    FAILED = "failed"


class ClientStateError(RuntimeError):
    """Raised when an action is not allowed in the current state."""


def format_duration(seconds) -> str:
    """Format seconds as ``m:ss`` or ``h:mm:ss``."""
    if not seconds:
        return "0:00"
    seconds = int(seconds)
    h, rem = divmod(seconds, 3600)
    m, s = divmod(rem, 60)
    if h > 0:
        return f"{h}:{m:02d}:{s:02d}"
    return f"{m}:{s:02d}"


def filename_from_disposition(header: Optional[str], default: str = DEFAULT_DOWNLOAD_NAME) -> str:
    """Extract and percent-decode the filename from a Content-Disposition header."""
    match = _DISPOSITION_FILENAME.search(header or "")
    if not match:
        return default
    return unquote(match.group(1))


def _error_message(response: httpx.Response, fallback: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict) and body.get("error"):
        return body["error"]
    return fallback


class ConversionSession:
    """
    One user's preview/convert flow.

    Usage:
        with ConversionSession("http://localhost:3001") as session:
            session.preview("https://youtu.be/dQw4w9WgXcQ")
            session.convert()
            session.save("downloads")
    """

    def __init__(
        self,
        api_base: str = DEFAULT_API_BASE,
        client: Optional[httpx.Client] = None,
        timeout: float = 330.0,
    ):
        self.api_base = api_base.rstrip("/")
        self._client = client or httpx.Client(timeout=timeout)
        self._owns_client = client is None
        self._clear()

    def _clear(self):
        self.state = ClientState.IDLE
        self.url: Optional[str] = None
        self.metadata: Optional[VideoMetadata] = None
        self.validation_error: Optional[str] = None
        self.notification: Optional[str] = None
        self.payload: Optional[bytes] = None
        self.filename: Optional[str] = None

    def _fail(self, message: str):
        logger.warning(message)
        self.state = ClientState.FAILED
        self.notification = message

    def preview(self, url: str) -> Optional[VideoMetadata]:
        """
        Validate url and fetch its metadata.

        Invalid input leaves the session IDLE with ``validation_error`` set and
        sends nothing. Returns the metadata on success, None otherwise.
        """
        if self.state not in (ClientState.IDLE, ClientState.PREVIEWING):
            raise ClientStateError(f"Cannot preview while {self.state.value}")

        url = (url or "").strip()
        if not url or not is_valid_reference(url):
            self.state = ClientState.IDLE
            self.validation_error = "Please enter a valid YouTube URL."
            return None

        self.validation_error = None
        self.url = url
        try:
            response = self._client.post(f"{self.api_base}/api/info", json={"url": url})
            if response.status_code != 200:
                self._fail(_error_message(response, "Could not fetch video info."))
                return None
            info = response.json()
        except (httpx.HTTPError, ValueError) as e:
            self._fail(str(e) or "Could not fetch video info.")
            return None

        if not isinstance(info, dict):
            self._fail("Could not fetch video info.")
            return None

        self.metadata = VideoMetadata.from_info_dict(info)
        self.state = ClientState.PREVIEWING
        return self.metadata

    def convert(self) -> Optional[bytes]:
        """Convert the previewed URL. Returns the MP3 bytes, or None on failure."""
        if self.state is not ClientState.PREVIEWING:
            raise ClientStateError(f"Cannot convert while {self.state.value}")

        self.state = ClientState.CONVERTING
        try:
            response = self._client.post(f"{self.api_base}/api/convert", json={"url": self.url})
            if response.status_code != 200:
                self._fail(_error_message(response, "Conversion failed."))
                return None
            payload = response.content
        except httpx.HTTPError as e:
            self._fail(str(e) or "Conversion failed.")
            return None

        self.payload = payload
        self.filename = filename_from_disposition(response.headers.get("content-disposition"))
        self.state = ClientState.READY
        return payload

    def run(self, url: str) -> Optional[bytes]:
        """Preview then convert, stopping at the first failure."""
        if self.preview(url) is None:
            return None
        return self.convert()

    def save(self, directory: str = ".") -> str:
        """Write the READY payload to directory. Returns the file path."""
        if self.state is not ClientState.READY:
            raise ClientStateError(f"Nothing to save while {self.state.value}")
        os.makedirs(directory, exist_ok=True)
        # Never let a server-supplied name escape the target directory
        path = os.path.join(directory, os.path.basename(self.filename) or DEFAULT_DOWNLOAD_NAME)
        with open(path, "wb") as f:
            f.write(self.payload)
        return path

    def reset(self):
        """Return to IDLE, releasing any held payload."""
        self._clear()

    def close(self):
        self.reset()
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "ConversionSession":
        return self

    def __exit__(self, *exc):
        self.close()
