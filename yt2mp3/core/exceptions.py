"""Custom exceptions for yt2mp3.

Every error carries the HTTP status it maps to and the message that is sent
back to the caller as ``{"error": message}``.
"""


class Yt2Mp3Error(Exception):
    """Base exception for yt2mp3 errors."""

    status_code = 500

    def __init__(self, message: str = "Internal server error."):
        self.message = message
        super().__init__(message)


class InvalidReferenceError(Yt2Mp3Error):
    """Raised when a submitted URL is not an accepted YouTube URL shape."""

    status_code = 400

    def __init__(self, reference=None):
        self.reference = reference
        super().__init__("Invalid YouTube URL.")


class RateLimitedError(Yt2Mp3Error):
    """Raised when a client exceeds its request budget. Retryable."""

    status_code = 429

    def __init__(self, key: str, retry_after: float = None):
        self.key = key
        self.retry_after = retry_after
        super().__init__("Too many requests. Try again later.")


class ExtractorError(Yt2Mp3Error):
    """Raised when a yt-dlp invocation fails.

    The message is the extractor's own diagnostic text (stderr, timeout
    notice or parse error) and is returned to the caller unmodified.
    """

    status_code = 500

    def __init__(self, diagnostic: str, returncode: int = None):
        self.diagnostic = diagnostic
        self.returncode = returncode
        super().__init__(diagnostic or "Could not fetch video info.")


class ConversionError(Yt2Mp3Error):
    """Raised when the convert pipeline fails before streaming starts."""

    status_code = 500

    def __init__(self, reason: str = None):
        self.reason = reason
        super().__init__("Conversion failed. The video may be too long or unavailable.")


class ArtifactMissingError(Yt2Mp3Error):
    """Raised when yt-dlp reported success but the expected MP3 is absent."""

    status_code = 500

    def __init__(self, path: str):
        self.path = path
        super().__init__("Converted file not found.")
