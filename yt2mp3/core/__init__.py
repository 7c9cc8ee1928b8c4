"""Core module - Configuration, logging, and shared infrastructure."""

from yt2mp3.core.config import (
    ServerConfig,
    ExtractorConfig,
    RateLimitConfig,
    AppConfig,
    get_config,
    reset_config,
)
from yt2mp3.core.logging import setup_logging, silence_noisy_loggers
from yt2mp3.core.exceptions import (
    Yt2Mp3Error,
    InvalidReferenceError,
    RateLimitedError,
    ExtractorError,
    ConversionError,
    ArtifactMissingError,
)

__all__ = [
    # Config
    "ServerConfig",
    "ExtractorConfig",
    "RateLimitConfig",
    "AppConfig",
    "get_config",
    "reset_config",
    # Logging
    "setup_logging",
    "silence_noisy_loggers",
    # Exceptions
    "Yt2Mp3Error",
    "InvalidReferenceError",
    "RateLimitedError",
    "ExtractorError",
    "ConversionError",
    "ArtifactMissingError",
]
