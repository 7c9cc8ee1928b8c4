"""Configuration Module - Handles application configuration.

The conversion API wraps the yt-dlp executable. Everything that shapes how it
is invoked (binary, limits, cookie source) and how the HTTP layer behaves
(port, CORS, rate limiting) is configurable via environment variables.

Cookie sources:
- USE_BROWSER_COOKIES: browser name passed to --cookies-from-browser (local dev)
- YT_COOKIES: base64-encoded cookies.txt content (hosted deployments)
"""

import os
import tempfile
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "0.0.0.0"
    port: int = 3001
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Load configuration from environment variables."""
        origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", 3001)),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        )


@dataclass
class ExtractorConfig:
    """yt-dlp invocation configuration."""

    binary: str = "yt-dlp"
    timeout: float = 300.0
    max_output_bytes: int = 10 * 1024 * 1024
    artifact_dir: str = field(default_factory=tempfile.gettempdir)

    # Cookie sources (at most one is normally set)
    browser_cookies: Optional[str] = None
    cookies_b64: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ExtractorConfig":
        """Load configuration from environment variables."""
        return cls(
            binary=os.getenv("YT_DLP_BINARY", "yt-dlp"),
            timeout=float(os.getenv("EXTRACTOR_TIMEOUT", 300)),
            max_output_bytes=int(os.getenv("EXTRACTOR_MAX_OUTPUT", 10 * 1024 * 1024)),
            artifact_dir=os.getenv("ARTIFACT_DIR") or tempfile.gettempdir(),
            browser_cookies=os.getenv("USE_BROWSER_COOKIES") or None,
            cookies_b64=os.getenv("YT_COOKIES") or None,
        )


@dataclass
class RateLimitConfig:
    """Per-client rate limiting configuration."""

    limit: int = 10
    window: int = 60
    sweep_threshold: int = 10000

    @classmethod
    def from_env(cls) -> "RateLimitConfig":
        """Load configuration from environment variables."""
        return cls(
            limit=int(os.getenv("RATE_LIMIT", 10)),
            window=int(os.getenv("RATE_WINDOW", 60)),
            sweep_threshold=int(os.getenv("RATE_SWEEP_THRESHOLD", 10000)),
        )


@dataclass
class AppConfig:
    """Main application configuration."""

    server: ServerConfig = field(default_factory=ServerConfig)
    extractor: ExtractorConfig = field(default_factory=ExtractorConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    log_level: str = "INFO"
    debug: bool = False

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load configuration from environment variables."""
        return cls(
            server=ServerConfig.from_env(),
            extractor=ExtractorConfig.from_env(),
            rate_limit=RateLimitConfig.from_env(),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            debug=os.getenv("DEBUG", "false").lower() == "true",
        )

    @classmethod
    def default(cls) -> "AppConfig":
        """Get default configuration."""
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary (cookie content is never included)."""
        return {
            "server": {
                "host": self.server.host,
                "port": self.server.port,
            },
            "extractor": {
                "binary": self.extractor.binary,
                "timeout": self.extractor.timeout,
                "artifact_dir": self.extractor.artifact_dir,
                "browser_cookies": self.extractor.browser_cookies,
                "cookies_configured": self.extractor.cookies_b64 is not None,
            },
            "rate_limit": {
                "limit": self.rate_limit.limit,
                "window": self.rate_limit.window,
            },
            "log_level": self.log_level,
        }


# Global config instance (lazy loaded)
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def reset_config() -> None:
    """Reset the global configuration (useful for testing)."""
    global _config
    _config = None
