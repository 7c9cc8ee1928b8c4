"""yt2mp3 - YouTube to MP3 conversion API."""

__version__ = "1.0.0"
