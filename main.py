"""
yt2mp3 - Main Entry Point

YouTube to MP3 conversion service built on yt-dlp.
It supports two modes:
  - serve: run the HTTP API
  - fetch: convert one URL through a running API and save the MP3
"""

import argparse
import logging
import sys

from dotenv import load_dotenv

from yt2mp3.client import ConversionSession, DEFAULT_API_BASE, format_duration
from yt2mp3.core.config import AppConfig
from yt2mp3.core.logging import setup_logging, silence_noisy_loggers


def run_serve_mode(config: AppConfig):
    """Run the HTTP API with uvicorn."""
    from yt2mp3.api import run_http_server

    logger = logging.getLogger(__name__)
    logger.info(f"Starting yt2mp3 API on {config.server.host}:{config.server.port}")
    run_http_server(config)


def run_fetch_mode(url: str, api_base: str, output_dir: str) -> int:
    """
    Convert a single URL through a running API.

    Returns:
        Process exit code
    """
    logger = logging.getLogger(__name__)

    with ConversionSession(api_base) as session:
        meta = session.preview(url)
        if meta is None:
            logger.error(session.validation_error or session.notification)
            return 1

        logger.info(f"{meta.title} ({format_duration(meta.duration)}) - {meta.channel or ''}")
        logger.info("Converting to MP3... this may take a moment")

        if session.convert() is None:
            logger.error(session.notification)
            return 1

        path = session.save(output_dir)
        logger.info(f"Saved {path}")
        return 0


def main():
    """Main entry point"""
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="YouTube to MP3 conversion service"
    )

    parser.add_argument(
        'mode',
        nargs='?',
        choices=['serve', 'fetch'],
        default='serve',
        help='Application mode (default: serve)'
    )

    parser.add_argument(
        'url',
        nargs='?',
        help='YouTube URL to convert (fetch mode only)'
    )

    parser.add_argument(
        '--host',
        type=str,
        help='Bind address (serve mode, default: $HOST or 0.0.0.0)'
    )

    parser.add_argument(
        '--port',
        type=int,
        help='HTTP port (serve mode, default: $PORT or 3001)'
    )

    parser.add_argument(
        '--api',
        type=str,
        default=DEFAULT_API_BASE,
        help=f'API base URL (fetch mode, default: {DEFAULT_API_BASE})'
    )

    parser.add_argument(
        '--output',
        type=str,
        default='.',
        help='Directory for the downloaded MP3 (fetch mode, default: .)'
    )

    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default=None,
        help='Logging level (default: $LOG_LEVEL or INFO)'
    )

    args = parser.parse_args()

    config = AppConfig.from_env()

    # Override with command line arguments
    if args.host:
        config.server.host = args.host
    if args.port:
        config.server.port = args.port
    if args.log_level:
        config.log_level = args.log_level

    setup_logging(config.log_level)
    silence_noisy_loggers()

    if args.mode == 'fetch':
        if not args.url:
            parser.error("fetch mode requires a URL")
        sys.exit(run_fetch_mode(args.url, args.api, args.output))

    run_serve_mode(config)


if __name__ == "__main__":
    main()
