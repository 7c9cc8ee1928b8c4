"""
Router dependencies

Shared components live on ``app.state`` and are resolved per request, so
tests can swap them with ``app.dependency_overrides``.
"""

from fastapi import Depends, Request

from yt2mp3.services.media import MediaService
from yt2mp3.services.rate_limiter import SlidingWindowRateLimiter


def get_media_service(request: Request) -> MediaService:
    return request.app.state.media_service


def get_rate_limiter(request: Request) -> SlidingWindowRateLimiter:
    return request.app.state.rate_limiter


def client_key(request: Request) -> str:
    """Client address, preferring the first X-Forwarded-For hop behind a proxy."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    if request.client:
        return request.client.host
    return "unknown"


async def enforce_rate_limit(
    request: Request,
    limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
):
    """Raise RateLimitedError once the caller has used up its window."""
    limiter.check(client_key(request))
