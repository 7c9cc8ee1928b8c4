"""
Media Router

Video metadata lookup and MP3 conversion endpoints.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from yt2mp3.models.common import ErrorResponse
from yt2mp3.models.media import MediaRequest, VideoInfoResponse
from yt2mp3.routers.deps import enforce_rate_limit, get_media_service
from yt2mp3.services.media import MediaService

logger = logging.getLogger(__name__)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid YouTube URL"},
    429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
    500: {"model": ErrorResponse, "description": "Extraction or conversion failed"},
}

router = APIRouter(
    prefix="/api",
    tags=["media"],
    dependencies=[Depends(enforce_rate_limit)],
    responses=ERROR_RESPONSES,
)


@router.post("/info", response_model=VideoInfoResponse)
async def video_info(
    request: MediaRequest,
    service: MediaService = Depends(get_media_service),
):
    """
    Get information about a YouTube video.

    Returns title, duration (seconds), thumbnail and channel. yt-dlp
    failures are returned verbatim in the error body.
    """
    meta = await service.get_info(request.url)
    return VideoInfoResponse(**meta.to_dict())


@router.post(
    "/convert",
    response_class=StreamingResponse,
    responses={200: {"content": {"audio/mpeg": {}}, "description": "MP3 file"}},
)
async def convert(
    request: MediaRequest,
    service: MediaService = Depends(get_media_service),
):
    """
    Convert a YouTube video to MP3 and stream it back as an attachment.

    The temporary file is removed once streaming finishes or fails.
    """
    result = await service.convert(request.url)
    artifact = result.artifact

    return StreamingResponse(
        artifact.iter_bytes(),
        media_type="audio/mpeg",
        headers={
            "Content-Length": str(result.size),
            "Content-Disposition": result.content_disposition,
        },
        background=BackgroundTask(artifact.discard),
    )
