"""Video catalog endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Path, Query, Response, status

from src.api.dependencies import CatalogServiceDep
from src.application.dtos.videos import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    VideoPage,
)
from src.domain.models.video import VideoRecord

router = APIRouter()

VideoIdPath = Annotated[str, Path(min_length=1, description="Video ID")]


@router.get(
    "/videos",
    response_model=VideoPage,
    response_model_exclude_none=True,
    summary="List videos",
    description="List active videos, newest first, optionally filtered by a search term.",
)
async def list_videos(
    service: CatalogServiceDep,
    search: Annotated[
        str | None,
        Query(description="Case-insensitive substring of title or description"),
    ] = None,
    page: Annotated[
        int,
        Query(ge=1, description="Page number"),
    ] = DEFAULT_PAGE,
    limit: Annotated[
        int,
        Query(ge=1, le=MAX_PAGE_SIZE, description="Items per page"),
    ] = DEFAULT_PAGE_SIZE,
) -> VideoPage:
    return await service.list_videos(search=search, page=page, limit=limit)


@router.post(
    "/videos",
    response_model=VideoRecord,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create video",
    description="Create a listed video record directly. Requires a title.",
)
async def create_video(
    service: CatalogServiceDep,
    payload: Annotated[dict[str, Any], Body()],
) -> VideoRecord:
    return await service.create_video(payload)


@router.get(
    "/videos/{video_id}",
    response_model=VideoRecord,
    response_model_exclude_none=True,
    summary="Get video",
)
async def get_video(video_id: VideoIdPath, service: CatalogServiceDep) -> VideoRecord:
    return await service.get_video(video_id)


@router.put(
    "/videos/{video_id}",
    response_model=VideoRecord,
    response_model_exclude_none=True,
    summary="Update video",
    description="Merge mutable fields into a video record.",
)
async def update_video(
    video_id: VideoIdPath,
    service: CatalogServiceDep,
    fields: Annotated[dict[str, Any], Body()],
) -> VideoRecord:
    return await service.update_video(video_id, fields)


@router.delete(
    "/videos/{video_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete video",
    description="Remove a video record. Stored files are not deleted.",
)
async def delete_video(video_id: VideoIdPath, service: CatalogServiceDep) -> Response:
    await service.delete_video(video_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/videos/{video_id}/view",
    response_model=VideoRecord,
    response_model_exclude_none=True,
    summary="Record a view",
)
async def record_view(video_id: VideoIdPath, service: CatalogServiceDep) -> VideoRecord:
    return await service.record_view(video_id)
