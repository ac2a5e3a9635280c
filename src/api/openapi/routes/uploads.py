"""Upload URL endpoint."""

from fastapi import APIRouter

from src.api.dependencies import UploadServiceDep
from src.application.dtos.uploads import UploadUrlRequest, UploadUrlResponse

router = APIRouter()


@router.post(
    "/upload/signed-url",
    response_model=UploadUrlResponse,
    summary="Issue upload URL",
    description=(
        "Reserve a video id and return a short-lived URL the client uploads "
        "the file to with a single PUT."
    ),
)
async def issue_upload_url(
    request: UploadUrlRequest,
    service: UploadServiceDep,
) -> UploadUrlResponse:
    return await service.issue_upload_url(request.file_name, request.file_type)
