"""Object-storage notification endpoint.

Point the bucket's object-created notifications (S3 event notification or
MinIO webhook target) at ``POST /events/storage``. A non-2xx response makes
the notifier redeliver.
"""

from fastapi import APIRouter

from src.api.dependencies import ProcessingServiceDep
from src.application.dtos.events import StorageEvent, StorageEventResult

router = APIRouter()


@router.post(
    "/events/storage",
    response_model=StorageEventResult,
    summary="Handle storage notification",
    description="Process uploaded videos named in an object-created notification.",
)
async def handle_storage_event(
    event: StorageEvent,
    service: ProcessingServiceDep,
) -> StorageEventResult:
    return await service.handle_notification(event)
