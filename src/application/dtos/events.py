"""DTOs for object-storage notifications."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class StorageEventRecord(BaseModel):
    """One entry of an S3/MinIO notification's ``Records`` list."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    event_name: str = Field(default="", alias="eventName")
    s3: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_object_created(self) -> bool:
        return "ObjectCreated" in self.event_name

    @property
    def raw_bucket(self) -> str:
        return str(self.s3.get("bucket", {}).get("name", ""))

    @property
    def raw_key(self) -> str:
        return str(self.s3.get("object", {}).get("key", ""))


class StorageEvent(BaseModel):
    """An object-storage notification as delivered by S3 or MinIO."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    records: list[StorageEventRecord] = Field(default_factory=list, alias="Records")


class StorageEventResult(BaseModel):
    """Outcome of handling one notification."""

    message: str
    processed: int = Field(ge=0, description="Objects moved to a final status")
    skipped: int = Field(ge=0, description="Records ignored or already finished")
