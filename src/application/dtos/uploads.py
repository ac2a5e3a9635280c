"""DTOs for upload URL issuance."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UploadUrlRequest(BaseModel):
    """Request for a pre-signed upload URL."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    file_name: str = Field(min_length=1, description="Client file name, e.g. clip.mp4")
    file_type: str = Field(min_length=1, description="MIME type of the upload")


class UploadUrlResponse(BaseModel):
    """A pre-signed upload URL and the record it belongs to."""

    model_config = ConfigDict(populate_by_name=True)

    upload_url: str = Field(alias="uploadUrl", description="Pre-signed PUT URL")
    video_id: str = Field(alias="videoId", description="ID of the placeholder record")
    s3_key: str = Field(alias="s3Key", description="Object key the upload lands at")
