"""DTOs for video catalog operations."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.domain.models.video import VideoRecord

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 100


class VideoPage(BaseModel):
    """A page of active videos, newest first."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    videos: list[VideoRecord] = Field(default_factory=list)
    total: int = Field(ge=0, description="Active videos matching the search")
    page: int = Field(ge=1)
    limit: int = Field(ge=1)
    has_more: bool = Field(description="True when later pages hold more videos")
