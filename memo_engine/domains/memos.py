"""
Memo domain models.

These models define the persisted memo record, its image attachments and the
draft/patch inputs used to create and edit memos.
"""
import time
import uuid
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def generate_id() -> str:
    """Return a new opaque unique id."""
    return uuid.uuid4().hex


def now_ms() -> int:
    """Current time as integer milliseconds since the epoch."""
    return int(time.time() * 1000)


def _check_unique_image_ids(images: List["ImageAttachment"]) -> List["ImageAttachment"]:
    seen = set()
    for image in images:
        if image.id in seen:
            raise ValueError(f"Duplicate image id: {image.id}")
        seen.add(image.id)
    return images


class ImageAttachment(BaseModel):
    """Reference to an externally owned image with a caption."""

    uri: str = Field(..., description="Opaque reference to the image bytes")
    tag: str = Field("", description="Caption text")
    id: str = Field(default_factory=generate_id, description="Id unique within the owning memo")


class MemoRecord(BaseModel):
    """A single persisted memo."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Unique memo identifier")
    title: str = ""
    content: str = ""
    category: str = Field("", description="Category tag, empty means uncategorized")
    images: List[ImageAttachment] = Field(default_factory=list)
    timestamp: int = Field(..., description="Creation time in epoch milliseconds")
    is_liked: bool = Field(False, alias="isLiked", description="Pin flag")

    @field_validator("images")
    @classmethod
    def unique_image_ids(cls, v: List[ImageAttachment]) -> List[ImageAttachment]:
        """Validate that image ids are unique within the memo."""
        return _check_unique_image_ids(v)

    def is_empty(self) -> bool:
        return not (self.title or self.content or self.category or self.images)

    def find_image(self, image_id: str) -> Optional[ImageAttachment]:
        for image in self.images:
            if image.id == image_id:
                return image
        return None

    def to_storage(self) -> dict:
        """Serialize using the persisted field names."""
        return self.model_dump(by_alias=True)


class MemoDraft(BaseModel):
    """User input for a new memo."""

    model_config = ConfigDict(extra="forbid")

    title: str = ""
    content: str = ""
    category: str = ""
    images: List[ImageAttachment] = Field(default_factory=list)

    @field_validator("title", "content", "category")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    @field_validator("images")
    @classmethod
    def unique_image_ids(cls, v: List[ImageAttachment]) -> List[ImageAttachment]:
        return _check_unique_image_ids(v)

    def is_empty(self) -> bool:
        """A draft with no text and no images cannot become a memo."""
        return not (self.title or self.content or self.category or self.images)


class MemoPatch(BaseModel):
    """Partial update of a memo.

    Only fields that were explicitly set are applied; unset fields keep the
    stored value.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    title: Optional[str] = None
    content: Optional[str] = None
    category: Optional[str] = None
    images: Optional[List[ImageAttachment]] = None
    is_liked: Optional[bool] = Field(None, alias="isLiked")

    @field_validator("title", "content", "category")
    @classmethod
    def strip_text(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else v

    @field_validator("images")
    @classmethod
    def unique_image_ids(
        cls, v: Optional[List[ImageAttachment]]
    ) -> Optional[List[ImageAttachment]]:
        if v is None:
            return v
        return _check_unique_image_ids(v)

    def changes(self) -> dict:
        """Return the explicitly set, non-null fields keyed by attribute name."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


__all__ = [
    "ImageAttachment",
    "MemoRecord",
    "MemoDraft",
    "MemoPatch",
    "generate_id",
    "now_ms",
]
