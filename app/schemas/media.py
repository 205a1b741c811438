from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from typing import List, Optional

from app.core.constants import MediaKindEnum

class MediaCreate(BaseModel):
    """Registers an already uploaded object; at least one of ``key`` or ``url`` is required."""
    kind: MediaKindEnum = MediaKindEnum.OTHER
    key: Optional[str] = None
    url: Optional[str] = None
    mime: Optional[str] = None
    width: Optional[int] = Field(default=None, ge=0)
    height: Optional[int] = Field(default=None, ge=0)
    size_bytes: Optional[int] = Field(default=None, ge=0)
    course_id: Optional[int] = None
    lesson_id: Optional[int] = None
    user_id: Optional[int] = None

    @field_validator("kind", mode="before")
    def unknown_kind_is_other(cls, v):
        value = str(v or "").strip().lower()
        return value if value in {kind.value for kind in MediaKindEnum} else MediaKindEnum.OTHER

    @field_validator("key", "url", "mime")
    def blank_to_none(cls, v):
        if v is None:
            return v
        return v.strip() or None

class MediaBulkDelete(BaseModel):
    id: Optional[int] = None
    ids: Optional[List[int]] = None

class MediaDeleteResult(BaseModel):
    count: int
    hard_deleted: bool = False

class Media(BaseModel):
    id: int
    kind: MediaKindEnum
    key: str
    url: Optional[str] = None
    mime: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    size_bytes: Optional[int] = None
    course_id: Optional[int] = None
    lesson_id: Optional[int] = None
    user_id: Optional[int] = None
    created_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)
