from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from datetime import datetime

class LessonCreate(BaseModel):
    title: str
    index: Optional[int] = Field(default=None, ge=1)  # omitted means append
    video_url: Optional[str] = None

    @field_validator("title")
    def title_not_empty(cls, v):
        if not v.strip():
            raise ValueError("title is required")
        return v.strip()

    @field_validator("video_url")
    def strip_video_url(cls, v):
        if v is None:
            return v
        return v.strip() or None

class LessonUpdate(BaseModel):
    title: Optional[str] = None
    video_url: Optional[str] = None

    @field_validator("title")
    def title_not_empty(cls, v):
        if v is not None and not v.strip():
            raise ValueError("title must be a non-empty string")
        return v.strip() if v else v

class LessonMove(BaseModel):
    index: int = Field(..., ge=1)

class LessonReorder(BaseModel):
    lesson_ids: List[int] = Field(..., min_length=1)

class Lesson(BaseModel):
    id: int
    course_id: int
    index: int
    title: str
    video_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class LessonRef(BaseModel):
    course_id: int
    lesson_id: int
