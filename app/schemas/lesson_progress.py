from typing import Optional
from datetime import datetime
from pydantic import Field

from app.core.constants import MAX_POSITION_SECONDS
from app.schemas.response import CamelModel


class LessonProgressSave(CamelModel):
    course_id: int
    lesson_id: int
    position_seconds: Optional[float] = Field(None, le=MAX_POSITION_SECONDS)
    completed: bool = False


class ProgressRead(CamelModel):
    position_seconds: int = 0
    completed: bool = False
    updated_at: Optional[datetime] = None


class ProgressRecord(CamelModel):
    duration_seconds: int
    completed: bool
    updated_at: Optional[datetime] = None


class ProgressSaveResult(CamelModel):
    ok: bool
    progress: Optional[ProgressRecord] = None
    error: Optional[str] = None
    message: Optional[str] = None


class CourseProgress(CamelModel):
    course_id: int
    title: Optional[str] = None
    slug: Optional[str] = None
    done: int
    total: int
    pct: int


class LessonState(CamelModel):
    lesson_id: int
    index: int
    title: str
    video_url: Optional[str] = None
    completed: bool
    duration_seconds: int
    unlocked: bool
