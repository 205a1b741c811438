from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict

from app.schemas.response import CamelModel


class LessonNoteSave(CamelModel):
    course_id: int
    lesson_id: int
    content: str = ""


class LessonNoteRead(CamelModel):
    content: str = ""
    updated_at: Optional[datetime] = None


class LessonNoteSaved(CamelModel):
    id: int
    updated_at: Optional[datetime] = None


class LessonNoteAdmin(BaseModel):
    id: int
    user_id: int
    course_id: int
    lesson_id: int
    content: str
    deleted_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class LessonNoteSaveResult(CamelModel):
    ok: bool = True
    note: LessonNoteSaved
