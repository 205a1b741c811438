import re
from pydantic import BaseModel, ConfigDict, field_validator
from typing import List, Optional
from datetime import datetime

from app.core.constants import CourseLevelEnum, SLUG_PATTERN
from app.schemas.lesson import Lesson

def _validate_slug(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if not re.match(SLUG_PATTERN, v):
        raise ValueError("Use lowercase letters, numbers and hyphens only")
    return v

class CourseBase(BaseModel):
    title: str
    slug: str
    description: Optional[str] = None
    level: Optional[CourseLevelEnum] = None
    published: bool = True

    @field_validator("title")
    def title_not_empty(cls, v):
        if not v.strip():
            raise ValueError("Title is required")
        return v.strip()

    @field_validator("slug")
    def slug_format(cls, v):
        return _validate_slug(v)

class CourseCreate(CourseBase):
    pass

class CourseUpdate(BaseModel):
    title: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    level: Optional[CourseLevelEnum] = None
    published: Optional[bool] = None

    @field_validator("title")
    def title_not_empty(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Title cannot be empty")
        return v.strip() if v else v

    @field_validator("slug")
    def slug_format(cls, v):
        return _validate_slug(v)

class Course(CourseBase):
    id: int
    lesson_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

class CourseDetail(Course):
    lessons: List[Lesson] = []
