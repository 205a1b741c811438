from pydantic import BaseModel, ConfigDict, model_validator
from typing import Optional
from datetime import datetime

class EnrollRequest(BaseModel):
    course_id: int

class CourseEnrollmentCreate(BaseModel):
    user_id: int
    course_id: int

class CourseEnrollmentDelete(BaseModel):
    id: Optional[int] = None
    user_id: Optional[int] = None
    course_id: Optional[int] = None

    @model_validator(mode="after")
    def id_or_pair(self):
        if self.id is None and (self.user_id is None or self.course_id is None):
            raise ValueError("Provide either id, or both user_id and course_id")
        return self

class ResetProgressRequest(BaseModel):
    user_id: int
    course_id: int

class CourseEnrollment(BaseModel):
    id: int
    user_id: int
    course_id: int
    enrolled_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class CourseEnrollmentAdminRow(CourseEnrollment):
    user_email: str
    user_name: Optional[str] = None
    course_title: str
    course_slug: str

class MyEnrollment(CourseEnrollment):
    course_title: str
    course_slug: str
    done: int = 0
    total: int = 0
    pct: int = 0
