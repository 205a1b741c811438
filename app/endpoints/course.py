from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.cache_config import CACHE_TTL
from app.core.decorators import cache_endpoint
from app.schemas.course import Course, CourseDetail
from app.schemas.response import APIResponse
from app.services.course import course_service
from app.utils import deps

router = APIRouter()

@router.get("", response_model=APIResponse[List[Course]])
@cache_endpoint(ttl=CACHE_TTL["course_list"], key_prefix="course_list")
async def list_courses(
    *,
    db: Session = Depends(deps.get_db),
    skip: int = 0,
    limit: int = 100
):
    """Published courses with their lesson counts."""
    courses = course_service.list_published(db, skip=skip, limit=limit)
    return APIResponse(message="Courses retrieved successfully", data=courses)

@router.get("/{slug}", response_model=APIResponse[CourseDetail])
def get_course(
    *,
    db: Session = Depends(deps.get_db),
    slug: str
):
    course = course_service.get_published_by_slug(db, slug=slug)
    return APIResponse(message="Course retrieved successfully", data=course)
