from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.cache_config import CACHE_TTL
from app.core.decorators import cache_endpoint
from app.models.user import User
from app.schemas.lesson_progress import CourseProgress, LessonState
from app.services.course_progress import course_progress_service
from app.utils import deps

router = APIRouter()

@router.get("/courses/{course_id}/progress", response_model=CourseProgress)
@cache_endpoint(ttl=CACHE_TTL["course_progress"], key_prefix="course_progress")
async def get_course_progress(
    *,
    db: Session = Depends(deps.get_db),
    course_id: int = Depends(deps.require_enrollment),
    current_user: User = Depends(deps.get_current_user)
):
    return course_progress_service.course_progress(db, user_id=current_user.id, course_id=course_id)

@router.get("/courses/{course_id}/lessons/state", response_model=List[LessonState])
@cache_endpoint(ttl=CACHE_TTL["lesson_states"], key_prefix="lesson_states")
async def get_lesson_states(
    *,
    db: Session = Depends(deps.get_db),
    course_id: int = Depends(deps.require_enrollment),
    current_user: User = Depends(deps.get_current_user)
):
    """Lessons in order with completion and unlock flags for the course outline."""
    return course_progress_service.lesson_states(db, user_id=current_user.id, course_id=course_id)

@router.get("/dashboard/progress", response_model=List[CourseProgress])
@cache_endpoint(ttl=CACHE_TTL["learning_progress"], key_prefix="learning_progress")
async def get_learning_progress(
    *,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user)
):
    return course_progress_service.learning_progress(db, user_id=current_user.id)
