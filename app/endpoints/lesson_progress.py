import logging
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.core.cache import cache
from app.models.user import User
from app.schemas.lesson import LessonRef
from app.schemas.lesson_progress import LessonProgressSave, ProgressRead, ProgressSaveResult
from app.services.course_progress import course_progress_service
from app.utils import deps
from app.utils.permission import PermissionHelper

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("", response_model=ProgressRead)
def read_lesson_progress(
    *,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
    lesson: LessonRef = Depends(deps.require_lesson_enrollment)
):
    """Resume point for the lesson player."""
    return course_progress_service.read_progress(db, user_id=current_user.id, course_id=lesson.course_id, lesson_id=lesson.lesson_id)

@router.post("", response_model=ProgressSaveResult, response_model_exclude_none=True)
async def save_lesson_progress(
    *,
    request: Request,
    db: Session = Depends(deps.get_transactional_db),
    progress_in: LessonProgressSave,
    current_user: User = Depends(deps.get_current_user)
):
    """Record playback position and completion. Out-of-order completion answers 409."""
    PermissionHelper.require_enrollment(db, user_id=current_user.id, course_id=progress_in.course_id)
    result = course_progress_service.save_progress(
        db,
        user_id=current_user.id,
        course_id=progress_in.course_id,
        lesson_id=progress_in.lesson_id,
        position_seconds=progress_in.position_seconds,
        completed=progress_in.completed,
    )
    if not result.ok:
        request.state.outcome = result.error
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=result.model_dump(by_alias=True, exclude_none=True),
        )

    await cache.invalidate_user_cache(current_user.id)
    return result
