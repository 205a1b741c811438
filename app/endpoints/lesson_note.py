from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.models.user import User
from app.schemas.lesson import LessonRef
from app.schemas.lesson_note import LessonNoteRead, LessonNoteSave, LessonNoteSaveResult
from app.services.lesson_note import lesson_note_service
from app.utils import deps
from app.utils.permission import PermissionHelper

router = APIRouter()

@router.get("", response_model=LessonNoteRead)
def read_lesson_note(
    *,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
    lesson: LessonRef = Depends(deps.require_lesson_enrollment)
):
    return lesson_note_service.read_note(db, user_id=current_user.id, course_id=lesson.course_id, lesson_id=lesson.lesson_id)

@router.post("", response_model=LessonNoteSaveResult)
def save_lesson_note(
    *,
    db: Session = Depends(deps.get_transactional_db),
    note_in: LessonNoteSave,
    current_user: User = Depends(deps.get_current_user)
):
    PermissionHelper.require_enrollment(db, user_id=current_user.id, course_id=note_in.course_id)
    note = lesson_note_service.save_note(
        db,
        user_id=current_user.id,
        course_id=note_in.course_id,
        lesson_id=note_in.lesson_id,
        content=note_in.content,
    )
    return LessonNoteSaveResult(note=note)
