import logging
import math
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.core.constants import MAX_POSITION_SECONDS, OUT_OF_ORDER_ERROR, OUT_OF_ORDER_MESSAGE
from app.crud.course import course as crud_course
from app.crud.course_enrollment import course_enrollment as crud_enrollment
from app.crud.lesson import lesson as crud_lesson
from app.crud.lesson_progress import lesson_progress as crud_lesson_progress
from app.schemas.lesson_progress import (
    CourseProgress,
    LessonState,
    ProgressRead,
    ProgressRecord,
    ProgressSaveResult,
)

logger = logging.getLogger(__name__)


def calculate_pct(done: int, total: int) -> int:
    """Completion percentage rounded half-up and clamped to [0, 100]; 0 for an empty course."""
    if total <= 0:
        return 0
    done = max(done, 0)
    pct = (done * 200 + total) // (2 * total)
    return max(0, min(100, pct))


def normalize_position(position_seconds: Optional[float]) -> int:
    if position_seconds is None or not math.isfinite(position_seconds):
        return 0
    return min(max(0, math.floor(position_seconds)), MAX_POSITION_SECONDS)


class CourseProgressService:
    """Lesson progress recording and sequential completion gating.

    Callers check enrollment before invoking any of these operations; the
    service itself trusts ``user_id`` to be an enrolled learner.
    """

    def _get_lesson_or_404(self, db: Session, course_id: int, lesson_id: int):
        lesson = crud_lesson.get_in_course(db, course_id=course_id, lesson_id=lesson_id)
        if not lesson:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Lesson not found for course"
            )
        return lesson

    def _prerequisites_met(self, db: Session, user_id: int, course_id: int, index: int) -> bool:
        previous_ids = crud_lesson.get_ids_before(db, course_id=course_id, index=index)
        if not previous_ids:
            return True
        completed = crud_lesson_progress.count_completed(
            db, user_id=user_id, course_id=course_id, lesson_ids=previous_ids
        )
        return completed >= len(previous_ids)

    def read_progress(self, db: Session, *, user_id: int, course_id: int, lesson_id: int) -> ProgressRead:
        row = crud_lesson_progress.get_by_key(db, user_id=user_id, course_id=course_id, lesson_id=lesson_id)
        if not row:
            return ProgressRead()
        return ProgressRead(
            position_seconds=row.duration_seconds,
            completed=row.completed,
            updated_at=row.updated_at,
        )

    def save_progress(
        self,
        db: Session,
        *,
        user_id: int,
        course_id: int,
        lesson_id: int,
        position_seconds: Optional[float] = None,
        completed: bool = False,
    ) -> ProgressSaveResult:
        position = normalize_position(position_seconds)
        lesson = self._get_lesson_or_404(db, course_id, lesson_id)

        existing = crud_lesson_progress.get_by_key_for_update(
            db, user_id=user_id, course_id=course_id, lesson_id=lesson_id
        )
        already_completed = bool(existing and existing.completed)
        next_duration = max(existing.duration_seconds, position) if existing else position

        if completed and not already_completed:
            if not self._prerequisites_met(db, user_id, course_id, lesson.index):
                logger.info(
                    f"Completion out of order: user={user_id} course={course_id} "
                    f"lesson={lesson_id} index={lesson.index}"
                )
                return ProgressSaveResult(ok=False, error=OUT_OF_ORDER_ERROR, message=OUT_OF_ORDER_MESSAGE)

        row = crud_lesson_progress.upsert_merge(
            db,
            user_id=user_id,
            course_id=course_id,
            lesson_id=lesson_id,
            duration_seconds=next_duration,
            completed=already_completed or completed,
        )
        if row.completed and not already_completed:
            logger.info(f"Lesson completed: user={user_id} course={course_id} lesson={lesson_id}")

        return ProgressSaveResult(
            ok=True,
            progress=ProgressRecord(
                duration_seconds=row.duration_seconds,
                completed=row.completed,
                updated_at=row.updated_at,
            ),
        )

    def course_progress(self, db: Session, *, user_id: int, course_id: int) -> CourseProgress:
        total = crud_lesson.count_by_course(db, course_id=course_id)
        done = crud_lesson_progress.count_completed(db, user_id=user_id, course_id=course_id)
        course = crud_course.get(db, id=course_id)
        return CourseProgress(
            course_id=course_id,
            title=course.title if course else None,
            slug=course.slug if course else None,
            done=done,
            total=total,
            pct=calculate_pct(done, total),
        )

    def lesson_states(self, db: Session, *, user_id: int, course_id: int) -> List[LessonState]:
        lessons = crud_lesson.get_by_course(db, course_id=course_id)
        progress = {
            row.lesson_id: row
            for row in crud_lesson_progress.get_all_by_user_and_course(db, user_id=user_id, course_id=course_id)
        }

        states = []
        all_previous_completed = True
        for lesson in lessons:
            row = progress.get(lesson.id)
            is_completed = bool(row and row.completed)
            states.append(LessonState(
                lesson_id=lesson.id,
                index=lesson.index,
                title=lesson.title,
                video_url=lesson.video_url,
                completed=is_completed,
                duration_seconds=row.duration_seconds if row else 0,
                unlocked=all_previous_completed,
            ))
            all_previous_completed = all_previous_completed and is_completed
        return states

    def learning_progress(self, db: Session, *, user_id: int) -> List[CourseProgress]:
        enrollments = crud_enrollment.get_by_user(db, user_id=user_id)
        return [
            self.course_progress(db, user_id=user_id, course_id=enrollment.course_id)
            for enrollment in enrollments
        ]


course_progress_service = CourseProgressService()
