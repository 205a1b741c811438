from typing import List
from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from app.core.cache import cache
from app.core.constants import AuditActionEnum
from app.crud.course_enrollment import course_enrollment as crud_enrollment
from app.crud.lesson import lesson as crud_lesson
from app.models.course import Course as CourseModel
from app.models.lesson import Lesson as LessonModel
from app.schemas.lesson import LessonCreate, LessonUpdate, Lesson
from app.services.audit import audit_service
from app.services.course import course_service


def _clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(upper, value))


class LessonService:
    """Admin lesson management.

    Every mutation leaves the course's lesson indexes as the contiguous
    sequence 1..N, and runs inside the caller's transaction.
    """

    def _get_lesson_or_404(self, db: Session, course_id: int, lesson_id: int) -> LessonModel:
        lesson = crud_lesson.get_in_course(db, course_id=course_id, lesson_id=lesson_id)
        if not lesson:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lesson not found.")
        return lesson

    async def _after_change(self, db: Session, course: CourseModel):
        db.expire(course, ["lessons"])
        # totals changed for every learner in the course
        await cache.invalidate_users_cache(crud_enrollment.get_user_ids_by_course(db, course_id=course.id))

    def get_lessons(self, db: Session, course_id: int) -> List[Lesson]:
        course_service.get_course_or_404(db, course_id)
        return [Lesson.model_validate(lesson) for lesson in crud_lesson.get_by_course(db, course_id=course_id)]

    async def create_lesson(self, db: Session, course_id: int, lesson_in: LessonCreate, actor_id: int) -> Lesson:
        course = course_service.get_course_or_404(db, course_id)
        ordered = crud_lesson.get_by_course(db, course_id=course_id)

        new_lesson = crud_lesson.create(db, obj_in={
            "course_id": course_id,
            "index": 0,
            "title": lesson_in.title,
            "video_url": lesson_in.video_url,
        })
        position = len(ordered) + 1 if lesson_in.index is None else _clamp(lesson_in.index, 1, len(ordered) + 1)
        ordered.insert(position - 1, new_lesson)
        crud_lesson.apply_order(db, lessons=ordered)

        audit_service.record(
            db,
            actor_id=actor_id,
            action=AuditActionEnum.CREATE,
            entity="lesson",
            summary=f"Added lesson '{new_lesson.title}' at #{new_lesson.index} in '{course.title}'",
            payload={"course_id": course_id, "lesson_id": new_lesson.id, "index": new_lesson.index},
        )
        await self._after_change(db, course)
        return Lesson.model_validate(new_lesson)

    async def update_lesson(self, db: Session, course_id: int, lesson_id: int, lesson_in: LessonUpdate, actor_id: int) -> Lesson:
        lesson = self._get_lesson_or_404(db, course_id, lesson_id)
        changes = lesson_in.model_dump(exclude_unset=True)
        if not changes:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update.")
        if "video_url" in changes and changes["video_url"] is not None:
            changes["video_url"] = changes["video_url"].strip() or None

        updated_lesson = crud_lesson.update(db, db_obj=lesson, obj_in=changes)
        audit_service.record(
            db,
            actor_id=actor_id,
            action=AuditActionEnum.UPDATE,
            entity="lesson",
            summary=f"Updated lesson #{updated_lesson.index} '{updated_lesson.title}'",
            payload={"course_id": course_id, "lesson_id": lesson_id, "fields": sorted(changes)},
        )
        return Lesson.model_validate(updated_lesson)

    async def move_lesson(self, db: Session, course_id: int, lesson_id: int, index: int, actor_id: int) -> List[Lesson]:
        course = course_service.get_course_or_404(db, course_id)
        lesson = self._get_lesson_or_404(db, course_id, lesson_id)
        ordered = crud_lesson.get_by_course(db, course_id=course_id)

        from_index = lesson.index
        target = _clamp(index, 1, len(ordered))
        if target != from_index:
            ordered.remove(lesson)
            ordered.insert(target - 1, lesson)
            crud_lesson.apply_order(db, lessons=ordered)

        audit_service.record(
            db,
            actor_id=actor_id,
            action=AuditActionEnum.MOVE,
            entity="lesson",
            summary=f"Moved lesson '{lesson.title}' from #{from_index} to #{target}",
            payload={"course_id": course_id, "lesson_id": lesson_id, "from": from_index, "to": target},
        )
        await self._after_change(db, course)
        return [Lesson.model_validate(item) for item in ordered]

    async def reorder_lessons(self, db: Session, course_id: int, lesson_ids: List[int], actor_id: int) -> List[Lesson]:
        course = course_service.get_course_or_404(db, course_id)
        by_id = {lesson.id: lesson for lesson in crud_lesson.get_by_course(db, course_id=course_id)}

        if len(lesson_ids) != len(set(lesson_ids)) or set(lesson_ids) != set(by_id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="lesson_ids must list every lesson of the course exactly once.",
            )

        ordered = crud_lesson.apply_order(db, lessons=[by_id[lesson_id] for lesson_id in lesson_ids])
        audit_service.record(
            db,
            actor_id=actor_id,
            action=AuditActionEnum.REORDER,
            entity="lesson",
            summary=f"Reordered {len(ordered)} lessons in '{course.title}'",
            payload={"course_id": course_id, "lesson_ids": lesson_ids},
        )
        await self._after_change(db, course)
        return [Lesson.model_validate(item) for item in ordered]

    async def delete_lesson(self, db: Session, course_id: int, lesson_id: int, actor_id: int) -> List[Lesson]:
        course = course_service.get_course_or_404(db, course_id)
        lesson = self._get_lesson_or_404(db, course_id, lesson_id)
        title, index = lesson.title, lesson.index

        crud_lesson.delete(db, id=lesson.id)
        remaining = crud_lesson.apply_order(db, lessons=crud_lesson.get_by_course(db, course_id=course_id))

        audit_service.record(
            db,
            actor_id=actor_id,
            action=AuditActionEnum.DELETE,
            entity="lesson",
            summary=f"Deleted lesson #{index} '{title}' from '{course.title}'",
            payload={"course_id": course_id, "lesson_id": lesson_id, "index": index},
        )
        await self._after_change(db, course)
        return [Lesson.model_validate(item) for item in remaining]


lesson_service = LessonService()
