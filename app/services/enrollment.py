import logging
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.core.cache import cache
from app.core.config import settings
from app.core.constants import AuditActionEnum
from app.crud.course import course as crud_course
from app.crud.course_enrollment import course_enrollment as crud_enrollment
from app.crud.lesson_progress import lesson_progress as crud_lesson_progress
from app.crud.user import user as crud_user
from app.schemas.course_enrollment import (
    CourseEnrollment,
    CourseEnrollmentAdminRow,
    CourseEnrollmentCreate,
    CourseEnrollmentDelete,
    MyEnrollment,
)
from app.services.audit import audit_service
from app.utils.pagination import page_number, page_size
from app.services.course_progress import course_progress_service

logger = logging.getLogger(__name__)


class EnrollmentService:

    def enroll(self, db: Session, *, user_id: int, course_id: int) -> CourseEnrollment:
        """Enroll the caller in a published course; repeat calls return the existing row."""
        course = crud_course.get(db, id=course_id)
        if not course or not course.published:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found.")

        enrollment, created = crud_enrollment.get_or_create(db, user_id=user_id, course_id=course_id)
        if created:
            logger.info(f"User {user_id} enrolled in course {course_id}")
        return CourseEnrollment.model_validate(enrollment)

    def get_my_enrollments(self, db: Session, *, user_id: int) -> List[MyEnrollment]:
        rows = []
        for enrollment in crud_enrollment.get_by_user(db, user_id=user_id):
            progress = course_progress_service.course_progress(db, user_id=user_id, course_id=enrollment.course_id)
            rows.append(MyEnrollment(
                id=enrollment.id,
                user_id=enrollment.user_id,
                course_id=enrollment.course_id,
                enrolled_at=enrollment.enrolled_at,
                course_title=enrollment.course.title,
                course_slug=enrollment.course.slug,
                done=progress.done,
                total=progress.total,
                pct=progress.pct,
            ))
        return rows

    def search(
        self,
        db: Session,
        *,
        user_id: Optional[int] = None,
        course_id: Optional[int] = None,
        page: int = 1,
        take: Optional[int] = None,
    ) -> Tuple[List[CourseEnrollmentAdminRow], int, int, int]:
        page = page_number(page)
        size = page_size(take, settings.ADMIN_PAGE_SIZE, settings.ADMIN_MAX_PAGE_SIZE)
        rows, total = crud_enrollment.search(db, user_id=user_id, course_id=course_id, page=page, size=size)
        items = [
            CourseEnrollmentAdminRow(
                id=row.id,
                user_id=row.user_id,
                course_id=row.course_id,
                enrolled_at=row.enrolled_at,
                user_email=row.user.email,
                user_name=row.user.full_name,
                course_title=row.course.title,
                course_slug=row.course.slug,
            )
            for row in rows
        ]
        return items, total, page, size

    async def admin_create(self, db: Session, *, enrollment_in: CourseEnrollmentCreate, actor_id: int) -> CourseEnrollment:
        if not crud_user.get(db, id=enrollment_in.user_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        if not crud_course.get(db, id=enrollment_in.course_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
        if crud_enrollment.exists(db, user_id=enrollment_in.user_id, course_id=enrollment_in.course_id):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Enrollment already exists")

        enrollment = crud_enrollment.create(db, obj_in=enrollment_in)
        audit_service.record(
            db,
            actor_id=actor_id,
            action=AuditActionEnum.CREATE,
            entity="enrollment",
            summary=f"Enrolled user {enrollment.user_id} in course {enrollment.course_id}",
            payload={"enrollment_id": enrollment.id, "user_id": enrollment.user_id, "course_id": enrollment.course_id},
        )
        await cache.invalidate_user_cache(enrollment.user_id)
        return CourseEnrollment.model_validate(enrollment)

    async def admin_delete(self, db: Session, *, target: CourseEnrollmentDelete, actor_id: int) -> CourseEnrollment:
        if target.id is not None:
            enrollment = crud_enrollment.get(db, id=target.id)
        else:
            enrollment = crud_enrollment.get_by_user_and_course(db, user_id=target.user_id, course_id=target.course_id)
        if not enrollment:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Enrollment not found")

        deleted = CourseEnrollment.model_validate(enrollment)
        crud_enrollment.delete(db, id=enrollment.id)
        audit_service.record(
            db,
            actor_id=actor_id,
            action=AuditActionEnum.DELETE,
            entity="enrollment",
            summary=f"Removed user {deleted.user_id} from course {deleted.course_id}",
            payload={"enrollment_id": deleted.id, "user_id": deleted.user_id, "course_id": deleted.course_id},
        )
        await cache.invalidate_user_cache(deleted.user_id)
        return deleted

    async def reset_progress(self, db: Session, *, user_id: int, course_id: int, actor_id: int) -> int:
        if not crud_user.get(db, id=user_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        if not crud_course.get(db, id=course_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")

        count = crud_lesson_progress.delete_by_user_and_course(db, user_id=user_id, course_id=course_id)
        audit_service.record(
            db,
            actor_id=actor_id,
            action=AuditActionEnum.RESET_PROGRESS,
            entity="enrollment",
            summary=f"Reset progress of user {user_id} in course {course_id} ({count} rows)",
            payload={"user_id": user_id, "course_id": course_id, "count": count},
        )
        await cache.invalidate_user_cache(user_id)
        return count


enrollment_service = EnrollmentService()
