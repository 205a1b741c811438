from typing import List
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.core.constants import AuditActionEnum
from app.crud.course import course as crud_course
from app.models.course import Course as CourseModel
from app.schemas.course import CourseCreate, CourseUpdate, Course as CourseSchema, CourseDetail
from app.services.audit import audit_service


class CourseService:

    def get_course_or_404(self, db: Session, course_id: int) -> CourseModel:
        course = crud_course.get(db, id=course_id)
        if not course:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found.")
        return course

    def _ensure_slug_available(self, db: Session, slug: str, course_id: int = None):
        existing = crud_course.get_by_slug(db, slug=slug)
        if existing and existing.id != course_id:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="A course with this slug already exists.")

    def list_published(self, db: Session, skip: int = 0, limit: int = 100) -> List[CourseSchema]:
        courses = crud_course.get_published(db, skip=skip, limit=limit)
        return [CourseSchema.model_validate(course) for course in courses]

    def get_published_by_slug(self, db: Session, slug: str) -> CourseDetail:
        course = crud_course.get_published_by_slug(db, slug=slug)
        if not course:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found.")
        return CourseDetail.model_validate(course)

    def create_course(self, db: Session, course_in: CourseCreate, actor_id: int) -> CourseSchema:
        self._ensure_slug_available(db, course_in.slug)
        new_course = crud_course.create(db, obj_in=course_in)
        audit_service.record(
            db,
            actor_id=actor_id,
            action=AuditActionEnum.CREATE,
            entity="course",
            summary=f"Created course '{new_course.title}' ({new_course.slug})",
            payload={"course_id": new_course.id, "slug": new_course.slug},
        )
        return CourseSchema.model_validate(new_course)

    def update_course(self, db: Session, course_id: int, course_in: CourseUpdate, actor_id: int) -> CourseSchema:
        course = self.get_course_or_404(db, course_id)
        changes = course_in.model_dump(exclude_unset=True)
        if not changes:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update.")
        if changes.get("slug"):
            self._ensure_slug_available(db, changes["slug"], course_id=course.id)

        updated_course = crud_course.update(db, db_obj=course, obj_in=changes)
        audit_service.record(
            db,
            actor_id=actor_id,
            action=AuditActionEnum.UPDATE,
            entity="course",
            summary=f"Updated course '{updated_course.title}'",
            payload={"course_id": course_id, "fields": sorted(changes)},
        )
        return CourseSchema.model_validate(updated_course)

    def delete_course(self, db: Session, course_id: int, actor_id: int) -> CourseSchema:
        course = self.get_course_or_404(db, course_id)
        deleted = CourseSchema.model_validate(course)
        crud_course.delete(db, id=course.id)
        audit_service.record(
            db,
            actor_id=actor_id,
            action=AuditActionEnum.DELETE,
            entity="course",
            summary=f"Deleted course '{deleted.title}' ({deleted.slug})",
            payload={"course_id": course_id, "slug": deleted.slug},
        )
        return deleted


course_service = CourseService()
