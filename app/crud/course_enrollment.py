from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session, selectinload
from typing import List, Optional, Tuple

from app.crud.base import CRUDBase
from app.models.course_enrollment import CourseEnrollment
from app.schemas.course_enrollment import CourseEnrollmentCreate

class CRUDCourseEnrollment(CRUDBase[CourseEnrollment, CourseEnrollmentCreate, None]):

    def _query_with_relationships(self, db: Session):
        return db.query(CourseEnrollment).options(
            selectinload(CourseEnrollment.user),
            selectinload(CourseEnrollment.course),
        )

    def get_by_user_and_course(self, db: Session, user_id: int, course_id: int) -> Optional[CourseEnrollment]:
        return (
            db.query(CourseEnrollment)
            .filter(CourseEnrollment.user_id == user_id)
            .filter(CourseEnrollment.course_id == course_id)
            .first()
        )

    def get_or_create(self, db: Session, *, user_id: int, course_id: int) -> Tuple[CourseEnrollment, bool]:
        """Insert the enrollment unless one exists; returns the row and whether it was created.

        Uses ON CONFLICT DO NOTHING so concurrent enrolls for the same pair both succeed.
        """
        dialect = db.get_bind().dialect.name
        if dialect == "postgresql":
            insert = pg_insert
        elif dialect == "sqlite":
            insert = sqlite_insert
        else:
            raise NotImplementedError(f"Enrollment upsert is not supported on {dialect}")

        table = CourseEnrollment.__table__
        stmt = (
            insert(table)
            .values(user_id=user_id, course_id=course_id)
            .on_conflict_do_nothing(index_elements=[table.c.user_id, table.c.course_id])
        )
        created = db.execute(stmt).rowcount == 1
        enrollment = self.get_by_user_and_course(db, user_id=user_id, course_id=course_id)
        return enrollment, created

    def exists(self, db: Session, user_id: int, course_id: int) -> bool:
        return self.get_by_user_and_course(db, user_id=user_id, course_id=course_id) is not None

    def get_by_user(self, db: Session, user_id: int) -> List[CourseEnrollment]:
        return (
            self._query_with_relationships(db)
            .filter(CourseEnrollment.user_id == user_id)
            .order_by(CourseEnrollment.enrolled_at, CourseEnrollment.id)
            .all()
        )

    def get_user_ids_by_course(self, db: Session, course_id: int) -> List[int]:
        rows = db.query(CourseEnrollment.user_id).filter(CourseEnrollment.course_id == course_id).all()
        return [row.user_id for row in rows]

    def search(
        self,
        db: Session,
        *,
        user_id: Optional[int] = None,
        course_id: Optional[int] = None,
        page: int = 1,
        size: int = 20,
    ) -> Tuple[List[CourseEnrollment], int]:
        query = self._query_with_relationships(db)
        if user_id is not None:
            query = query.filter(CourseEnrollment.user_id == user_id)
        if course_id is not None:
            query = query.filter(CourseEnrollment.course_id == course_id)
        query = query.order_by(CourseEnrollment.enrolled_at.desc(), CourseEnrollment.id.desc())
        return self.paginate(query, page=page, size=size)

course_enrollment = CRUDCourseEnrollment(CourseEnrollment)
