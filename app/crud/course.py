from typing import List, Optional
from sqlalchemy.orm import Session, selectinload

from app.crud.base import CRUDBase
from app.models.course import Course
from app.schemas.course import CourseCreate, CourseUpdate

class CRUDCourse(CRUDBase[Course, CourseCreate, CourseUpdate]):
    def get_by_slug(self, db: Session, *, slug: str) -> Optional[Course]:
        return db.query(self.model).filter(self.model.slug == slug).first()

    def get_published(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[Course]:
        return (
            db.query(self.model)
            .options(selectinload(self.model.lessons))
            .filter(self.model.published == True)
            .order_by(self.model.created_at, self.model.id)
            .offset(skip)
            .limit(limit)
            .all()
        )

    def get_published_by_slug(self, db: Session, *, slug: str) -> Optional[Course]:
        return (
            db.query(self.model)
            .options(selectinload(self.model.lessons))
            .filter(self.model.slug == slug, self.model.published == True)
            .first()
        )

course = CRUDCourse(Course)
