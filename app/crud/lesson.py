from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import List, Optional

from app.crud.base import CRUDBase
from app.models.lesson import Lesson
from app.schemas.lesson import LessonCreate, LessonUpdate

class CRUDLesson(CRUDBase[Lesson, LessonCreate, LessonUpdate]):
    def get_in_course(self, db: Session, *, course_id: int, lesson_id: int) -> Optional[Lesson]:
        return (
            db.query(self.model)
            .filter(self.model.id == lesson_id, self.model.course_id == course_id)
            .first()
        )

    def get_by_course(self, db: Session, *, course_id: int) -> List[Lesson]:
        return (
            db.query(self.model)
            .filter(self.model.course_id == course_id)
            .order_by(self.model.index, self.model.id)
            .all()
        )

    def get_ids_before(self, db: Session, *, course_id: int, index: int) -> List[int]:
        rows = (
            db.query(self.model.id)
            .filter(self.model.course_id == course_id, self.model.index < index)
            .all()
        )
        return [row.id for row in rows]

    def count_by_course(self, db: Session, *, course_id: int) -> int:
        return db.query(func.count(self.model.id)).filter(self.model.course_id == course_id).scalar() or 0

    def apply_order(self, db: Session, *, lessons: List[Lesson]) -> List[Lesson]:
        """Renumber ``lessons`` to 1..N in the given order.

        Two passes through negative indexes keep (course_id, index) unique at
        every intermediate flush.
        """
        for position, lesson in enumerate(lessons, start=1):
            lesson.index = -position
        db.flush()
        for position, lesson in enumerate(lessons, start=1):
            lesson.index = position
        db.flush()
        return lessons

lesson = CRUDLesson(Lesson)
