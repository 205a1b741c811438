from datetime import datetime, timezone
from sqlalchemy import func, or_
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session
from typing import List, Optional

from app.crud.base import CRUDBase
from app.models.lesson_progress import LessonProgress


class CRUDLessonProgress(CRUDBase[LessonProgress, None, None]):

    def _query_for_key(self, db: Session, user_id: int, course_id: int, lesson_id: int):
        return (
            db.query(LessonProgress)
            .filter(LessonProgress.user_id == user_id)
            .filter(LessonProgress.course_id == course_id)
            .filter(LessonProgress.lesson_id == lesson_id)
        )

    def get_by_key(self, db: Session, *, user_id: int, course_id: int, lesson_id: int) -> Optional[LessonProgress]:
        return self._query_for_key(db, user_id, course_id, lesson_id).first()

    def get_by_key_for_update(self, db: Session, *, user_id: int, course_id: int, lesson_id: int) -> Optional[LessonProgress]:
        # FOR UPDATE is dropped by dialects without row locks (SQLite)
        return (
            self._query_for_key(db, user_id, course_id, lesson_id)
            .populate_existing()
            .with_for_update()
            .first()
        )

    def get_all_by_user_and_course(self, db: Session, *, user_id: int, course_id: int) -> List[LessonProgress]:
        return (
            db.query(LessonProgress)
            .filter(LessonProgress.user_id == user_id)
            .filter(LessonProgress.course_id == course_id)
            .all()
        )

    def count_completed(self, db: Session, *, user_id: int, course_id: int, lesson_ids: Optional[List[int]] = None) -> int:
        query = (
            db.query(func.count(LessonProgress.id))
            .filter(LessonProgress.user_id == user_id)
            .filter(LessonProgress.course_id == course_id)
            .filter(LessonProgress.completed == True)
        )
        if lesson_ids is not None:
            query = query.filter(LessonProgress.lesson_id.in_(lesson_ids))
        return query.scalar() or 0

    def upsert_merge(
        self,
        db: Session,
        *,
        user_id: int,
        course_id: int,
        lesson_id: int,
        duration_seconds: int,
        completed: bool,
    ) -> LessonProgress:
        """Create or merge a progress row in one statement.

        The stored duration becomes the max of stored and incoming values and
        the completed flag is OR-ed, so concurrent writers cannot regress either.
        """
        dialect = db.get_bind().dialect.name
        if dialect == "postgresql":
            insert, greatest = pg_insert, func.greatest
        elif dialect == "sqlite":
            insert, greatest = sqlite_insert, func.max
        else:
            raise NotImplementedError(f"Progress upsert is not supported on {dialect}")

        now = datetime.now(timezone.utc)
        table = LessonProgress.__table__
        stmt = insert(table).values(
            user_id=user_id,
            course_id=course_id,
            lesson_id=lesson_id,
            duration_seconds=duration_seconds,
            completed=completed,
            completed_at=now if completed else None,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c.user_id, table.c.course_id, table.c.lesson_id],
            set_={
                "duration_seconds": greatest(table.c.duration_seconds, stmt.excluded.duration_seconds),
                "completed": or_(table.c.completed, stmt.excluded.completed),
                "completed_at": func.coalesce(table.c.completed_at, stmt.excluded.completed_at),
                "updated_at": stmt.excluded.updated_at,
            },
        )
        db.execute(stmt)
        return (
            self._query_for_key(db, user_id, course_id, lesson_id)
            .populate_existing()
            .one()
        )

    def delete_by_user_and_course(self, db: Session, *, user_id: int, course_id: int) -> int:
        deleted = (
            db.query(LessonProgress)
            .filter(LessonProgress.user_id == user_id)
            .filter(LessonProgress.course_id == course_id)
            .delete(synchronize_session=False)
        )
        db.flush()
        return deleted


lesson_progress = CRUDLessonProgress(LessonProgress)
