from datetime import datetime, timezone
from sqlalchemy.orm import Session
from typing import List, Optional, Tuple

from app.crud.base import CRUDBase
from app.models.lesson_note import LessonNote


class CRUDLessonNote(CRUDBase[LessonNote, None, None]):
    def get_by_key(self, db: Session, *, user_id: int, course_id: int, lesson_id: int) -> Optional[LessonNote]:
        return (
            db.query(LessonNote)
            .filter(LessonNote.user_id == user_id)
            .filter(LessonNote.course_id == course_id)
            .filter(LessonNote.lesson_id == lesson_id)
            .first()
        )

    def upsert(self, db: Session, *, user_id: int, course_id: int, lesson_id: int, content: str) -> LessonNote:
        note = self.get_by_key(db, user_id=user_id, course_id=course_id, lesson_id=lesson_id)
        now = datetime.now(timezone.utc)
        if note is None:
            note = LessonNote(user_id=user_id, course_id=course_id, lesson_id=lesson_id, content=content, updated_at=now)
            db.add(note)
        else:
            note.content = content
            note.deleted_at = None
            note.updated_at = now
        db.flush()
        db.refresh(note)
        return note

    def search(self, db: Session, *, include_deleted: bool = False, page: int = 1, size: int = 20) -> Tuple[List[LessonNote], int]:
        query = db.query(LessonNote)
        if not include_deleted:
            query = query.filter(LessonNote.deleted_at.is_(None))
        query = query.order_by(LessonNote.updated_at.desc(), LessonNote.id.desc())
        return self.paginate(query, page=page, size=size)

    def set_hidden(self, db: Session, *, note: LessonNote, hidden: bool) -> LessonNote:
        note.deleted_at = datetime.now(timezone.utc) if hidden else None
        db.add(note)
        db.flush()
        db.refresh(note)
        return note


lesson_note = CRUDLessonNote(LessonNote)
