from typing import List, Tuple
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.core.constants import AuditActionEnum
from app.crud.lesson import lesson as crud_lesson
from app.crud.lesson_note import lesson_note as crud_lesson_note
from app.models.lesson_note import LessonNote as LessonNoteModel
from app.schemas.lesson_note import LessonNoteAdmin, LessonNoteRead, LessonNoteSaved
from app.services.audit import audit_service


class LessonNoteService:

    def _ensure_lesson(self, db: Session, course_id: int, lesson_id: int):
        if not crud_lesson.get_in_course(db, course_id=course_id, lesson_id=lesson_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lesson not found for course")

    def _get_note_or_404(self, db: Session, note_id: int) -> LessonNoteModel:
        note = crud_lesson_note.get(db, id=note_id)
        if not note:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")
        return note

    def read_note(self, db: Session, *, user_id: int, course_id: int, lesson_id: int) -> LessonNoteRead:
        self._ensure_lesson(db, course_id, lesson_id)
        note = crud_lesson_note.get_by_key(db, user_id=user_id, course_id=course_id, lesson_id=lesson_id)
        if not note or note.deleted_at is not None:
            return LessonNoteRead()
        return LessonNoteRead(content=note.content, updated_at=note.updated_at)

    def save_note(self, db: Session, *, user_id: int, course_id: int, lesson_id: int, content: str) -> LessonNoteSaved:
        self._ensure_lesson(db, course_id, lesson_id)
        note = crud_lesson_note.upsert(db, user_id=user_id, course_id=course_id, lesson_id=lesson_id, content=content)
        return LessonNoteSaved(id=note.id, updated_at=note.updated_at)

    def search(self, db: Session, *, include_deleted: bool, page: int, size: int) -> Tuple[List[LessonNoteAdmin], int]:
        notes, total = crud_lesson_note.search(db, include_deleted=include_deleted, page=page, size=size)
        return [LessonNoteAdmin.model_validate(note) for note in notes], total

    def set_hidden(self, db: Session, *, note_id: int, hidden: bool, actor_id: int) -> LessonNoteAdmin:
        note = self._get_note_or_404(db, note_id)
        note = crud_lesson_note.set_hidden(db, note=note, hidden=hidden)
        audit_service.record(
            db,
            actor_id=actor_id,
            action=AuditActionEnum.HIDE if hidden else AuditActionEnum.RESTORE,
            entity="lesson_note",
            summary=f"{'Hid' if hidden else 'Restored'} note {note.id} of user {note.user_id}",
            payload={"note_id": note.id, "user_id": note.user_id, "lesson_id": note.lesson_id},
        )
        return LessonNoteAdmin.model_validate(note)

    def delete_note(self, db: Session, *, note_id: int, actor_id: int) -> LessonNoteAdmin:
        note = self._get_note_or_404(db, note_id)
        deleted = LessonNoteAdmin.model_validate(note)
        crud_lesson_note.delete(db, id=note.id)
        audit_service.record(
            db,
            actor_id=actor_id,
            action=AuditActionEnum.DELETE,
            entity="lesson_note",
            summary=f"Deleted note {deleted.id} of user {deleted.user_id}",
            payload={"note_id": deleted.id, "user_id": deleted.user_id, "lesson_id": deleted.lesson_id},
        )
        return deleted


lesson_note_service = LessonNoteService()
