import logging
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.core.constants import AuditActionEnum, MediaKindEnum
from app.crud.course import course as crud_course
from app.crud.lesson import lesson as crud_lesson
from app.crud.media import media as crud_media
from app.crud.user import user as crud_user
from app.models.media import Media as MediaModel
from app.schemas.media import Media, MediaCreate, MediaDeleteResult
from app.services.audit import audit_service

logger = logging.getLogger(__name__)


class MediaService:
    """Registry of uploaded assets. Uploading and removing stored objects happen outside this service."""

    def _get_media_or_404(self, db: Session, media_id: int) -> MediaModel:
        media = crud_media.get(db, id=media_id)
        if not media:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Media not found")
        return media

    def _check_links(self, db: Session, media_in: MediaCreate):
        if media_in.course_id is not None and not crud_course.get(db, id=media_in.course_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found.")
        if media_in.user_id is not None and not crud_user.get(db, id=media_in.user_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")
        if media_in.lesson_id is None:
            return
        lesson = crud_lesson.get(db, id=media_in.lesson_id)
        if not lesson:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lesson not found.")
        if media_in.course_id is not None and lesson.course_id != media_in.course_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Lesson does not belong to the given course."
            )

    def create_media(self, db: Session, media_in: MediaCreate, *, actor_id: int) -> Media:
        if not media_in.key and not media_in.url:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Provide at least 'key' or 'url'.")
        self._check_links(db, media_in)

        data = media_in.model_dump()
        data["key"] = media_in.key or media_in.url
        media = crud_media.create(db, obj_in=data)
        audit_service.record(
            db,
            actor_id=actor_id,
            action=AuditActionEnum.CREATE,
            entity="media",
            summary=f"Registered {media.kind.value} media {media.id} ({media.key})",
            payload={"media_id": media.id, "key": media.key, "course_id": media.course_id, "lesson_id": media.lesson_id},
        )
        return Media.model_validate(media)

    def search(
        self,
        db: Session,
        *,
        kind: Optional[MediaKindEnum],
        course_id: Optional[int],
        include_deleted: bool,
        page: int,
        size: int,
    ) -> Tuple[List[Media], int]:
        rows, total = crud_media.search(
            db, kind=kind, course_id=course_id, include_deleted=include_deleted, page=page, size=size
        )
        return [Media.model_validate(row) for row in rows], total

    def soft_delete_many(self, db: Session, *, ids: List[int], actor_id: int) -> MediaDeleteResult:
        ids = sorted(set(ids))
        if not ids:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Provide 'id' or 'ids'.")
        count = crud_media.soft_delete_many(db, ids=ids)
        audit_service.record(
            db,
            actor_id=actor_id,
            action=AuditActionEnum.DELETE,
            entity="media",
            summary=f"Soft-deleted {count} media",
            payload={"media_ids": ids, "count": count},
        )
        return MediaDeleteResult(count=count)

    def delete_media(self, db: Session, *, media_id: int, hard: bool, actor_id: int) -> MediaDeleteResult:
        """Soft delete by default; ``hard`` removes the row. Soft-deleting twice is a no-op."""
        media = self._get_media_or_404(db, media_id)
        if hard:
            key = media.key
            crud_media.delete(db, id=media.id)
            summary = f"Hard-deleted media {media_id} ({key})"
            count = 1
        else:
            count = crud_media.soft_delete_many(db, ids=[media.id])
            summary = f"Soft-deleted media {media_id}"

        audit_service.record(
            db,
            actor_id=actor_id,
            action=AuditActionEnum.DELETE,
            entity="media",
            summary=summary,
            payload={"media_id": media_id, "hard": hard},
        )
        logger.info(f"Media {media_id} deleted (hard={hard}) by {actor_id}")
        return MediaDeleteResult(count=count, hard_deleted=hard)


media_service = MediaService()
