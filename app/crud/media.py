from datetime import datetime, timezone
from sqlalchemy.orm import Session
from typing import List, Optional, Tuple

from app.core.constants import MediaKindEnum
from app.crud.base import CRUDBase
from app.models.media import Media
from app.schemas.media import MediaCreate


class CRUDMedia(CRUDBase[Media, MediaCreate, None]):
    def search(
        self,
        db: Session,
        *,
        kind: Optional[MediaKindEnum] = None,
        course_id: Optional[int] = None,
        include_deleted: bool = False,
        page: int = 1,
        size: int = 20,
    ) -> Tuple[List[Media], int]:
        query = db.query(Media)
        if kind is not None:
            query = query.filter(Media.kind == kind)
        if course_id is not None:
            query = query.filter(Media.course_id == course_id)
        if not include_deleted:
            query = query.filter(Media.deleted_at.is_(None))
        query = query.order_by(Media.created_at.desc(), Media.id.desc())
        return self.paginate(query, page=page, size=size)

    def soft_delete_many(self, db: Session, *, ids: List[int]) -> int:
        """Mark live rows among ``ids`` deleted; rows already deleted are not counted."""
        count = (
            db.query(Media)
            .filter(Media.id.in_(ids))
            .filter(Media.deleted_at.is_(None))
            .update({Media.deleted_at: datetime.now(timezone.utc)}, synchronize_session="fetch")
        )
        db.flush()
        return count


media = CRUDMedia(Media)
