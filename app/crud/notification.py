from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import List, Optional

from app.crud.base import CRUDBase
from app.models.notification import Notification
from app.schemas.notification import NotificationCreate

class CRUDNotification(CRUDBase[Notification, NotificationCreate, None]):
    """CRUD operations for Notifications."""

    def get_for_user(self, db: Session, *, user_id: int, skip: int = 0, limit: int = 100) -> List[Notification]:
        return (
            db.query(self.model)
            .filter(self.model.user_id == user_id)
            .order_by(self.model.created_at.desc(), self.model.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def count_unread_for_user(self, db: Session, *, user_id: int) -> int:
        return (
            db.query(func.count(self.model.id))
            .filter(self.model.user_id == user_id, self.model.is_read == False)
            .scalar()
        ) or 0

    def mark_as_read(self, db: Session, *, notification_id: int, user_id: int) -> Optional[Notification]:
        notification = (
            db.query(self.model)
            .filter(self.model.id == notification_id, self.model.user_id == user_id)
            .first()
        )
        if notification:
            notification.is_read = True
            db.add(notification)
            db.flush()
        return notification

    def mark_all_as_read(self, db: Session, *, user_id: int) -> int:
        updated = (
            db.query(self.model)
            .filter(self.model.user_id == user_id, self.model.is_read == False)
            .update({"is_read": True}, synchronize_session=False)
        )
        db.flush()
        return updated

    def create_many(self, db: Session, *, user_ids: List[int], title: str, meta: Optional[str], notification_type) -> int:
        db.add_all([
            Notification(user_id=user_id, title=title, meta=meta, notification_type=notification_type)
            for user_id in user_ids
        ])
        db.flush()
        return len(user_ids)

notification = CRUDNotification(Notification)
