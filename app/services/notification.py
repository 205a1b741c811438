from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from typing import List, Optional

from app.core.constants import AuditActionEnum, NotificationTypeEnum
from app.crud.notification import notification as crud_notification
from app.crud.user import user as crud_user
from app.models.notification import Notification
from app.schemas.notification import NotificationCreate, NotificationSend
from app.services.audit import audit_service

class NotificationService:
    def create_notification(
        self,
        db: Session,
        *,
        user_id: int,
        title: str,
        meta: Optional[str] = None,
        notification_type: NotificationTypeEnum = NotificationTypeEnum.SYSTEM,
    ) -> Notification:
        notification_in = NotificationCreate(user_id=user_id, title=title, meta=meta, notification_type=notification_type)
        return crud_notification.create(db, obj_in=notification_in)

    def send(self, db: Session, *, payload: NotificationSend, actor_id: int) -> List[int]:
        """Send to one user or broadcast; returns the recipient ids."""
        if payload.user_id is not None:
            recipient = crud_user.get(db, id=payload.user_id)
            if not recipient:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
            recipients = [recipient.id]
        else:
            recipients = crud_user.get_active_ids(db)

        crud_notification.create_many(
            db,
            user_ids=recipients,
            title=payload.title,
            meta=payload.meta,
            notification_type=payload.type,
        )
        audit_service.record(
            db,
            actor_id=actor_id,
            action=AuditActionEnum.SEND,
            entity="notification",
            summary=f'Sent "{payload.title}" to {len(recipients)} user(s)',
            payload={"user_id": payload.user_id, "type": payload.type.value, "count": len(recipients)},
        )
        return recipients

    def get_user_notifications(self, db: Session, *, user_id: int, skip: int = 0, limit: int = 100) -> List[Notification]:
        return crud_notification.get_for_user(db, user_id=user_id, skip=skip, limit=limit)

    def get_unread_count(self, db: Session, *, user_id: int) -> int:
        return crud_notification.count_unread_for_user(db, user_id=user_id)

    def mark_notification_as_read(self, db: Session, *, notification_id: int, user_id: int) -> Notification:
        notification = crud_notification.mark_as_read(db, notification_id=notification_id, user_id=user_id)
        if not notification:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
        return notification

    def mark_all_notifications_as_read(self, db: Session, *, user_id: int) -> int:
        return crud_notification.mark_all_as_read(db, user_id=user_id)

notification_service = NotificationService()
