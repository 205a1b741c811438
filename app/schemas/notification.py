from pydantic import BaseModel, ConfigDict, field_validator
from datetime import datetime
from typing import Optional

from app.core.constants import NotificationTypeEnum

class NotificationSend(BaseModel):
    """Admin payload; omitting user_id broadcasts to every active user."""
    user_id: Optional[int] = None
    title: str
    meta: Optional[str] = None
    type: NotificationTypeEnum = NotificationTypeEnum.SYSTEM

    @field_validator("title")
    def title_not_empty(cls, v):
        if not v.strip():
            raise ValueError("title is required")
        return v.strip()

class NotificationCreate(BaseModel):
    user_id: int
    title: str
    meta: Optional[str] = None
    notification_type: NotificationTypeEnum = NotificationTypeEnum.SYSTEM

class Notification(BaseModel):
    id: int
    user_id: int
    title: str
    meta: Optional[str] = None
    notification_type: NotificationTypeEnum
    is_read: bool
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

class NotificationSendResult(BaseModel):
    count: int
