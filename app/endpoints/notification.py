from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from app.models.user import User
from app.schemas.response import APIResponse
from app.utils import deps
from app.schemas.notification import Notification
from app.services.notification import notification_service
from app.core.cache import cache
from app.core.cache_config import CACHE_TTL
from app.core.decorators import cache_endpoint

router = APIRouter()

@router.get("", response_model=APIResponse[List[Notification]])
@cache_endpoint(ttl=CACHE_TTL["notifications"], key_prefix="notifications")
async def get_my_notifications(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
    skip: int = 0,
    limit: int = 100
):
    """Retrieve notifications for the current user, newest first."""
    notifications = notification_service.get_user_notifications(db, user_id=current_user.id, skip=skip, limit=limit)
    data = [Notification.model_validate(notification) for notification in notifications]
    return APIResponse(message="Notifications fetched successfully", data=data)

@router.get("/unread-count", response_model=APIResponse[int])
@cache_endpoint(ttl=CACHE_TTL["unread_count"], key_prefix="unread_count")
async def get_unread_notifications_count(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user)
):
    count = notification_service.get_unread_count(db, user_id=current_user.id)
    return APIResponse(message="Unread notifications count fetched successfully", data=count)

@router.post("/{notification_id}/read", response_model=APIResponse[Notification])
async def mark_notification_as_read(
    notification_id: int,
    db: Session = Depends(deps.get_transactional_db),
    current_user: User = Depends(deps.get_current_user)
):
    notification = notification_service.mark_notification_as_read(db, notification_id=notification_id, user_id=current_user.id)
    await cache.invalidate_user_cache(current_user.id)
    return APIResponse(message="Notification marked as read", data=Notification.model_validate(notification))

@router.post("/read-all", response_model=APIResponse[int])
async def mark_all_notifications_as_read(
    db: Session = Depends(deps.get_transactional_db),
    current_user: User = Depends(deps.get_current_user)
):
    """Mark all unread notifications for the current user as read."""
    count = notification_service.mark_all_notifications_as_read(db, user_id=current_user.id)
    await cache.invalidate_user_cache(current_user.id)
    return APIResponse(message="All notifications marked as read", data=count)
