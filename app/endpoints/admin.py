from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.cache import cache
from app.core.config import settings
from app.core.constants import MediaKindEnum
from app.models.user import User
from app.schemas.audit_log import AuditLog
from app.schemas.course import Course, CourseCreate, CourseUpdate
from app.schemas.course_enrollment import (
    CourseEnrollment,
    CourseEnrollmentAdminRow,
    CourseEnrollmentCreate,
    CourseEnrollmentDelete,
    ResetProgressRequest,
)
from app.schemas.lesson import Lesson, LessonCreate, LessonMove, LessonReorder, LessonUpdate
from app.schemas.lesson_note import LessonNoteAdmin
from app.schemas.media import Media, MediaBulkDelete, MediaCreate, MediaDeleteResult
from app.schemas.notification import NotificationSend, NotificationSendResult
from app.schemas.response import APIResponse, PaginatedResponse
from app.schemas.user import User as UserSchema, UserRoleUpdate
from app.services.audit import audit_service
from app.services.course import course_service
from app.services.enrollment import enrollment_service
from app.services.lesson import lesson_service
from app.services.lesson_note import lesson_note_service
from app.services.media import media_service
from app.services.notification import notification_service
from app.services.user import user_service
from app.utils import deps
from app.utils.pagination import page_number, page_size

router = APIRouter(dependencies=[Depends(deps.require_admin)])

async def _invalidate_catalog():
    await cache.delete_pattern("course_list*")

# Courses

@router.post("/courses", response_model=APIResponse[Course])
async def create_course(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_in: CourseCreate,
    admin: User = Depends(deps.require_admin)
):
    course = course_service.create_course(db, course_in, actor_id=admin.id)
    await _invalidate_catalog()
    return APIResponse(message="Course created successfully", data=course)

@router.patch("/courses/{course_id}", response_model=APIResponse[Course])
async def update_course(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_id: int,
    course_in: CourseUpdate,
    admin: User = Depends(deps.require_admin)
):
    course = course_service.update_course(db, course_id, course_in, actor_id=admin.id)
    await _invalidate_catalog()
    return APIResponse(message="Course updated successfully", data=course)

@router.delete("/courses/{course_id}", response_model=APIResponse[Course])
async def delete_course(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_id: int,
    admin: User = Depends(deps.require_admin)
):
    """Delete a course together with its lessons, enrollments, progress and notes."""
    course = course_service.delete_course(db, course_id, actor_id=admin.id)
    await cache.clear()
    return APIResponse(message="Course deleted successfully", data=course)

# Lessons

@router.get("/courses/{course_id}/lessons", response_model=APIResponse[List[Lesson]])
def list_lessons(
    *,
    db: Session = Depends(deps.get_db),
    course_id: int
):
    lessons = lesson_service.get_lessons(db, course_id)
    return APIResponse(message="Lessons retrieved successfully", data=lessons)

@router.post("/courses/{course_id}/lessons", response_model=APIResponse[Lesson])
async def create_lesson(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_id: int,
    lesson_in: LessonCreate,
    admin: User = Depends(deps.require_admin)
):
    """Append a lesson, or insert it at ``index`` and shift later lessons down."""
    lesson = await lesson_service.create_lesson(db, course_id, lesson_in, actor_id=admin.id)
    await _invalidate_catalog()
    return APIResponse(message="Lesson created successfully", data=lesson)

@router.post("/courses/{course_id}/lessons/reorder", response_model=APIResponse[List[Lesson]])
async def reorder_lessons(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_id: int,
    reorder_in: LessonReorder,
    admin: User = Depends(deps.require_admin)
):
    lessons = await lesson_service.reorder_lessons(db, course_id, reorder_in.lesson_ids, actor_id=admin.id)
    return APIResponse(message="Lessons reordered successfully", data=lessons)

@router.patch("/courses/{course_id}/lessons/{lesson_id}", response_model=APIResponse[Lesson])
async def update_lesson(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_id: int,
    lesson_id: int,
    lesson_in: LessonUpdate,
    admin: User = Depends(deps.require_admin)
):
    lesson = await lesson_service.update_lesson(db, course_id, lesson_id, lesson_in, actor_id=admin.id)
    return APIResponse(message="Lesson updated successfully", data=lesson)

@router.post("/courses/{course_id}/lessons/{lesson_id}/move", response_model=APIResponse[List[Lesson]])
async def move_lesson(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_id: int,
    lesson_id: int,
    move_in: LessonMove,
    admin: User = Depends(deps.require_admin)
):
    lessons = await lesson_service.move_lesson(db, course_id, lesson_id, move_in.index, actor_id=admin.id)
    return APIResponse(message="Lesson moved successfully", data=lessons)

@router.delete("/courses/{course_id}/lessons/{lesson_id}", response_model=APIResponse[List[Lesson]])
async def delete_lesson(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_id: int,
    lesson_id: int,
    admin: User = Depends(deps.require_admin)
):
    lessons = await lesson_service.delete_lesson(db, course_id, lesson_id, actor_id=admin.id)
    await _invalidate_catalog()
    return APIResponse(message="Lesson deleted successfully", data=lessons)

# Enrollments

@router.get("/enrollments", response_model=APIResponse[PaginatedResponse[CourseEnrollmentAdminRow]])
def list_enrollments(
    *,
    db: Session = Depends(deps.get_db),
    user_id: Optional[int] = None,
    course_id: Optional[int] = None,
    page: int = 1,
    take: Optional[int] = None
):
    rows, total, page, size = enrollment_service.search(db, user_id=user_id, course_id=course_id, page=page, take=take)
    return APIResponse(
        message="Enrollments retrieved successfully",
        data=PaginatedResponse.build(rows, total=total, page=page, size=size),
    )

@router.post("/enrollments", response_model=APIResponse[CourseEnrollment])
async def create_enrollment(
    *,
    db: Session = Depends(deps.get_transactional_db),
    enrollment_in: CourseEnrollmentCreate,
    admin: User = Depends(deps.require_admin)
):
    enrollment = await enrollment_service.admin_create(db, enrollment_in=enrollment_in, actor_id=admin.id)
    return APIResponse(message="Enrollment created successfully", data=enrollment)

@router.delete("/enrollments", response_model=APIResponse[CourseEnrollment])
async def delete_enrollment(
    *,
    db: Session = Depends(deps.get_transactional_db),
    target: CourseEnrollmentDelete,
    admin: User = Depends(deps.require_admin)
):
    enrollment = await enrollment_service.admin_delete(db, target=target, actor_id=admin.id)
    return APIResponse(message="Enrollment deleted successfully", data=enrollment)

@router.post("/enrollments/reset-progress", response_model=APIResponse[int])
async def reset_progress(
    *,
    db: Session = Depends(deps.get_transactional_db),
    reset_in: ResetProgressRequest,
    admin: User = Depends(deps.require_admin)
):
    """Remove every progress row of a learner in a course; returns the number removed."""
    count = await enrollment_service.reset_progress(
        db, user_id=reset_in.user_id, course_id=reset_in.course_id, actor_id=admin.id
    )
    return APIResponse(message="Progress reset successfully", data=count)

# Users

@router.get("/users", response_model=APIResponse[PaginatedResponse[UserSchema]])
def list_users(
    *,
    db: Session = Depends(deps.get_db),
    q: Optional[str] = None,
    page: int = 1,
    take: Optional[int] = None
):
    page = page_number(page)
    size = page_size(take, settings.ADMIN_PAGE_SIZE, settings.ADMIN_MAX_PAGE_SIZE)
    users, total = user_service.search(db, q=q, page=page, size=size)
    return APIResponse(
        message="Users retrieved successfully",
        data=PaginatedResponse.build(users, total=total, page=page, size=size),
    )

@router.patch("/users/role", response_model=APIResponse[UserSchema])
async def update_user_role(
    *,
    db: Session = Depends(deps.get_transactional_db),
    role_in: UserRoleUpdate,
    admin: User = Depends(deps.require_admin)
):
    user = user_service.set_role(db, user_id=role_in.user_id, role=role_in.role, actor_id=admin.id)
    await cache.invalidate_user_cache(role_in.user_id)
    return APIResponse(message="User role updated successfully", data=user)

# Notes moderation

@router.get("/notes", response_model=APIResponse[PaginatedResponse[LessonNoteAdmin]])
def list_notes(
    *,
    db: Session = Depends(deps.get_db),
    page: int = 1,
    take: Optional[int] = None,
    include_deleted: bool = False
):
    page = page_number(page)
    size = page_size(take, settings.ADMIN_PAGE_SIZE, settings.ADMIN_MAX_PAGE_SIZE)
    notes, total = lesson_note_service.search(db, include_deleted=include_deleted, page=page, size=size)
    return APIResponse(
        message="Notes retrieved successfully",
        data=PaginatedResponse.build(notes, total=total, page=page, size=size),
    )

@router.post("/notes/{note_id}/hide", response_model=APIResponse[LessonNoteAdmin])
def hide_note(
    *,
    db: Session = Depends(deps.get_transactional_db),
    note_id: int,
    admin: User = Depends(deps.require_admin)
):
    note = lesson_note_service.set_hidden(db, note_id=note_id, hidden=True, actor_id=admin.id)
    return APIResponse(message="Note hidden", data=note)

@router.post("/notes/{note_id}/restore", response_model=APIResponse[LessonNoteAdmin])
def restore_note(
    *,
    db: Session = Depends(deps.get_transactional_db),
    note_id: int,
    admin: User = Depends(deps.require_admin)
):
    note = lesson_note_service.set_hidden(db, note_id=note_id, hidden=False, actor_id=admin.id)
    return APIResponse(message="Note restored", data=note)

@router.delete("/notes/{note_id}", response_model=APIResponse[LessonNoteAdmin])
def delete_note(
    *,
    db: Session = Depends(deps.get_transactional_db),
    note_id: int,
    admin: User = Depends(deps.require_admin)
):
    note = lesson_note_service.delete_note(db, note_id=note_id, actor_id=admin.id)
    return APIResponse(message="Note deleted", data=note)

# Media

@router.get("/media", response_model=APIResponse[PaginatedResponse[Media]])
def list_media(
    *,
    db: Session = Depends(deps.get_db),
    kind: Optional[MediaKindEnum] = None,
    course_id: Optional[int] = None,
    page: int = 1,
    take: Optional[int] = None,
    include_deleted: bool = False
):
    page = page_number(page)
    size = page_size(take, settings.ADMIN_PAGE_SIZE, settings.ADMIN_MAX_PAGE_SIZE)
    items, total = media_service.search(
        db, kind=kind, course_id=course_id, include_deleted=include_deleted, page=page, size=size
    )
    return APIResponse(
        message="Media retrieved successfully",
        data=PaginatedResponse.build(items, total=total, page=page, size=size),
    )

@router.post("/media", response_model=APIResponse[Media])
def create_media(
    *,
    db: Session = Depends(deps.get_transactional_db),
    media_in: MediaCreate,
    admin: User = Depends(deps.require_admin)
):
    """Register an object after its upload finished."""
    media = media_service.create_media(db, media_in, actor_id=admin.id)
    return APIResponse(message="Media registered successfully", data=media)

@router.delete("/media", response_model=APIResponse[MediaDeleteResult])
def bulk_delete_media(
    *,
    db: Session = Depends(deps.get_transactional_db),
    target: MediaBulkDelete,
    admin: User = Depends(deps.require_admin)
):
    ids = target.ids if target.ids is not None else ([target.id] if target.id is not None else [])
    result = media_service.soft_delete_many(db, ids=ids, actor_id=admin.id)
    return APIResponse(message="Media deleted", data=result)

@router.delete("/media/{media_id}", response_model=APIResponse[MediaDeleteResult])
def delete_media(
    *,
    db: Session = Depends(deps.get_transactional_db),
    media_id: int,
    hard: bool = False,
    admin: User = Depends(deps.require_admin)
):
    result = media_service.delete_media(db, media_id=media_id, hard=hard, actor_id=admin.id)
    return APIResponse(message="Media deleted", data=result)

# Audit

@router.get("/audit", response_model=APIResponse[PaginatedResponse[AuditLog]])
def list_audit_log(
    *,
    db: Session = Depends(deps.get_db),
    q: Optional[str] = None,
    page: int = 1,
    limit: Optional[int] = None
):
    page = page_number(page)
    size = page_size(limit, 50, 200)
    entries, total = audit_service.get_page(db, q=q, page=page, limit=size)
    return APIResponse(
        message="Audit log retrieved successfully",
        data=PaginatedResponse.build(entries, total=total, page=page, size=size),
    )

# Notifications

@router.post("/notifications", response_model=APIResponse[NotificationSendResult])
async def send_notification(
    *,
    db: Session = Depends(deps.get_transactional_db),
    notification_in: NotificationSend,
    admin: User = Depends(deps.require_admin)
):
    """Notify one user, or every active user when ``user_id`` is omitted."""
    recipients = notification_service.send(db, payload=notification_in, actor_id=admin.id)
    await cache.invalidate_users_cache(recipients)
    return APIResponse(message="Notification sent", data=NotificationSendResult(count=len(recipients)))
