from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.cache import cache
from app.core.cache_config import CACHE_TTL
from app.core.decorators import cache_endpoint
from app.models.user import User
from app.schemas.course_enrollment import CourseEnrollment, EnrollRequest, MyEnrollment
from app.schemas.response import APIResponse
from app.services.enrollment import enrollment_service
from app.utils import deps

router = APIRouter()

@router.post("", response_model=APIResponse[CourseEnrollment])
async def enroll_in_course(
    *,
    db: Session = Depends(deps.get_transactional_db),
    enroll_in: EnrollRequest,
    current_user: User = Depends(deps.get_current_user)
):
    """Enroll in a published course. Enrolling twice returns the existing enrollment."""
    enrollment = enrollment_service.enroll(db, user_id=current_user.id, course_id=enroll_in.course_id)
    await cache.invalidate_user_cache(current_user.id)
    return APIResponse(message="Enrolled successfully", data=enrollment)

@router.get("", response_model=APIResponse[List[MyEnrollment]])
@cache_endpoint(ttl=CACHE_TTL["my_enrollments"], key_prefix="my_enrollments")
async def get_my_enrollments(
    *,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user)
):
    enrollments = enrollment_service.get_my_enrollments(db, user_id=current_user.id)
    return APIResponse(message="Enrollments retrieved successfully", data=enrollments)
