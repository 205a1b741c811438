from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.core.constants import NOT_ENROLLED_MESSAGE
from app.crud.course_enrollment import course_enrollment as crud_enrollment
from app.models.user import User


class PermissionHelper:
    @staticmethod
    def is_admin(user: User) -> bool:
        return bool(user and user.is_admin)

    @staticmethod
    def is_enrolled(db: Session, user_id: int, course_id: int) -> bool:
        return crud_enrollment.exists(db, user_id=user_id, course_id=course_id)

    @staticmethod
    def require_admin(user: User, message: str = "Admin access required."):
        if not PermissionHelper.is_admin(user):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=message)

    @staticmethod
    def require_enrollment(db: Session, user_id: int, course_id: int):
        if not PermissionHelper.is_enrolled(db, user_id, course_id):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=NOT_ENROLLED_MESSAGE)
