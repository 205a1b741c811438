from typing import Optional
from fastapi import Depends, HTTPException, Query, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.core.database import SessionLocal
from app.core.security import decode_access_token
from app.crud.user import user as user_crud
from app.crud.token_denylist import token_denylist as token_denylist_crud
from app.models.user import User
from app.schemas.lesson import LessonRef
from app.schemas.token import TokenPayload
from app.utils.permission import PermissionHelper

http_bearer = HTTPBearer(auto_error=False)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_transactional_db():
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

def get_token(credentials: HTTPAuthorizationCredentials = Depends(http_bearer)) -> str:
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return credentials.credentials

def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    token: str = Depends(get_token),
) -> User:
    try:
        token_data = TokenPayload(**decode_access_token(token))
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        )

    if token_data.jti and token_denylist_crud.get_by_jti(db, jti=token_data.jti):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token has been revoked")

    user = user_crud.get(db, id=token_data.user_id) if token_data.user_id else None
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found"
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive"
        )
    request.state.user_id = user.id
    return user

def require_admin(current_user: User = Depends(get_current_user)) -> User:
    PermissionHelper.require_admin(current_user)
    return current_user

def require_enrollment(
    course_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> int:
    """Gate for learner endpoints taking ``course_id`` from the path."""
    PermissionHelper.require_enrollment(db, user_id=current_user.id, course_id=course_id)
    return course_id

def get_lesson_ref(
    course_id: Optional[int] = Query(None),
    course_id_camel: Optional[int] = Query(None, alias="courseId"),
    lesson_id: Optional[int] = Query(None),
    lesson_id_camel: Optional[int] = Query(None, alias="lessonId"),
) -> LessonRef:
    """Lesson coordinates from the query string, as ``courseId``/``lessonId`` or snake_case."""
    course_id = course_id if course_id is not None else course_id_camel
    lesson_id = lesson_id if lesson_id is not None else lesson_id_camel
    if course_id is None or lesson_id is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="courseId and lessonId are required"
        )
    return LessonRef(course_id=course_id, lesson_id=lesson_id)

def require_lesson_enrollment(
    current_user: User = Depends(get_current_user),
    lesson: LessonRef = Depends(get_lesson_ref),
    db: Session = Depends(get_db),
) -> LessonRef:
    PermissionHelper.require_enrollment(db, user_id=current_user.id, course_id=lesson.course_id)
    return lesson
