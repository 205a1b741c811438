from datetime import datetime, timezone

from fastapi import HTTPException, status
from jose import JWTError
from sqlalchemy.orm import Session

from app.core.security import create_access_token, decode_access_token, get_password_hash, verify_password
from app.crud.token_denylist import token_denylist as crud_token_denylist
from app.crud.user import user as crud_user
from app.models.user import User
from app.schemas.token import Token, TokenPayload
from app.schemas.token_denylist import TokenDenylistCreate
from app.schemas.user import UserCreate
from app.services.notification import notification_service
from app.core.constants import NotificationTypeEnum

class AuthService:
    def signup(self, db: Session, *, user_in: UserCreate) -> User:
        email = user_in.email.lower()
        if crud_user.get_by_email(db, email=email):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="An account with this email already exists.",
            )

        new_user = crud_user.create(db, obj_in={
            "email": email,
            "full_name": user_in.full_name,
            "hashed_password": get_password_hash(user_in.password),
            "is_active": True,
            "is_admin": False,
        })
        notification_service.create_notification(
            db,
            user_id=new_user.id,
            title="Welcome aboard!",
            meta="Your account is ready. Enroll in a course to start learning.",
            notification_type=NotificationTypeEnum.AUTH,
        )
        return new_user

    def login(self, db: Session, *, email: str, password: str) -> Token:
        user = crud_user.get_by_email(db, email=email)
        if not user or not verify_password(password, user.hashed_password):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Incorrect email or password",
            )

        if not user.is_active:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="User account is inactive",
            )

        access_token = create_access_token(data={"user_id": user.id}, email=user.email)
        return Token(access_token=access_token, token_type="bearer")

    def logout(self, db: Session, *, token: str) -> None:
        try:
            token_data = TokenPayload(**decode_access_token(token))
        except JWTError:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

        if not token_data.jti or not token_data.exp:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Token missing JTI or expiration claim")

        if not crud_token_denylist.get_by_jti(db, jti=token_data.jti):
            crud_token_denylist.create(
                db,
                obj_in=TokenDenylistCreate(jti=token_data.jti, exp=datetime.fromtimestamp(token_data.exp, tz=timezone.utc)),
            )

auth_service = AuthService()
