from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from app.core.constants import AuditActionEnum, UserRoleEnum
from app.crud.user import user as crud_user
from app.schemas.user import User as UserSchema
from app.services.audit import audit_service


class UserService:

    def search(self, db: Session, *, q: Optional[str], page: int, size: int) -> Tuple[List[UserSchema], int]:
        users, total = crud_user.search(db, q=q, page=page, size=size)
        return [UserSchema.model_validate(user) for user in users], total

    def set_role(self, db: Session, *, user_id: int, role: UserRoleEnum, actor_id: int) -> UserSchema:
        user = crud_user.get(db, id=user_id)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")
        if user.id == actor_id and role != UserRoleEnum.ADMIN:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot remove your own admin role.")

        previous = user.role
        updated = crud_user.update(db, db_obj=user, obj_in={"is_admin": role == UserRoleEnum.ADMIN})
        audit_service.record(
            db,
            actor_id=actor_id,
            action=AuditActionEnum.UPDATE,
            entity="user",
            summary=f"Changed role of {updated.email} from {previous} to {role.value}",
            payload={"user_id": user_id, "from": previous, "to": role.value},
        )
        return UserSchema.model_validate(updated)


user_service = UserService()
