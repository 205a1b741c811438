from typing import List, Optional, Tuple
from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.crud.base import CRUDBase
from app.models.user import User
from app.schemas.user import UserCreate

class CRUDUser(CRUDBase[User, UserCreate, None]):
    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        return db.query(self.model).filter(self.model.email == email.lower()).first()

    def search(self, db: Session, *, q: Optional[str] = None, page: int = 1, size: int = 20) -> Tuple[List[User], int]:
        query = db.query(self.model)
        if q:
            pattern = f"%{q.strip()}%"
            query = query.filter(or_(self.model.email.ilike(pattern), self.model.full_name.ilike(pattern)))
        return self.paginate(query.order_by(self.model.created_at.desc(), self.model.id.desc()), page=page, size=size)

    def get_active_ids(self, db: Session) -> List[int]:
        return [row.id for row in db.query(self.model.id).filter(self.model.is_active == True).all()]

user = CRUDUser(User)
