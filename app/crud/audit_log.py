from sqlalchemy import or_
from sqlalchemy.orm import Session
from typing import List, Optional, Tuple

from app.crud.base import CRUDBase
from app.models.audit_log import AuditLog
from app.schemas.audit_log import AuditLogCreate

class CRUDAuditLog(CRUDBase[AuditLog, AuditLogCreate, None]):
    def get_page(self, db: Session, *, q: Optional[str] = None, page: int = 1, size: int = 50) -> Tuple[List[AuditLog], int]:
        query = db.query(self.model)
        if q and q.strip():
            pattern = f"%{q.strip()}%"
            query = query.filter(or_(
                self.model.action.ilike(pattern),
                self.model.entity.ilike(pattern),
                self.model.summary.ilike(pattern),
            ))
        query = query.order_by(self.model.created_at.desc(), self.model.id.desc())
        return self.paginate(query, page=page, size=size)

audit_log = CRUDAuditLog(AuditLog)
