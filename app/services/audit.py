import logging
from typing import Any, List, Optional, Tuple

from sqlalchemy.orm import Session

from app.core.constants import AuditActionEnum
from app.crud.audit_log import audit_log as crud_audit_log
from app.models.audit_log import AuditLog
from app.schemas.audit_log import AuditLog as AuditLogSchema

logger = logging.getLogger(__name__)


class AuditService:
    def record(
        self,
        db: Session,
        *,
        actor_id: Optional[int],
        action: AuditActionEnum,
        entity: str,
        summary: Optional[str] = None,
        payload: Optional[Any] = None,
    ) -> AuditLog:
        """Write an audit row in the caller's transaction."""
        entry = crud_audit_log.create(db, obj_in={
            "actor_id": actor_id,
            "action": action.value,
            "entity": entity,
            "summary": summary,
            "payload": payload,
        })
        logger.info(f"[audit] {entity}.{action.value} by {actor_id}: {summary}")
        return entry

    def get_page(self, db: Session, *, q: Optional[str] = None, page: int, limit: int) -> Tuple[List[AuditLogSchema], int]:
        entries, total = crud_audit_log.get_page(db, q=q, page=page, size=limit)
        return [AuditLogSchema.model_validate(entry) for entry in entries], total


audit_service = AuditService()
