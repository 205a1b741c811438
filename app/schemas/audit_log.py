from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Any, Optional

class AuditLogCreate(BaseModel):
    action: str
    entity: str
    summary: Optional[str] = None
    payload: Optional[Any] = None
    actor_id: Optional[int] = None

class AuditLog(AuditLogCreate):
    id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
