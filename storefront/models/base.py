from datetime import datetime, timezone
from typing import Optional
from beanie import Document, PydanticObjectId
from pydantic import Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditedDocument(Document):
    """Common audit columns shared by every persisted entity."""
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None
    created_by: Optional[PydanticObjectId] = None
    updated_by: Optional[PydanticObjectId] = None

    def touch(self, user_id: Optional[PydanticObjectId] = None) -> None:
        self.updated_at = utcnow()
        if user_id is not None:
            self.updated_by = user_id
