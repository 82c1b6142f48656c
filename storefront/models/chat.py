from datetime import datetime
from typing import Optional
from beanie import Document, PydanticObjectId
from pydantic import Field

from storefront.models.base import utcnow


class ChatMessageLog(Document):
    """One processed chatbot message; feeds the "recent searches" context."""
    user_id: Optional[PydanticObjectId] = None
    session_id: Optional[str] = None
    message: str
    intent: str
    confidence: float = 0.0
    search_terms: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "chat_messages"
        indexes = ["user_id"]
