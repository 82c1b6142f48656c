from typing import Generic, List, Optional, TypeVar
from pydantic import BaseModel, Field

T = TypeVar("T")


class ServiceResponse(BaseModel, Generic[T]):
    """Envelope returned by cart and order endpoints."""
    success: bool = True
    message: str = ""
    data: Optional[T] = None
    errors: List[str] = Field(default_factory=list)

    @classmethod
    def ok(cls, data: Optional[T] = None, message: str = "") -> "ServiceResponse[T]":
        return cls(success=True, message=message, data=data)


class PaginatedResponse(BaseModel, Generic[T]):
    data: List[T]
    total_count: int
    page: int
    page_size: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool


class MessageResponse(BaseModel):
    message: str
