from typing import List, Optional
from pydantic import BaseModel, Field, field_validator


class ChatMessageRequest(BaseModel):
    message: str = Field(..., max_length=1000)
    session_id: Optional[str] = Field(None, max_length=100)

    @field_validator("message")
    @classmethod
    def require_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Message is required")
        return v


class QuickReply(BaseModel):
    text: str
    action: str
    value: Optional[str] = None


class ProductRecommendation(BaseModel):
    id: str
    name: str
    short_description: Optional[str] = None
    price: float
    discount_price: Optional[float] = None
    main_image: Optional[str] = None
    category_name: str = ""
    brand: Optional[str] = None
    relevance_score: float = 0
    reason: str = ""


class ChatResponse(BaseModel):
    message: str
    type: str = "text"  # text | product_list
    intent: str = ""
    confidence: float = 0.0
    quick_replies: List[QuickReply] = Field(default_factory=list)
    product_suggestions: List[ProductRecommendation] = Field(default_factory=list)


class ChatContext(BaseModel):
    popular_categories: List[str] = Field(default_factory=list)
    trending_products: List[str] = Field(default_factory=list)
    recent_searches: List[str] = Field(default_factory=list)


class GenerateDescriptionRequest(BaseModel):
    product_name: str = Field(..., min_length=1, max_length=100)
    category: str = Field(..., min_length=1, max_length=100)


class GenerateDescriptionResponse(BaseModel):
    description: str
    generated_by: str  # llm | template
