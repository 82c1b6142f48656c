from datetime import datetime
from typing import List, Optional
from beanie import Indexed, PydanticObjectId
from pydantic import BaseModel, Field

from storefront.models.base import AuditedDocument, utcnow


class CartItem(BaseModel):
    id: PydanticObjectId = Field(default_factory=PydanticObjectId)
    product_id: PydanticObjectId
    quantity: int = Field(ge=1)
    unit_price: float
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    @property
    def subtotal(self) -> float:
        return round(self.quantity * self.unit_price, 2)


class Cart(AuditedDocument):
    user_id: Indexed(PydanticObjectId, unique=True)
    items: List[CartItem] = Field(default_factory=list)

    class Settings:
        name = "carts"

    @property
    def total(self) -> float:
        return round(sum(item.subtotal for item in self.items), 2)

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self.items)

    def find_item(self, item_id: PydanticObjectId) -> Optional[CartItem]:
        return next((item for item in self.items if item.id == item_id), None)

    def find_product(self, product_id: PydanticObjectId) -> Optional[CartItem]:
        return next((item for item in self.items if item.product_id == product_id), None)
