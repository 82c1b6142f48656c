from typing import List, Optional
from beanie import Indexed, PydanticObjectId
from pydantic import Field

from storefront.core.constants import States
from storefront.models.base import AuditedDocument


class Category(AuditedDocument):
    name: Indexed(str)
    description: Optional[str] = None
    image: Optional[str] = None
    state: str = States.ACTIVE

    class Settings:
        name = "categories"


class Product(AuditedDocument):
    name: str
    description: str
    short_description: Optional[str] = None
    price: float
    discount_price: Optional[float] = None
    stock: int = 0
    min_stock: int = 5
    sku: Indexed(str, unique=True)
    main_image: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    category_id: Indexed(PydanticObjectId)
    brand: Optional[str] = None
    state: str = States.ACTIVE
    is_featured: bool = False
    weight: float = 0
    length: float = 0
    width: float = 0
    height: float = 0

    class Settings:
        name = "products"

    @property
    def effective_price(self) -> float:
        """Price a customer pays: the discount price when one is set."""
        return self.discount_price if self.discount_price is not None else self.price
