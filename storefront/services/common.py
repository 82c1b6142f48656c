"""
Helpers shared by the service modules.
"""
import math
from typing import Dict, Iterable, Tuple

from beanie import PydanticObjectId
from beanie.operators import In

from storefront.core.constants import Pagination
from storefront.core.exceptions import NotFoundError
from storefront.models import Category, Product


def parse_object_id(value: str, entity: str) -> PydanticObjectId:
    """Turn a path/body id into an ObjectId; malformed ids are reported as not found."""
    if value is None or not PydanticObjectId.is_valid(str(value)):
        raise NotFoundError(entity)
    return PydanticObjectId(str(value))


def money(value: float) -> float:
    return round(float(value), 2)


def normalize_paging(page: int, page_size: int) -> Tuple[int, int]:
    page = max(Pagination.MIN_PAGE, page or Pagination.MIN_PAGE)
    if page_size is None:
        page_size = Pagination.DEFAULT_PAGE_SIZE
    page_size = min(max(1, page_size), Pagination.MAX_PAGE_SIZE)
    return page, page_size


def page_info(total_count: int, page: int, page_size: int) -> dict:
    total_pages = math.ceil(total_count / page_size) if total_count else 0
    return {
        "total_count": total_count,
        "page": page,
        "page_size": page_size,
        "total_pages": total_pages,
        "has_next_page": page < total_pages,
        "has_previous_page": page > 1,
    }


async def load_products(ids: Iterable[PydanticObjectId]) -> Dict[PydanticObjectId, Product]:
    ids = list(set(ids))
    if not ids:
        return {}
    products = await Product.find(In(Product.id, ids)).to_list()
    return {p.id: p for p in products}


async def category_names(ids: Iterable[PydanticObjectId]) -> Dict[PydanticObjectId, str]:
    ids = list(set(ids))
    if not ids:
        return {}
    categories = await Category.find(In(Category.id, ids)).to_list()
    return {c.id: c.name for c in categories}
