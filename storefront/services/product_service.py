# storefront/services/product_service.py
"""
Product catalog: filtered listing, CRUD, featured products and demo cleanup.
"""
import re
from typing import Dict, List, Optional

from beanie import PydanticObjectId
from beanie.odm.enums import SortDirection

from storefront.core.constants import Messages, States
from storefront.core.exceptions import BusinessRuleError, NotFoundError
from storefront.core.logging import log
from storefront.models import Category, Product
from storefront.schemas import (
    PaginatedResponse,
    ProductCreate,
    ProductFilter,
    ProductListItem,
    ProductResponse,
    ProductUpdate,
)
from storefront.services.common import category_names, money, normalize_paging, page_info, parse_object_id


# sort_by value (lowercased) -> document field; anything else sorts by name
SORT_FIELDS = {
    "price": "price",
    "stock": "stock",
    "createdat": "created_at",
    "name": "name",
}

FEATURED_LIMIT = 10
DEMO_NAME_MARKERS = ("demo", "ejemplo", "example")
DEMO_SKU_MARKERS = ("demo",)


def _contains(term: str) -> dict:
    return {"$regex": re.escape(term), "$options": "i"}


def to_list_item(product: Product, category_name: str = "") -> ProductListItem:
    return ProductListItem(
        id=str(product.id),
        name=product.name,
        short_description=product.short_description,
        price=product.price,
        discount_price=product.discount_price,
        stock=product.stock,
        main_image=product.main_image,
        category_name=category_name,
        brand=product.brand,
        is_featured=product.is_featured,
        state=product.state,
    )


def to_product_response(product: Product, category_name: str = "") -> ProductResponse:
    return ProductResponse(
        **to_list_item(product, category_name).model_dump(),
        description=product.description,
        min_stock=product.min_stock,
        sku=product.sku,
        images=product.images,
        category_id=str(product.category_id),
        weight=product.weight,
        length=product.length,
        width=product.width,
        height=product.height,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


async def _with_category_name(product: Product) -> ProductResponse:
    names = await category_names([product.category_id])
    return to_product_response(product, names.get(product.category_id, ""))


async def _active_category(category_id: str) -> Category:
    if not PydanticObjectId.is_valid(str(category_id)):
        raise BusinessRuleError(Messages.CATEGORY_NOT_FOUND)
    category = await Category.get(PydanticObjectId(str(category_id)))
    if category is None or category.state != States.ACTIVE:
        raise BusinessRuleError(Messages.CATEGORY_NOT_FOUND)
    return category


async def _ensure_unique_sku(sku: str, exclude_id: Optional[PydanticObjectId] = None) -> None:
    existing = await Product.find_one(Product.sku == sku)
    if existing is not None and existing.id != exclude_id:
        raise BusinessRuleError(Messages.DUPLICATE_SKU)


async def _get_active(product_id: str) -> Product:
    oid = parse_object_id(product_id, "Product")
    product = await Product.get(oid)
    if product is None or product.state != States.ACTIVE:
        raise NotFoundError("Product")
    return product


# ═══════════════════════════════════════════════════════════════════════════════
# LISTING
# ═══════════════════════════════════════════════════════════════════════════════

async def build_filter_query(filters: ProductFilter) -> Optional[dict]:
    """
    Translate the listing filters into a MongoDB query.

    Returns None when the filters can never match (e.g. a malformed category id).
    """
    query: dict = {"state": States.ACTIVE}

    term = (filters.search_term or "").strip()
    if term:
        pattern = _contains(term)
        clauses: List[dict] = [{"name": pattern}, {"description": pattern}, {"brand": pattern}]
        matching_categories = await Category.find({"name": pattern}).to_list()
        if matching_categories:
            clauses.append({"category_id": {"$in": [c.id for c in matching_categories]}})
        query["$or"] = clauses

    if filters.category_id:
        if not PydanticObjectId.is_valid(filters.category_id):
            return None
        query["category_id"] = PydanticObjectId(filters.category_id)

    if filters.brand:
        query["brand"] = filters.brand

    price: dict = {}
    if filters.min_price is not None:
        price["$gte"] = filters.min_price
    if filters.max_price is not None:
        price["$lte"] = filters.max_price
    if price:
        query["price"] = price

    if filters.in_stock_only:
        query["stock"] = {"$gt": 0}
    if filters.featured_only:
        query["is_featured"] = True

    return query


def sort_spec(sort_by: Optional[str], sort_order: Optional[str]) -> list:
    field = SORT_FIELDS.get((sort_by or "").lower(), "name")
    direction = SortDirection.DESCENDING if (sort_order or "").lower() == "desc" else SortDirection.ASCENDING
    return [(field, direction), ("_id", direction)]


async def list_products(filters: ProductFilter) -> PaginatedResponse[ProductListItem]:
    page, page_size = normalize_paging(filters.page, filters.page_size)
    query = await build_filter_query(filters)
    if query is None:
        return PaginatedResponse[ProductListItem](data=[], **page_info(0, page, page_size))

    total_count = await Product.find(query).count()
    products = (
        await Product.find(query)
        .sort(sort_spec(filters.sort_by, filters.sort_order))
        .skip((page - 1) * page_size)
        .limit(page_size)
        .to_list()
    )
    names = await category_names(p.category_id for p in products)
    log("CATALOG", f"Product listing: {len(products)}/{total_count} (page {page})")
    return PaginatedResponse[ProductListItem](
        data=[to_list_item(p, names.get(p.category_id, "")) for p in products],
        **page_info(total_count, page, page_size),
    )


async def featured_products(limit: int = FEATURED_LIMIT) -> List[ProductListItem]:
    products = (
        await Product.find(Product.state == States.ACTIVE, Product.is_featured == True)  # noqa: E712
        .sort(("created_at", SortDirection.DESCENDING), ("_id", SortDirection.DESCENDING))
        .limit(limit)
        .to_list()
    )
    names = await category_names(p.category_id for p in products)
    return [to_list_item(p, names.get(p.category_id, "")) for p in products]


# ═══════════════════════════════════════════════════════════════════════════════
# CRUD
# ═══════════════════════════════════════════════════════════════════════════════

async def get_product(product_id: str) -> ProductResponse:
    return await _with_category_name(await _get_active(product_id))


async def create_product(data: ProductCreate, user_id: Optional[PydanticObjectId] = None) -> ProductResponse:
    category = await _active_category(data.category_id)
    await _ensure_unique_sku(data.sku)

    product = Product(
        name=data.name.strip(),
        description=data.description.strip(),
        short_description=data.short_description,
        price=money(data.price),
        discount_price=money(data.discount_price) if data.discount_price is not None else None,
        stock=data.stock,
        min_stock=data.min_stock,
        sku=data.sku,
        main_image=data.main_image,
        images=data.images or [],
        category_id=category.id,
        brand=data.brand,
        is_featured=data.is_featured,
        weight=data.weight,
        length=data.length,
        width=data.width,
        height=data.height,
        state=States.ACTIVE,
        created_by=user_id,
    )
    await product.insert()
    log("CATALOG", f"Product created: {product.sku}", user_id=user_id)
    return to_product_response(product, category.name)


async def update_product(
    product_id: str,
    data: ProductUpdate,
    user_id: Optional[PydanticObjectId] = None,
) -> ProductResponse:
    product = await _get_active(product_id)
    changes: Dict = data.model_dump(exclude_unset=True)

    if changes.get("category_id"):
        product.category_id = (await _active_category(changes["category_id"])).id

    sku = changes.get("sku")
    if sku and sku != product.sku:
        await _ensure_unique_sku(sku, exclude_id=product.id)
        product.sku = sku

    # Empty strings keep the stored value
    for field in ("name", "description", "state"):
        value = changes.get(field)
        if value:
            setattr(product, field, value.strip())

    for field in ("short_description", "main_image", "brand"):
        if field in changes:
            setattr(product, field, changes[field])

    for field in ("stock", "min_stock", "is_featured", "weight", "length", "width", "height"):
        if changes.get(field) is not None:
            setattr(product, field, changes[field])

    if changes.get("images") is not None:
        product.images = changes["images"]
    if changes.get("price") is not None:
        product.price = money(changes["price"])
    if "discount_price" in changes:
        discount = changes["discount_price"]
        product.discount_price = money(discount) if discount is not None else None

    if product.discount_price is not None and product.discount_price >= product.price:
        raise BusinessRuleError("Discount price must be lower than the price")

    product.touch(user_id)
    await product.save()
    log("CATALOG", f"Product updated: {product.sku}", user_id=user_id)
    return await _with_category_name(product)


async def delete_product(product_id: str, user_id: Optional[PydanticObjectId] = None) -> None:
    product = await _get_active(product_id)
    product.state = States.DELETED
    product.touch(user_id)
    await product.save()
    log("CATALOG", f"Product deleted: {product.sku}", user_id=user_id)


async def clear_demo_products(user_id: Optional[PydanticObjectId] = None) -> int:
    """Soft-delete seeded demo products. Returns how many were removed."""
    markers = [{"name": _contains(m)} for m in DEMO_NAME_MARKERS]
    markers += [{"sku": _contains(m)} for m in DEMO_SKU_MARKERS]
    demo_products = await Product.find({"state": States.ACTIVE, "$or": markers}).to_list()

    for product in demo_products:
        product.state = States.DELETED
        product.touch(user_id)
        await product.save()

    log("CATALOG", f"Demo products cleared: {len(demo_products)}", user_id=user_id)
    return len(demo_products)
