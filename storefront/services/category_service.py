# storefront/services/category_service.py
"""
Category CRUD. Deletes are soft and refused while Active products remain.
"""
from typing import List, Optional

from beanie import PydanticObjectId

from storefront.core.constants import Messages, States
from storefront.core.exceptions import BusinessRuleError, NotFoundError
from storefront.core.logging import log
from storefront.models import Category, Product
from storefront.schemas import CategoryCreate, CategoryResponse, CategoryUpdate
from storefront.services.common import parse_object_id


async def count_active_products(category_id: PydanticObjectId) -> int:
    return await Product.find(
        Product.category_id == category_id,
        Product.state == States.ACTIVE,
    ).count()


async def to_category_response(category: Category, product_count: Optional[int] = None) -> CategoryResponse:
    if product_count is None:
        product_count = await count_active_products(category.id)
    return CategoryResponse(
        id=str(category.id),
        name=category.name,
        description=category.description,
        image=category.image,
        state=category.state,
        product_count=product_count,
        created_at=category.created_at,
    )


async def _get_active(category_id: str) -> Category:
    oid = parse_object_id(category_id, "Category")
    category = await Category.get(oid)
    if category is None or category.state != States.ACTIVE:
        raise NotFoundError("Category")
    return category


async def _ensure_unique_name(name: str, exclude_id: Optional[PydanticObjectId] = None) -> None:
    existing = await Category.find(Category.name == name, Category.state == States.ACTIVE).to_list()
    if any(c.id != exclude_id for c in existing):
        raise BusinessRuleError(Messages.DUPLICATE_CATEGORY)


async def list_categories() -> List[CategoryResponse]:
    categories = await Category.find(Category.state == States.ACTIVE).sort("name").to_list()
    return [await to_category_response(c) for c in categories]


async def get_category(category_id: str) -> CategoryResponse:
    return await to_category_response(await _get_active(category_id))


async def create_category(data: CategoryCreate, user_id: Optional[PydanticObjectId] = None) -> CategoryResponse:
    await _ensure_unique_name(data.name)
    category = Category(
        name=data.name,
        description=data.description,
        image=data.image,
        state=States.ACTIVE,
        created_by=user_id,
    )
    await category.insert()
    log("CATALOG", f"Category created: {category.name}", user_id=user_id)
    return await to_category_response(category, product_count=0)


async def update_category(
    category_id: str,
    data: CategoryUpdate,
    user_id: Optional[PydanticObjectId] = None,
) -> CategoryResponse:
    category = await _get_active(category_id)
    changes = data.model_dump(exclude_unset=True)

    name = (changes.get("name") or "").strip()
    if name and name != category.name:
        await _ensure_unique_name(name, exclude_id=category.id)
        category.name = name
    if "description" in changes:
        category.description = changes["description"]
    if "image" in changes:
        category.image = changes["image"]
    if changes.get("state"):
        category.state = changes["state"]

    category.touch(user_id)
    await category.save()
    log("CATALOG", f"Category updated: {category.name}", user_id=user_id)
    return await to_category_response(category)


async def delete_category(category_id: str, user_id: Optional[PydanticObjectId] = None) -> None:
    category = await _get_active(category_id)
    active_products = await count_active_products(category.id)
    if active_products > 0:
        raise BusinessRuleError(
            f"Cannot delete category '{category.name}' because it has {active_products} active products"
        )
    category.state = States.DELETED
    category.touch(user_id)
    await category.save()
    log("CATALOG", f"Category deleted: {category.name}", user_id=user_id)
