# storefront/services/stock_service.py
"""
Stock validation and reservation shared by cart checkout and order creation.

A reservation is a conditional ``$inc`` per product that only applies while
``stock >= quantity``; if any line loses the race, the lines already applied
are given back and the whole reservation fails.
"""
from dataclasses import dataclass
from typing import Dict, List

from beanie import PydanticObjectId

from storefront.core.constants import States
from storefront.core.exceptions import BusinessRuleError
from storefront.core.logging import log
from storefront.models import Product
from storefront.services.common import load_products


@dataclass
class StockLine:
    product_id: PydanticObjectId
    quantity: int


def insufficient_stock_message(product: Product) -> str:
    return f"Insufficient stock. Only {product.stock} units available of product '{product.name}'"


async def validate_lines(lines: List[StockLine]) -> Dict[PydanticObjectId, Product]:
    """
    Check every line before anything is mutated.

    Returns the loaded products keyed by id. Raises BusinessRuleError listing
    every failing line.
    """
    products = await load_products(line.product_id for line in lines)
    errors = []
    for line in lines:
        product = products.get(line.product_id)
        if product is None or product.state != States.ACTIVE:
            errors.append(f"Product {line.product_id} is no longer available")
        elif line.quantity > product.stock:
            errors.append(insufficient_stock_message(product))

    if errors:
        raise BusinessRuleError(errors[0], errors=errors)
    return products


async def _increment(product_id: PydanticObjectId, amount: int, condition: dict = None) -> bool:
    collection = Product.get_motor_collection()
    query = {"_id": product_id}
    if condition:
        query.update(condition)
    result = await collection.update_one(query, {"$inc": {"stock": amount}})
    return result.modified_count == 1


async def reserve_stock(lines: List[StockLine]) -> None:
    """Atomically decrement stock for every line, rolling back on failure."""
    applied: List[StockLine] = []
    for line in lines:
        ok = await _increment(line.product_id, -line.quantity, {"stock": {"$gte": line.quantity}})
        if not ok:
            await release_stock(applied)
            product = await Product.get(line.product_id)
            message = insufficient_stock_message(product) if product else f"Product {line.product_id} is no longer available"
            log("ORDER", f"Stock reservation failed: {message}")
            raise BusinessRuleError(message)
        applied.append(line)


async def release_stock(lines: List[StockLine]) -> None:
    """Return reserved quantities to stock."""
    for line in lines:
        await _increment(line.product_id, line.quantity)
