# storefront/services/cart_service.py
"""
Shopping cart: one cart per user, created lazily, with embedded line items.
"""
from typing import Dict

from beanie import PydanticObjectId

from storefront.core.constants import Messages, States
from storefront.core.exceptions import BusinessRuleError, NotFoundError
from storefront.core.logging import log
from storefront.models import Cart, CartItem, Product, utcnow
from storefront.schemas import AddToCartRequest, CartItemResponse, CartResponse, UpdateCartItemRequest
from storefront.services.common import load_products, money, parse_object_id
from storefront.services.stock_service import (
    StockLine,
    insufficient_stock_message,
    reserve_stock,
    validate_lines,
)


def to_cart_response(cart: Cart, products: Dict[PydanticObjectId, Product]) -> CartResponse:
    items = []
    for item in cart.items:
        product = products.get(item.product_id)
        items.append(CartItemResponse(
            id=str(item.id),
            product_id=str(item.product_id),
            product_name=product.name if product else "",
            product_image=product.main_image if product else None,
            quantity=item.quantity,
            unit_price=item.unit_price,
            subtotal=item.subtotal,
        ))
    return CartResponse(
        id=str(cart.id),
        user_id=str(cart.user_id),
        items=items,
        total=cart.total,
        total_items=cart.total_items,
    )


async def _cart_response(cart: Cart) -> CartResponse:
    products = await load_products(item.product_id for item in cart.items)
    return to_cart_response(cart, products)


async def get_or_create_cart(user_id: PydanticObjectId) -> Cart:
    cart = await Cart.find_one(Cart.user_id == user_id)
    if cart is None:
        cart = Cart(user_id=user_id, created_by=user_id)
        await cart.insert()
        log("CART", "Cart created", user_id=user_id)
    return cart


async def get_cart(user_id: PydanticObjectId) -> CartResponse:
    return await _cart_response(await get_or_create_cart(user_id))


async def add_to_cart(user_id: PydanticObjectId, request: AddToCartRequest) -> CartResponse:
    product_id = parse_object_id(request.product_id, "Product")
    product = await Product.get(product_id)
    if product is None or product.state != States.ACTIVE:
        raise NotFoundError("Product")

    cart = await get_or_create_cart(user_id)
    item = cart.find_product(product_id)
    in_cart = item.quantity if item else 0
    if in_cart + request.quantity > product.stock:
        raise BusinessRuleError(insufficient_stock_message(product))

    if item:
        item.quantity += request.quantity
        item.updated_at = utcnow()
    else:
        cart.items.append(CartItem(
            product_id=product_id,
            quantity=request.quantity,
            unit_price=money(product.effective_price),
        ))

    cart.touch(user_id)
    await cart.save()
    log("CART", f"Added {request.quantity} x {product.sku}", user_id=user_id)
    return await _cart_response(cart)


async def update_cart_item(user_id: PydanticObjectId, request: UpdateCartItemRequest) -> CartResponse:
    cart = await get_or_create_cart(user_id)
    item = cart.find_item(parse_object_id(request.cart_item_id, "Cart item"))
    if item is None:
        raise NotFoundError("Cart item")

    product = await Product.get(item.product_id)
    if product is None or product.state != States.ACTIVE:
        raise NotFoundError("Product")
    if request.quantity > product.stock:
        raise BusinessRuleError(insufficient_stock_message(product))

    item.quantity = request.quantity
    item.updated_at = utcnow()
    cart.touch(user_id)
    await cart.save()
    return await _cart_response(cart)


async def remove_from_cart(user_id: PydanticObjectId, cart_item_id: str) -> CartResponse:
    cart = await get_or_create_cart(user_id)
    item = cart.find_item(parse_object_id(cart_item_id, "Cart item"))
    if item is None:
        raise NotFoundError("Cart item")

    cart.items = [i for i in cart.items if i.id != item.id]
    cart.touch(user_id)
    await cart.save()
    return await _cart_response(cart)


async def clear_cart(user_id: PydanticObjectId) -> CartResponse:
    cart = await get_or_create_cart(user_id)
    cart.items = []
    cart.touch(user_id)
    await cart.save()
    log("CART", "Cart cleared", user_id=user_id)
    return await _cart_response(cart)


def cart_lines(cart: Cart):
    return [StockLine(product_id=item.product_id, quantity=item.quantity) for item in cart.items]


async def checkout(user_id: PydanticObjectId) -> CartResponse:
    """Quick checkout: take the items out of stock and empty the cart, without an order record."""
    cart = await get_or_create_cart(user_id)
    if not cart.items:
        raise BusinessRuleError(Messages.EMPTY_CART)

    lines = cart_lines(cart)
    await validate_lines(lines)
    await reserve_stock(lines)

    log("CART", f"Checkout completed: {cart.total_items} items, total {cart.total}", user_id=user_id)
    cart.items = []
    cart.touch(user_id)
    await cart.save()
    return await _cart_response(cart)
