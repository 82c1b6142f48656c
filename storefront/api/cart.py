# storefront/api/cart.py
"""
Shopping cart endpoints for the authenticated user.
"""
from fastapi import APIRouter, Depends

from storefront.core.security import CurrentUser, get_current_user
from storefront.schemas import AddToCartRequest, CartResponse, ServiceResponse, UpdateCartItemRequest
from storefront.services import cart_service

router = APIRouter(prefix="/api/cart", tags=["Cart"])


@router.get("", response_model=ServiceResponse[CartResponse])
async def get_cart(current_user: CurrentUser = Depends(get_current_user)):
    cart = await cart_service.get_cart(current_user.id)
    return ServiceResponse[CartResponse].ok(cart)


@router.post("/add", response_model=ServiceResponse[CartResponse])
async def add_to_cart(request: AddToCartRequest, current_user: CurrentUser = Depends(get_current_user)):
    cart = await cart_service.add_to_cart(current_user.id, request)
    return ServiceResponse[CartResponse].ok(cart, "Product added to cart")


@router.put("/update", response_model=ServiceResponse[CartResponse])
async def update_cart_item(request: UpdateCartItemRequest, current_user: CurrentUser = Depends(get_current_user)):
    cart = await cart_service.update_cart_item(current_user.id, request)
    return ServiceResponse[CartResponse].ok(cart, "Cart updated")


@router.delete("/remove/{cart_item_id}", response_model=ServiceResponse[CartResponse])
async def remove_from_cart(cart_item_id: str, current_user: CurrentUser = Depends(get_current_user)):
    cart = await cart_service.remove_from_cart(current_user.id, cart_item_id)
    return ServiceResponse[CartResponse].ok(cart, "Product removed from cart")


@router.delete("/clear", response_model=ServiceResponse[CartResponse])
async def clear_cart(current_user: CurrentUser = Depends(get_current_user)):
    cart = await cart_service.clear_cart(current_user.id)
    return ServiceResponse[CartResponse].ok(cart, "Cart cleared")


@router.post("/checkout", response_model=ServiceResponse[CartResponse])
async def checkout(current_user: CurrentUser = Depends(get_current_user)):
    cart = await cart_service.checkout(current_user.id)
    return ServiceResponse[CartResponse].ok(cart, "Checkout completed")
