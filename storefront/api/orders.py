# storefront/api/orders.py
"""
Order endpoints. Customers place and read their own orders; admins manage all of them.
"""
from typing import List

from fastapi import APIRouter, Depends, status

from storefront.core.security import CurrentUser, get_current_user, require_admin
from storefront.schemas import CreateOrderRequest, OrderResponse, ServiceResponse, UpdateOrderStatusRequest
from storefront.services import order_service

router = APIRouter(prefix="/api/orders", tags=["Orders"])


@router.post("", response_model=ServiceResponse[OrderResponse], status_code=status.HTTP_201_CREATED)
async def create_order(request: CreateOrderRequest, current_user: CurrentUser = Depends(get_current_user)):
    order = await order_service.create_order(current_user.id, request)
    return ServiceResponse[OrderResponse].ok(order, "Order created successfully")


@router.get("/my-orders", response_model=ServiceResponse[List[OrderResponse]])
async def my_orders(current_user: CurrentUser = Depends(get_current_user)):
    orders = await order_service.list_user_orders(current_user.id)
    return ServiceResponse[List[OrderResponse]].ok(orders)


@router.get("/all", response_model=ServiceResponse[List[OrderResponse]])
async def all_orders(admin: CurrentUser = Depends(require_admin)):
    orders = await order_service.list_all_orders()
    return ServiceResponse[List[OrderResponse]].ok(orders)


@router.get("/status/{order_status}", response_model=ServiceResponse[List[OrderResponse]])
async def orders_by_status(order_status: str, admin: CurrentUser = Depends(require_admin)):
    orders = await order_service.list_orders_by_status(order_status)
    return ServiceResponse[List[OrderResponse]].ok(orders)


@router.get("/order-number/{order_number}", response_model=ServiceResponse[OrderResponse])
async def order_by_number(order_number: str, current_user: CurrentUser = Depends(get_current_user)):
    order = await order_service.get_order_by_number(order_number, current_user)
    return ServiceResponse[OrderResponse].ok(order)


@router.get("/{order_id}", response_model=ServiceResponse[OrderResponse])
async def get_order(order_id: str, current_user: CurrentUser = Depends(get_current_user)):
    order = await order_service.get_order(order_id, current_user)
    return ServiceResponse[OrderResponse].ok(order)


@router.put("/{order_id}/status", response_model=ServiceResponse[OrderResponse])
async def update_order_status(
    order_id: str,
    request: UpdateOrderStatusRequest,
    admin: CurrentUser = Depends(require_admin),
):
    order = await order_service.update_order_status(order_id, request, user_id=admin.id)
    return ServiceResponse[OrderResponse].ok(order, "Order status updated")


@router.delete("/{order_id}", response_model=ServiceResponse[None])
async def delete_order(order_id: str, admin: CurrentUser = Depends(require_admin)):
    await order_service.delete_order(order_id, user_id=admin.id)
    return ServiceResponse[None].ok(message="Order deleted successfully")
