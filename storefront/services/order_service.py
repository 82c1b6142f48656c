# storefront/services/order_service.py
"""
Order placement from the cart and the order lifecycle.
"""
import random
from typing import List

from beanie import PydanticObjectId
from beanie.odm.enums import SortDirection

from storefront.core.constants import Messages, OrderStatus
from storefront.core.exceptions import BusinessRuleError, NotFoundError
from storefront.core.logging import log
from storefront.core.security import CurrentUser
from storefront.lib.monitoring import record_order_placed
from storefront.models import Order, OrderItem, utcnow
from storefront.schemas import CreateOrderRequest, OrderItemResponse, OrderResponse, UpdateOrderStatusRequest
from storefront.services.cart_service import cart_lines, get_or_create_cart
from storefront.services.common import parse_object_id
from storefront.services.stock_service import StockLine, release_stock, reserve_stock, validate_lines

NEWEST_FIRST = [("created_at", SortDirection.DESCENDING), ("_id", SortDirection.DESCENDING)]

PENDING_ONLY = "Only pending orders can be deleted"
ORDER_CHANGED = "The order was changed by another request, please retry"


def generate_order_number() -> str:
    return f"ORD-{utcnow().strftime('%Y%m%d%H%M%S')}-{random.randrange(1000, 9999)}"


def to_order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=str(order.id),
        order_number=order.order_number,
        user_id=str(order.user_id),
        status=order.status,
        total=order.total,
        total_items=order.total_items,
        customer_name=order.customer_name,
        customer_email=order.customer_email,
        customer_phone=order.customer_phone,
        shipping_address=order.shipping_address,
        city=order.city,
        zip_code=order.zip_code,
        payment_method=order.payment_method,
        notes=order.notes,
        created_at=order.created_at,
        shipped_date=order.shipped_date,
        delivered_date=order.delivered_date,
        items=[
            OrderItemResponse(
                id=str(item.id),
                product_id=str(item.product_id),
                product_name=item.product_name,
                product_image=item.product_image,
                quantity=item.quantity,
                unit_price=item.unit_price,
                subtotal=item.subtotal,
            )
            for item in order.items
        ],
    )


def _order_lines(order: Order) -> List[StockLine]:
    return [StockLine(product_id=item.product_id, quantity=item.quantity) for item in order.items]


async def _unique_order_number(attempts: int = 5) -> str:
    for _ in range(attempts):
        number = generate_order_number()
        if await Order.find_one(Order.order_number == number) is None:
            return number
    raise BusinessRuleError("Could not allocate an order number, please retry")


async def create_order(user_id: PydanticObjectId, request: CreateOrderRequest) -> OrderResponse:
    cart = await get_or_create_cart(user_id)
    if not cart.items:
        raise BusinessRuleError(Messages.EMPTY_CART)

    lines = cart_lines(cart)
    products = await validate_lines(lines)
    order_number = await _unique_order_number()
    await reserve_stock(lines)

    order = Order(
        user_id=user_id,
        order_number=order_number,
        status=OrderStatus.PENDING,
        total=cart.total,
        customer_name=request.customer_name.strip(),
        customer_email=request.customer_email,
        customer_phone=request.customer_phone,
        shipping_address=request.shipping_address.strip(),
        city=request.city.strip(),
        zip_code=request.zip_code.strip(),
        payment_method=request.payment_method or "",
        notes=request.notes,
        items=[
            OrderItem(
                product_id=item.product_id,
                product_name=products[item.product_id].name,
                product_image=products[item.product_id].main_image,
                quantity=item.quantity,
                unit_price=item.unit_price,
            )
            for item in cart.items
        ],
        created_by=user_id,
    )
    try:
        await order.insert()
    except Exception:
        await release_stock(lines)
        raise

    cart.items = []
    cart.touch(user_id)
    await cart.save()

    record_order_placed()
    log("ORDER", f"Order {order.order_number} placed: {order.total_items} items, total {order.total}", user_id=user_id)
    return to_order_response(order)


async def _get(order_id: str) -> Order:
    order = await Order.get(parse_object_id(order_id, "Order"))
    if order is None:
        raise NotFoundError("Order")
    return order


def _ensure_visible(order: Order, current_user: CurrentUser) -> None:
    # Other users' orders are reported as missing
    if not current_user.is_admin and order.user_id != current_user.id:
        raise NotFoundError("Order")


async def get_order(order_id: str, current_user: CurrentUser) -> OrderResponse:
    order = await _get(order_id)
    _ensure_visible(order, current_user)
    return to_order_response(order)


async def get_order_by_number(order_number: str, current_user: CurrentUser) -> OrderResponse:
    order = await Order.find_one(Order.order_number == order_number)
    if order is None:
        raise NotFoundError("Order")
    _ensure_visible(order, current_user)
    return to_order_response(order)


async def list_user_orders(user_id: PydanticObjectId) -> List[OrderResponse]:
    orders = await Order.find(Order.user_id == user_id).sort(NEWEST_FIRST).to_list()
    return [to_order_response(o) for o in orders]


async def list_all_orders() -> List[OrderResponse]:
    orders = await Order.find_all().sort(NEWEST_FIRST).to_list()
    return [to_order_response(o) for o in orders]


async def list_orders_by_status(status: str) -> List[OrderResponse]:
    if status not in OrderStatus.ALL:
        raise BusinessRuleError(f"Invalid order status. Valid values: {', '.join(OrderStatus.ALL)}")
    orders = await Order.find(Order.status == status).sort(NEWEST_FIRST).to_list()
    return [to_order_response(o) for o in orders]


async def update_order_status(
    order_id: str,
    request: UpdateOrderStatusRequest,
    user_id: PydanticObjectId,
) -> OrderResponse:
    """
    Move an order to a new status.

    The write only applies while the order still has the status that was read,
    so two concurrent cancellations cannot both return the items to stock.
    """
    order = await _get(order_id)
    previous = order.status

    if previous == OrderStatus.CANCELLED and request.status != OrderStatus.CANCELLED:
        raise BusinessRuleError("Cancelled orders cannot change status")

    now = utcnow()
    changes = {"status": request.status, "updated_at": now, "updated_by": user_id}
    if request.status == OrderStatus.SHIPPED and order.shipped_date is None:
        changes["shipped_date"] = now
    if request.status == OrderStatus.DELIVERED and order.delivered_date is None:
        changes["delivered_date"] = now
    if request.notes:
        changes["notes"] = request.notes

    result = await Order.get_motor_collection().update_one(
        {"_id": order.id, "status": previous},
        {"$set": changes},
    )
    if result.matched_count == 0:
        raise BusinessRuleError(ORDER_CHANGED)

    if request.status == OrderStatus.CANCELLED and previous != OrderStatus.CANCELLED:
        await release_stock(_order_lines(order))

    log("ORDER", f"Order {order.order_number}: {previous} -> {request.status}", user_id=user_id)
    return to_order_response(await _get(order_id))


async def delete_order(order_id: str, user_id: PydanticObjectId) -> None:
    order = await _get(order_id)
    if order.status != OrderStatus.PENDING:
        raise BusinessRuleError(PENDING_ONLY)

    result = await Order.get_motor_collection().delete_one({"_id": order.id, "status": OrderStatus.PENDING})
    if result.deleted_count == 0:
        raise BusinessRuleError(PENDING_ONLY)

    await release_stock(_order_lines(order))
    log("ORDER", f"Order {order.order_number} deleted", user_id=user_id)
