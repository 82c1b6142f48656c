import asyncio
import re
from unittest.mock import patch

import pytest
from beanie import PydanticObjectId

from storefront.core.exceptions import BusinessRuleError
from storefront.models import Order, Product
from storefront.schemas import UpdateOrderStatusRequest
from storefront.services import order_service
from storefront.services.stock_service import StockLine, reserve_stock
from tests.utils.factories import create_customer, create_product, headers_for

ORDER_FORM = {
    "customer_name": "Ana Lopez",
    "customer_email": "ana@example.com",
    "customer_phone": "555-0101",
    "shipping_address": "221B Baker Street",
    "city": "London",
    "zip_code": "NW16XE",
    "payment_method": "card",
}


async def _fill_cart(client, headers, product_id, quantity):
    response = await client.post(
        "/api/cart/add",
        json={"product_id": str(product_id), "quantity": quantity},
        headers=headers,
    )
    assert response.status_code == 200


async def _place_order(client, headers, product_id, quantity=2):
    await _fill_cart(client, headers, product_id, quantity)
    response = await client.post("/api/orders", json=ORDER_FORM, headers=headers)
    assert response.status_code == 201
    return response.json()["data"]


# ═══════════════════════════════════════════════════════
# PLACEMENT
# ═══════════════════════════════════════════════════════

@pytest.mark.asyncio
async def test_create_order(async_client, customer, user_headers, product):
    order = await _place_order(async_client, user_headers, product.id, 3)

    assert re.match(r"^ORD-\d{14}-\d{4}$", order["order_number"])
    assert order["status"] == "Pending"
    assert order["total"] == 150.0
    assert order["total_items"] == 3
    assert order["user_id"] == str(customer.id)
    assert order["items"][0]["product_name"] == "Mechanical Keyboard"
    assert order["items"][0]["subtotal"] == 150.0

    assert (await Product.get(product.id)).stock == 7
    cart = (await async_client.get("/api/cart", headers=user_headers)).json()["data"]
    assert cart["items"] == []


@pytest.mark.asyncio
async def test_create_order_with_empty_cart(async_client, user_headers):
    response = await async_client.post("/api/orders", json=ORDER_FORM, headers=user_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Cart is empty"


@pytest.mark.asyncio
async def test_create_order_validation(async_client, user_headers, product):
    await _fill_cart(async_client, user_headers, product.id, 1)
    response = await async_client.post(
        "/api/orders",
        json={**ORDER_FORM, "customer_email": "nope", "city": ""},
        headers=user_headers,
    )
    assert response.status_code == 400
    assert len(response.json()["errors"]) == 2


@pytest.mark.asyncio
async def test_create_order_insufficient_stock_changes_nothing(async_client, user_headers, category, product):
    lamp = await create_product(category, name="Lamp", stock=5)
    await _fill_cart(async_client, user_headers, product.id, 2)
    await _fill_cart(async_client, user_headers, lamp.id, 5)
    lamp.stock = 4
    await lamp.save()

    response = await async_client.post("/api/orders", json=ORDER_FORM, headers=user_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Insufficient stock. Only 4 units available of product 'Lamp'"
    assert (await Product.get(product.id)).stock == 10
    assert await Order.find_all().count() == 0


@pytest.mark.asyncio
async def test_reserve_stock_rolls_back_on_race(category):
    first = await create_product(category, stock=5)
    second = await create_product(category, stock=1)

    with pytest.raises(BusinessRuleError):
        await reserve_stock([StockLine(first.id, 3), StockLine(second.id, 2)])

    assert (await Product.get(first.id)).stock == 5
    assert (await Product.get(second.id)).stock == 1


# ═══════════════════════════════════════════════════════
# READING
# ═══════════════════════════════════════════════════════

@pytest.mark.asyncio
async def test_get_order_owner_and_admin(async_client, user_headers, admin_headers, product):
    order = await _place_order(async_client, user_headers, product.id)

    response = await async_client.get(f"/api/orders/{order['id']}", headers=user_headers)
    assert response.status_code == 200
    assert response.json()["data"]["order_number"] == order["order_number"]

    response = await async_client.get(f"/api/orders/{order['id']}", headers=admin_headers)
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_get_order_of_another_user_is_hidden(async_client, user_headers, product):
    order = await _place_order(async_client, user_headers, product.id)
    stranger_headers = await headers_for(await create_customer())

    response = await async_client.get(f"/api/orders/{order['id']}", headers=stranger_headers)
    assert response.status_code == 404
    response = await async_client.get(
        f"/api/orders/order-number/{order['order_number']}",
        headers=stranger_headers,
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_get_order_by_number(async_client, user_headers, product):
    order = await _place_order(async_client, user_headers, product.id)
    response = await async_client.get(f"/api/orders/order-number/{order['order_number']}", headers=user_headers)
    assert response.status_code == 200
    assert response.json()["data"]["id"] == order["id"]

    response = await async_client.get("/api/orders/order-number/ORD-NOPE", headers=user_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_my_orders_newest_first(async_client, user_headers, product):
    first = await _place_order(async_client, user_headers, product.id, 1)
    second = await _place_order(async_client, user_headers, product.id, 1)

    other_headers = await headers_for(await create_customer())
    await _place_order(async_client, other_headers, product.id, 1)

    response = await async_client.get("/api/orders/my-orders", headers=user_headers)
    assert response.status_code == 200
    ids = [o["id"] for o in response.json()["data"]]
    assert ids == [second["id"], first["id"]]


@pytest.mark.asyncio
async def test_admin_lists(async_client, user_headers, admin_headers, product):
    order = await _place_order(async_client, user_headers, product.id, 1)

    assert (await async_client.get("/api/orders/all", headers=user_headers)).status_code == 403

    response = await async_client.get("/api/orders/all", headers=admin_headers)
    assert [o["id"] for o in response.json()["data"]] == [order["id"]]

    response = await async_client.get("/api/orders/status/Pending", headers=admin_headers)
    assert len(response.json()["data"]) == 1
    response = await async_client.get("/api/orders/status/Shipped", headers=admin_headers)
    assert response.json()["data"] == []
    response = await async_client.get("/api/orders/status/Lost", headers=admin_headers)
    assert response.status_code == 400


# ═══════════════════════════════════════════════════════
# LIFECYCLE
# ═══════════════════════════════════════════════════════

async def _set_status(client, headers, order_id, status, notes=None):
    payload = {"status": status}
    if notes is not None:
        payload["notes"] = notes
    return await client.put(f"/api/orders/{order_id}/status", json=payload, headers=headers)


@pytest.mark.asyncio
async def test_status_transitions_stamp_dates(async_client, user_headers, admin_headers, product):
    order = await _place_order(async_client, user_headers, product.id)

    response = await _set_status(async_client, admin_headers, order["id"], "Shipped", notes="Sent with DHL")
    assert response.status_code == 200
    shipped = response.json()["data"]
    assert shipped["status"] == "Shipped"
    assert shipped["shipped_date"] is not None
    assert shipped["notes"] == "Sent with DHL"

    response = await _set_status(async_client, admin_headers, order["id"], "Delivered", notes="")
    delivered = response.json()["data"]
    assert delivered["delivered_date"] is not None
    assert delivered["shipped_date"] is not None
    assert delivered["notes"] == "Sent with DHL"


@pytest.mark.asyncio
async def test_status_update_rejects_unknown_status(async_client, user_headers, admin_headers, product):
    order = await _place_order(async_client, user_headers, product.id)
    response = await _set_status(async_client, admin_headers, order["id"], "Teleported")
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_status_update_requires_admin(async_client, user_headers, product):
    order = await _place_order(async_client, user_headers, product.id)
    response = await _set_status(async_client, user_headers, order["id"], "Shipped")
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_cancel_returns_stock_once(async_client, user_headers, admin_headers, product):
    order = await _place_order(async_client, user_headers, product.id, 4)
    assert (await Product.get(product.id)).stock == 6

    await _set_status(async_client, admin_headers, order["id"], "Cancelled")
    assert (await Product.get(product.id)).stock == 10

    await _set_status(async_client, admin_headers, order["id"], "Cancelled")
    assert (await Product.get(product.id)).stock == 10

    response = await _set_status(async_client, admin_headers, order["id"], "Processing")
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_pending_order_returns_stock(async_client, user_headers, admin_headers, product):
    order = await _place_order(async_client, user_headers, product.id, 2)

    response = await async_client.delete(f"/api/orders/{order['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["success"] is True
    assert await Order.find_all().count() == 0
    assert (await Product.get(product.id)).stock == 10


@pytest.mark.asyncio
async def test_delete_non_pending_order_refused(async_client, user_headers, admin_headers, product):
    order = await _place_order(async_client, user_headers, product.id)
    await _set_status(async_client, admin_headers, order["id"], "Processing")

    response = await async_client.delete(f"/api/orders/{order['id']}", headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Only pending orders can be deleted"


@pytest.mark.asyncio
async def test_delete_unknown_order(async_client, admin_headers):
    response = await async_client.delete("/api/orders/507f1f77bcf86cd799439011", headers=admin_headers)
    assert response.status_code == 404


# ═══════════════════════════════════════════════════════
# CONCURRENT LIFECYCLE CHANGES
# ═══════════════════════════════════════════════════════

@pytest.fixture
def slow_order_reads(monkeypatch):
    """Yield to the event loop after every order read so requests interleave."""
    original = order_service._get

    async def slow_get(order_id):
        order = await original(order_id)
        await asyncio.sleep(0)
        return order

    monkeypatch.setattr(order_service, "_get", slow_get)


@pytest.mark.asyncio
async def test_concurrent_cancels_return_stock_once(async_client, user_headers, admin_user, product, slow_order_reads):
    order = await _place_order(async_client, user_headers, product.id, 4)
    assert (await Product.get(product.id)).stock == 6

    cancel = UpdateOrderStatusRequest(status="Cancelled")
    results = await asyncio.gather(
        order_service.update_order_status(order["id"], cancel, admin_user.id),
        order_service.update_order_status(order["id"], cancel, admin_user.id),
        return_exceptions=True,
    )

    assert sum(isinstance(r, BusinessRuleError) for r in results) == 1
    assert (await Product.get(product.id)).stock == 10
    assert (await Order.get(PydanticObjectId(order["id"]))).status == "Cancelled"


@pytest.mark.asyncio
async def test_cancel_racing_delete_returns_stock_once(async_client, user_headers, admin_user, product, slow_order_reads):
    order = await _place_order(async_client, user_headers, product.id, 4)

    results = await asyncio.gather(
        order_service.update_order_status(order["id"], UpdateOrderStatusRequest(status="Cancelled"), admin_user.id),
        order_service.delete_order(order["id"], admin_user.id),
        return_exceptions=True,
    )

    assert sum(isinstance(r, BusinessRuleError) for r in results) == 1
    assert (await Product.get(product.id)).stock == 10


def test_order_number_suffix_range():
    with patch("storefront.services.order_service.random.randrange", return_value=9998) as randrange:
        number = order_service.generate_order_number()
    randrange.assert_called_once_with(1000, 9999)
    assert number.endswith("-9998")
