import pytest
from beanie import PydanticObjectId

from storefront.models import Category
from tests.utils.factories import create_category, create_product


@pytest.mark.asyncio
async def test_list_categories_with_product_counts(async_client):
    gaming = await create_category("Gaming")
    books = await create_category("Books")
    await create_product(gaming)
    await create_product(gaming)
    await create_product(gaming, state="Deleted")
    await create_category("Archived", state="Deleted")

    response = await async_client.get("/api/categories")
    assert response.status_code == 200
    data = {c["name"]: c for c in response.json()}
    assert set(data) == {"Gaming", "Books"}
    assert data["Gaming"]["product_count"] == 2
    assert data["Books"]["product_count"] == 0
    assert data["Books"]["id"] == str(books.id)


@pytest.mark.asyncio
async def test_get_category(async_client, category):
    response = await async_client.get(f"/api/categories/{category.id}")
    assert response.status_code == 200
    assert response.json()["name"] == "Electronics"


@pytest.mark.asyncio
@pytest.mark.parametrize("category_id", ["507f1f77bcf86cd799439011", "not-an-id"])
async def test_get_category_not_found(async_client, category_id):
    response = await async_client.get(f"/api/categories/{category_id}")
    assert response.status_code == 404
    assert response.json()["message"] == "Category not found"


@pytest.mark.asyncio
async def test_create_category_requires_admin(async_client, user_headers):
    response = await async_client.post("/api/categories", json={"name": "Toys"}, headers=user_headers)
    assert response.status_code == 403

    response = await async_client.post("/api/categories", json={"name": "Toys"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_category(async_client, admin_headers, admin_user):
    payload = {"name": "Toys", "description": "Fun for everyone"}
    response = await async_client.post("/api/categories", json=payload, headers=admin_headers)
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Toys"
    assert data["product_count"] == 0

    stored = await Category.get(PydanticObjectId(data["id"]))
    assert stored.created_by == admin_user.id


@pytest.mark.asyncio
async def test_create_category_duplicate_name(async_client, admin_headers, category):
    response = await async_client.post("/api/categories", json={"name": "Electronics"}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "A category with that name already exists"


@pytest.mark.asyncio
async def test_create_category_name_of_deleted_category_is_free(async_client, admin_headers):
    await create_category("Retro", state="Deleted")
    response = await async_client.post("/api/categories", json={"name": "Retro"}, headers=admin_headers)
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_update_category(async_client, admin_headers, category):
    response = await async_client.put(
        f"/api/categories/{category.id}",
        json={"description": "Gadgets and more"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Electronics"
    assert data["description"] == "Gadgets and more"

    stored = await Category.get(category.id)
    assert stored.updated_at is not None


@pytest.mark.asyncio
async def test_update_category_rename_collision(async_client, admin_headers, category):
    await create_category("Audio")
    response = await async_client.put(
        f"/api/categories/{category.id}",
        json={"name": "Audio"},
        headers=admin_headers,
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_category_with_active_products_refused(async_client, admin_headers, category):
    await create_product(category)
    await create_product(category)
    response = await async_client.delete(f"/api/categories/{category.id}", headers=admin_headers)
    assert response.status_code == 400
    assert "has 2 active products" in response.json()["message"]


@pytest.mark.asyncio
async def test_delete_category_soft_deletes(async_client, admin_headers, category):
    response = await async_client.delete(f"/api/categories/{category.id}", headers=admin_headers)
    assert response.status_code == 200

    stored = await Category.get(category.id)
    assert stored.state == "Deleted"

    response = await async_client.get(f"/api/categories/{category.id}")
    assert response.status_code == 404
