# tests/utils/factories.py
"""
Data builders shared by the API tests. Records are inserted straight
through Beanie so tests only exercise the endpoint under test.
"""
from faker import Faker

from storefront.core.config import settings
from storefront.core.constants import Roles
from storefront.core.security import create_access_token, hash_password
from storefront.models import Category, Product, Role, User

fake = Faker()

USER_PASSWORD = "Secret123"


def token_for(user: User, role: Role) -> str:
    return create_access_token(user.id, user.email, role.name, role.scope)


async def headers_for(user: User) -> dict:
    role = await Role.get(user.role_id)
    return {"Authorization": f"Bearer {token_for(user, role)}"}


async def create_customer(email: str = None) -> User:
    role = await Role.find_one(Role.name == Roles.USER)
    user = User(
        email=email or fake.unique.email().lower(),
        password_hash=hash_password(USER_PASSWORD),
        first_name="Ana",
        last_name="Lopez",
        role_id=role.id,
    )
    await user.insert()
    return user


async def create_admin() -> User:
    role = await Role.find_one(Role.name == Roles.ADMIN)
    user = User(
        email=settings.auth.admin_email.lower(),
        password_hash=hash_password(settings.auth.admin_password),
        first_name="Admin",
        last_name="User",
        role_id=role.id,
    )
    await user.insert()
    return user


async def create_category(name: str = None, **overrides) -> Category:
    category = Category(name=name or fake.unique.word().capitalize(), **overrides)
    await category.insert()
    return category


async def create_product(category: Category, **overrides) -> Product:
    data = {
        "name": fake.unique.catch_phrase()[:90],
        "description": fake.sentence(nb_words=10),
        "price": 100.0,
        "stock": 10,
        "sku": fake.unique.bothify("SKU-####-????").upper(),
        "category_id": category.id,
    }
    data.update(overrides)
    product = Product(**data)
    await product.insert()
    return product
