# storefront/db/seed.py
"""
Default data created at startup: the Admin/User roles and a first admin account.
"""
from storefront.core.config import settings
from storefront.core.constants import Roles, Scopes, States
from storefront.core.logging import log
from storefront.core.security import hash_password
from storefront.models import Role, User


DEFAULT_ROLES = [
    {"name": Roles.ADMIN, "scope": Scopes.ALL, "description": "System administrator"},
    {"name": Roles.USER, "scope": Scopes.USER, "description": "Standard customer"},
]


async def seed_roles() -> int:
    """Create the default roles when the collection is empty. Returns how many were created."""
    if await Role.find_all().count() > 0:
        log("SEED", "Roles already exist, skipping")
        return 0

    for spec in DEFAULT_ROLES:
        await Role(state=States.ACTIVE, **spec).insert()
    log("SEED", f"Roles created: {', '.join(r['name'] for r in DEFAULT_ROLES)}")
    return len(DEFAULT_ROLES)


async def seed_admin_user() -> bool:
    """Create the admin account when no user exists yet."""
    if await User.find_all().count() > 0:
        log("SEED", "Users already exist, skipping admin creation")
        return False

    admin_role = await Role.find_one(Role.name == Roles.ADMIN)
    if admin_role is None:
        log("SEED", "Admin role not found, cannot create admin user")
        return False

    # Logins are matched against the lowercased address
    email = settings.auth.admin_email.strip().lower()
    await User(
        email=email,
        password_hash=hash_password(settings.auth.admin_password),
        first_name="Admin",
        last_name="User",
        role_id=admin_role.id,
        state=States.ACTIVE,
    ).insert()
    log("SEED", f"Admin user created: {email}")
    return True


async def seed_database() -> None:
    await seed_roles()
    await seed_admin_user()
