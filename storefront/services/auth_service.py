# storefront/services/auth_service.py
"""
Registration, login and profile lookups.
"""
from typing import Optional, Tuple

from beanie import PydanticObjectId

from storefront.core.constants import Messages, Roles, States
from storefront.core.exceptions import AuthenticationError, BusinessRuleError
from storefront.core.logging import log
from storefront.core.security import create_access_token, hash_password, verify_password
from storefront.models import Role, User
from storefront.schemas import LoginRequest, RegisterRequest, UserResponse


def to_user_response(user: User, role: Optional[Role]) -> UserResponse:
    return UserResponse(
        id=str(user.id),
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        full_name=user.full_name,
        phone_number=user.phone_number,
        role=role.name if role else "",
        state=user.state,
    )


def _issue_token(user: User, role: Role) -> str:
    return create_access_token(user.id, user.email, role.name, role.scope)


async def register(request: RegisterRequest) -> Tuple[UserResponse, str]:
    if await User.find_one(User.email == request.email):
        raise BusinessRuleError(Messages.EMAIL_ALREADY_EXISTS)

    role = await Role.find_one(Role.name == Roles.USER, Role.state == States.ACTIVE)
    if role is None:
        log("AUTH", "Registration failed: default role 'User' is missing")
        raise BusinessRuleError("Default user role is not configured")

    user = User(
        email=request.email,
        password_hash=hash_password(request.password),
        first_name=request.first_name,
        last_name=request.last_name,
        phone_number=request.phone_number or None,
        role_id=role.id,
        state=States.ACTIVE,
    )
    await user.insert()
    log("AUTH", f"User registered: {user.email}", user_id=user.id)
    return to_user_response(user, role), _issue_token(user, role)


async def login(request: LoginRequest) -> Tuple[UserResponse, str]:
    user = await User.find_one(User.email == request.email, User.state == States.ACTIVE)
    if user is None or not verify_password(request.password, user.password_hash):
        log("AUTH", f"Failed login for {request.email}")
        raise BusinessRuleError(Messages.INVALID_CREDENTIALS)

    role = await Role.get(user.role_id)
    if role is None:
        raise BusinessRuleError(Messages.INVALID_CREDENTIALS)

    log("AUTH", f"User logged in: {user.email}", user_id=user.id)
    return to_user_response(user, role), _issue_token(user, role)


async def get_profile(user_id: PydanticObjectId) -> UserResponse:
    user = await User.get(user_id)
    if user is None or user.state != States.ACTIVE:
        raise AuthenticationError(Messages.UNAUTHORIZED)
    role = await Role.get(user.role_id)
    return to_user_response(user, role)
