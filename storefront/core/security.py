# storefront/core/security.py
"""
Password hashing, JWT issuing/decoding and the FastAPI auth dependencies.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from beanie import PydanticObjectId
from fastapi import Depends, Request, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from storefront.core.config import settings
from storefront.core.constants import Messages, Roles, States
from storefront.core.exceptions import AuthenticationError, PermissionDeniedError
from storefront.models import User


bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class CurrentUser:
    """Identity extracted from a validated token."""
    id: PydanticObjectId
    email: str
    role: str
    scope: str

    @property
    def is_admin(self) -> bool:
        return self.role == Roles.ADMIN


# ═══════════════════════════════════════════════════════════════════════════════
# PASSWORDS
# ═══════════════════════════════════════════════════════════════════════════════

def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=settings.auth.bcrypt_rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


# ═══════════════════════════════════════════════════════════════════════════════
# TOKENS
# ═══════════════════════════════════════════════════════════════════════════════

def create_access_token(user_id, email: str, role: str, scope: str) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "email": email,
        "role": role,
        "scope": scope,
        "iss": settings.auth.jwt_issuer,
        "aud": settings.auth.jwt_audience,
        "iat": now,
        "exp": now + timedelta(hours=settings.auth.token_expire_hours),
    }
    return jwt.encode(payload, settings.auth.jwt_secret, algorithm=settings.auth.jwt_algorithm)


def decode_token(token: str) -> dict:
    """Decode and validate a token. Raises AuthenticationError when it is unusable."""
    try:
        return jwt.decode(
            token,
            settings.auth.jwt_secret,
            algorithms=[settings.auth.jwt_algorithm],
            audience=settings.auth.jwt_audience,
            issuer=settings.auth.jwt_issuer,
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except jwt.InvalidTokenError:
        raise AuthenticationError("Invalid token")


def set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.auth.cookie_name,
        value=token,
        httponly=True,
        secure=settings.auth.cookie_secure,
        samesite="lax",
        max_age=settings.auth.token_expire_hours * 3600,
    )


def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(key=settings.auth.cookie_name, httponly=True, samesite="lax")


# ═══════════════════════════════════════════════════════════════════════════════
# DEPENDENCIES
# ═══════════════════════════════════════════════════════════════════════════════

def _extract_token(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.auth.cookie_name)


def _current_user_from_claims(claims: dict) -> CurrentUser:
    sub = claims.get("sub")
    if not sub or not PydanticObjectId.is_valid(sub):
        raise AuthenticationError("Invalid token")
    return CurrentUser(
        id=PydanticObjectId(sub),
        email=claims.get("email", ""),
        role=claims.get("role", ""),
        scope=claims.get("scope", ""),
    )


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> CurrentUser:
    token = _extract_token(request, credentials)
    if not token:
        raise AuthenticationError(Messages.UNAUTHORIZED)

    current = _current_user_from_claims(decode_token(token))

    # Disabled or removed accounts lose access even with a live token
    user = await User.get(current.id)
    if user is None or user.state != States.ACTIVE:
        raise AuthenticationError(Messages.UNAUTHORIZED)
    return current


async def get_optional_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[CurrentUser]:
    token = _extract_token(request, credentials)
    if not token:
        return None
    try:
        return _current_user_from_claims(decode_token(token))
    except AuthenticationError:
        return None


async def require_admin(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not current_user.is_admin:
        raise PermissionDeniedError(Messages.FORBIDDEN)
    return current_user
