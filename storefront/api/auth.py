# storefront/api/auth.py
"""
Authentication endpoints: register, login, logout, token validation and profile.
"""
from fastapi import APIRouter, Depends, Response, status

from storefront.core.constants import Messages
from storefront.core.security import CurrentUser, clear_auth_cookie, get_current_user, set_auth_cookie
from storefront.schemas import (
    AuthData,
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    TokenValidationResponse,
    UserResponse,
)
from storefront.services import auth_service

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, response: Response):
    user, token = await auth_service.register(request)
    set_auth_cookie(response, token)
    return AuthResponse(message=Messages.REGISTER_SUCCESS, data=AuthData(user=user, token=token))


@router.post("/login", response_model=AuthResponse)
async def login(request: LoginRequest, response: Response):
    user, token = await auth_service.login(request)
    set_auth_cookie(response, token)
    return AuthResponse(message=Messages.LOGIN_SUCCESS, data=AuthData(user=user, token=token))


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response):
    clear_auth_cookie(response)
    return MessageResponse(message=Messages.LOGOUT_SUCCESS)


@router.get("/validate", response_model=TokenValidationResponse)
async def validate(current_user: CurrentUser = Depends(get_current_user)):
    return TokenValidationResponse(message=Messages.TOKEN_VALID, valid=True)


@router.get("/me", response_model=UserResponse)
async def me(current_user: CurrentUser = Depends(get_current_user)):
    return await auth_service.get_profile(current_user.id)
