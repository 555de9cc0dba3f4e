"""Authentication endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, status
from starlette.requests import Request

from src.portfolio.api.dependencies import (
    AdminUser,
    AuthServiceDep,
    BearerToken,
    CurrentUser,
    Listing,
)
from src.portfolio.core.rate_limit import auth_rate_limit, limiter
from src.portfolio.schemas.auth import (
    AuthResponse,
    ChangePasswordRequest,
    LoginRequest,
    RegisterRequest,
    TokenVerifyResponse,
)
from src.portfolio.schemas.base import MessageResponse
from src.portfolio.schemas.user import (
    ProfileUpdate,
    UserListResponse,
    UserRead,
    UserResponse,
)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Account created and signed in"},
        400: {"description": "Validation failed"},
        409: {"description": "Email or username already in use"},
    },
)
@limiter.limit(auth_rate_limit)
async def register(
    request: Request, register_data: RegisterRequest, service: AuthServiceDep
) -> AuthResponse:
    """Create an admin account and return a session token."""
    return await service.register(register_data)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        200: {"description": "Successful authentication"},
        401: {"description": "Invalid credentials or deactivated account"},
    },
)
@limiter.limit(auth_rate_limit)
async def login(
    request: Request, login_data: LoginRequest, service: AuthServiceDep
) -> AuthResponse:
    """Authenticate with email and password."""
    return await service.authenticate(login_data.email, login_data.password)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: CurrentUser) -> UserResponse:
    """Get the signed-in user's profile."""
    return UserResponse(user=UserRead.model_validate(current_user))


@router.put(
    "/profile",
    response_model=UserResponse,
    responses={409: {"description": "Email or username already in use"}},
)
async def update_profile(
    data: ProfileUpdate, current_user: CurrentUser, service: AuthServiceDep
) -> UserResponse:
    user = await service.update_profile(current_user, data)
    return UserResponse(message="Profile updated successfully", user=UserRead.model_validate(user))


@router.put(
    "/change-password",
    response_model=MessageResponse,
    responses={400: {"description": "Current password is incorrect"}},
)
async def change_password(
    data: ChangePasswordRequest, current_user: CurrentUser, service: AuthServiceDep
) -> MessageResponse:
    await service.change_password(current_user, data.current_password, data.new_password)
    return MessageResponse(message="Password changed successfully")


@router.post("/logout", response_model=MessageResponse)
async def logout(current_user: CurrentUser) -> MessageResponse:
    """Tokens are stateless; the client discards its copy."""
    return MessageResponse(message="Logged out successfully")


@router.post(
    "/verify-token",
    response_model=TokenVerifyResponse,
    responses={401: {"description": "Invalid or expired token"}},
)
async def verify_token(token: BearerToken, service: AuthServiceDep) -> TokenVerifyResponse:
    user = await service.verify_token(token)
    return TokenVerifyResponse(user=UserRead.model_validate(user))


@router.get("/users", response_model=UserListResponse)
async def list_users(
    _admin: AdminUser,
    params: Listing,
    service: AuthServiceDep,
    role: Annotated[str | None, Query()] = None,
) -> UserListResponse:
    """List accounts (admin only)."""
    page = await service.list_users(params, role=role)
    return UserListResponse(
        users=[UserRead.model_validate(u) for u in page.items],
        pagination=page.meta(),
    )
