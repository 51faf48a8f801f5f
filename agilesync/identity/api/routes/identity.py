"""
Identity Routes
Registration, user sessions, profile, theme and organization membership
"""
from __future__ import annotations

from typing import Annotated, List

from fastapi import APIRouter, Depends, status

from agilesync.shared.api.response_models import MessageResponse, SuccessResponse
from agilesync.identity.api.dependencies import (
    CurrentPrincipal,
    OptionalToken,
    get_auth_service,
    get_user_service,
)
from agilesync.identity.api.schemas import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    TenantAdminResponse,
    ThemePreferencesResponse,
    UpdateThemeRequest,
    UserResponse,
)
from agilesync.identity.application.dto.user_dto import UserProfile
from agilesync.identity.application.services.auth_service import AuthService
from agilesync.identity.application.services.user_service import UserService

router = APIRouter(prefix="/api/identity", tags=["Identity"])

Auth = Annotated[AuthService, Depends(get_auth_service)]
Users = Annotated[UserService, Depends(get_user_service)]


@router.post(
    "/register",
    response_model=SuccessResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Register",
)
async def register(body: RegisterRequest, users: Users) -> SuccessResponse[UserResponse]:
    user = await users.register(body.email, body.display_name, body.password)
    return SuccessResponse(data=UserResponse.from_user(user), message="Registration successful")


@router.post("/login", response_model=SuccessResponse[LoginResponse], summary="Login")
async def login(body: LoginRequest, auth: Auth) -> SuccessResponse[LoginResponse]:
    token, user = await auth.login(body.email, body.password)
    return SuccessResponse(data=LoginResponse.for_profile(token, UserProfile.from_user(user)))


@router.get("/me", response_model=SuccessResponse[UserResponse], summary="Current user")
async def me(principal: CurrentPrincipal, auth: Auth) -> SuccessResponse[UserResponse]:
    profile = await auth.current_profile(principal)
    return SuccessResponse(data=UserResponse.from_profile(profile))


@router.post("/logout", response_model=MessageResponse, summary="Logout")
async def logout(token: OptionalToken, auth: Auth) -> MessageResponse:
    """Revokes the presented token if there is one; always succeeds."""
    if token:
        auth.logout(token)
    return MessageResponse(message="Logged out")


@router.get("/users", response_model=SuccessResponse[List[UserResponse]], summary="List users")
async def list_users(_: CurrentPrincipal, users: Users) -> SuccessResponse[List[UserResponse]]:
    return SuccessResponse(data=[UserResponse.from_user(u) for u in await users.list_users()])


@router.get("/users/{user_id}", response_model=SuccessResponse[UserResponse], summary="Get user")
async def get_user(user_id: str, _: CurrentPrincipal, users: Users) -> SuccessResponse[UserResponse]:
    return SuccessResponse(data=UserResponse.from_user(await users.get_user(user_id)))


@router.get(
    "/users/{user_id}/theme",
    response_model=SuccessResponse[ThemePreferencesResponse],
    summary="Get theme preferences",
    description="Own account only, or the superadmin app token",
)
async def get_theme(
    user_id: str, principal: CurrentPrincipal, users: Users
) -> SuccessResponse[ThemePreferencesResponse]:
    prefs = await users.get_theme(principal, user_id)
    return SuccessResponse(data=ThemePreferencesResponse.from_preferences(prefs))


@router.put(
    "/users/{user_id}/theme",
    response_model=SuccessResponse[ThemePreferencesResponse],
    summary="Update theme preference",
    description="Own account only, or the superadmin app token",
)
async def update_theme(
    user_id: str, body: UpdateThemeRequest, principal: CurrentPrincipal, users: Users
) -> SuccessResponse[ThemePreferencesResponse]:
    prefs = await users.update_theme(principal, user_id, body.platform, body.theme)
    return SuccessResponse(data=ThemePreferencesResponse.from_preferences(prefs), message="Theme updated")


@router.get(
    "/organizations/{org_id}/members",
    response_model=SuccessResponse[List[TenantAdminResponse]],
    summary="List organization members",
    description="Owner/Admin of the organization, or the superadmin app token",
)
async def list_members(
    org_id: str, principal: CurrentPrincipal, users: Users
) -> SuccessResponse[List[TenantAdminResponse]]:
    members = await users.list_organization_members(principal, org_id)
    return SuccessResponse(data=[TenantAdminResponse.from_member(m) for m in members])
