"""
Superadmin Routes
Admin sessions, organization lifecycle and tenant admins
"""
from __future__ import annotations

from typing import Annotated, List

from fastapi import APIRouter, Depends, status

from agilesync.shared.api.response_models import MessageResponse, SuccessResponse
from agilesync.identity.api.dependencies import (
    AdminToken,
    get_auth_service,
    get_tenant_service,
    require_admin,
)
from agilesync.identity.api.schemas import (
    AddTenantAdminRequest,
    AdminLoginRequest,
    AdminLoginResponse,
    CreateOrganizationRequest,
    LoginResponse,
    OrganizationResponse,
    TenantAdminResponse,
    UpdateOrganizationRequest,
)
from agilesync.identity.application.services.auth_service import AuthService
from agilesync.identity.application.services.tenant_service import TenantAdminService

router = APIRouter(prefix="/api/identity/admin", tags=["Admin"])

Auth = Annotated[AuthService, Depends(get_auth_service)]
Tenants = Annotated[TenantAdminService, Depends(get_tenant_service)]

AdminOnly = [Depends(require_admin)]


# ---- admin session ---------------------------------------------------------

@router.post("/login", response_model=SuccessResponse[AdminLoginResponse], summary="Superadmin login")
async def admin_login(body: AdminLoginRequest, auth: Auth) -> SuccessResponse[AdminLoginResponse]:
    token = auth.admin_login(body.username, body.password)
    return SuccessResponse(data=AdminLoginResponse(token=token))


@router.post("/logout", response_model=MessageResponse, summary="Superadmin logout")
async def admin_logout(token: AdminToken, auth: Auth) -> MessageResponse:
    auth.admin_logout(token)
    return MessageResponse(message="Logged out")


@router.post(
    "/app-token",
    response_model=SuccessResponse[LoginResponse],
    dependencies=AdminOnly,
    summary="Issue a user-surface token for the superadmin",
)
async def app_token(auth: Auth) -> SuccessResponse[LoginResponse]:
    token, profile = auth.issue_app_token()
    return SuccessResponse(data=LoginResponse.for_profile(token, profile))


# ---- organizations ---------------------------------------------------------

@router.get(
    "/organizations",
    response_model=SuccessResponse[List[OrganizationResponse]],
    dependencies=AdminOnly,
)
async def list_organizations(tenants: Tenants) -> SuccessResponse[List[OrganizationResponse]]:
    orgs = await tenants.list_organizations()
    return SuccessResponse(data=[OrganizationResponse.from_entity(o) for o in orgs])


@router.post(
    "/organizations",
    response_model=SuccessResponse[OrganizationResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=AdminOnly,
)
async def create_organization(
    body: CreateOrganizationRequest, tenants: Tenants
) -> SuccessResponse[OrganizationResponse]:
    org = await tenants.create_organization(body.name, body.slug, body.description)
    return SuccessResponse(data=OrganizationResponse.from_entity(org), message="Organization created")


@router.get(
    "/organizations/{org_id}",
    response_model=SuccessResponse[OrganizationResponse],
    dependencies=AdminOnly,
)
async def get_organization(org_id: str, tenants: Tenants) -> SuccessResponse[OrganizationResponse]:
    return SuccessResponse(data=OrganizationResponse.from_entity(await tenants.get_organization(org_id)))


@router.put(
    "/organizations/{org_id}",
    response_model=SuccessResponse[OrganizationResponse],
    dependencies=AdminOnly,
)
async def update_organization(
    org_id: str, body: UpdateOrganizationRequest, tenants: Tenants
) -> SuccessResponse[OrganizationResponse]:
    org = await tenants.update_organization(
        org_id, name=body.name, description=body.description, is_active=body.is_active
    )
    return SuccessResponse(data=OrganizationResponse.from_entity(org), message="Organization updated")


@router.delete(
    "/organizations/{org_id}",
    response_model=SuccessResponse[OrganizationResponse],
    dependencies=AdminOnly,
    summary="Deactivate organization (soft delete)",
)
async def deactivate_organization(org_id: str, tenants: Tenants) -> SuccessResponse[OrganizationResponse]:
    org = await tenants.deactivate_organization(org_id)
    return SuccessResponse(data=OrganizationResponse.from_entity(org), message="Organization deactivated")


# ---- tenant admins ---------------------------------------------------------

@router.get(
    "/organizations/{org_id}/admins",
    response_model=SuccessResponse[List[TenantAdminResponse]],
    dependencies=AdminOnly,
)
async def list_tenant_admins(org_id: str, tenants: Tenants) -> SuccessResponse[List[TenantAdminResponse]]:
    members = await tenants.list_tenant_admins(org_id)
    return SuccessResponse(data=[TenantAdminResponse.from_member(m) for m in members])


@router.post(
    "/organizations/{org_id}/admins",
    response_model=SuccessResponse[TenantAdminResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=AdminOnly,
)
async def add_tenant_admin(
    org_id: str, body: AddTenantAdminRequest, tenants: Tenants
) -> SuccessResponse[TenantAdminResponse]:
    result = await tenants.add_tenant_admin(
        org_id, email=body.email, display_name=body.display_name, password=body.password
    )
    return SuccessResponse(data=TenantAdminResponse.from_member(result.member), message="Admin added")


@router.delete(
    "/organizations/{org_id}/admins/{user_id}",
    response_model=MessageResponse,
    dependencies=AdminOnly,
)
async def remove_tenant_admin(org_id: str, user_id: str, tenants: Tenants) -> MessageResponse:
    await tenants.remove_tenant_admin(org_id, user_id)
    return MessageResponse(message="Admin removed")
