from agilesync.identity.api.schemas.organization_schemas import (
    AddTenantAdminRequest,
    CreateOrganizationRequest,
    OrganizationResponse,
    TenantAdminResponse,
    UpdateOrganizationRequest,
)
from agilesync.identity.api.schemas.user_schemas import (
    AdminLoginRequest,
    AdminLoginResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    ThemePreferencesResponse,
    UpdateThemeRequest,
    UserResponse,
)

__all__ = [
    "AddTenantAdminRequest",
    "AdminLoginRequest",
    "AdminLoginResponse",
    "CreateOrganizationRequest",
    "LoginRequest",
    "LoginResponse",
    "OrganizationResponse",
    "RegisterRequest",
    "TenantAdminResponse",
    "ThemePreferencesResponse",
    "UpdateOrganizationRequest",
    "UpdateThemeRequest",
    "UserResponse",
]
