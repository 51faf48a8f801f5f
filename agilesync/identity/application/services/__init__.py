from agilesync.identity.application.services.auth_service import AuthService
from agilesync.identity.application.services.authorization_gate import (
    AuthorizationGate,
    Principal,
    extract_bearer_token,
)
from agilesync.identity.application.services.session_service import SUPERADMIN_PRINCIPAL, SessionManager
from agilesync.identity.application.services.tenant_service import TenantAdminResult, TenantAdminService
from agilesync.identity.application.services.user_service import UserService

__all__ = [
    "AuthService",
    "AuthorizationGate",
    "Principal",
    "SUPERADMIN_PRINCIPAL",
    "SessionManager",
    "TenantAdminResult",
    "TenantAdminService",
    "UserService",
    "extract_bearer_token",
]
