from agilesync.identity.api.dependencies.auth import (
    AdminToken,
    CurrentPrincipal,
    OptionalToken,
    get_current_principal,
    require_admin,
)
from agilesync.identity.api.dependencies.context import (
    get_auth_service,
    get_container,
    get_gate,
    get_tenant_service,
    get_user_service,
)

__all__ = [
    "AdminToken",
    "CurrentPrincipal",
    "OptionalToken",
    "get_auth_service",
    "get_container",
    "get_current_principal",
    "get_gate",
    "get_tenant_service",
    "get_user_service",
    "require_admin",
]
