"""
Authentication Dependencies
"""
from __future__ import annotations

from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from agilesync.shared.logging import bind_request_context
from agilesync.identity.api.dependencies.context import get_gate
from agilesync.identity.application.services.authorization_gate import (
    AuthorizationGate,
    Principal,
    extract_bearer_token,
)

# HTTP Bearer token scheme; the gate does the actual rejection
security = HTTPBearer(auto_error=False)

Credentials = Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)]


def _header(credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    if credentials is None:
        return None
    return f"{credentials.scheme} {credentials.credentials}"


async def get_current_principal(
    credentials: Credentials,
    gate: Annotated[AuthorizationGate, Depends(get_gate)],
) -> Principal:
    """Resolve the bearer token against the user registry, or 401."""
    principal = gate.authenticate_user(_header(credentials))
    bind_request_context(extras={"principal": principal.subject})
    return principal


async def require_admin(
    credentials: Credentials,
    gate: Annotated[AuthorizationGate, Depends(get_gate)],
) -> str:
    """Resolve the bearer token against the superadmin registry; returns the token."""
    header = _header(credentials)
    gate.authenticate_admin(header)
    return extract_bearer_token(header)


def optional_bearer_token(credentials: Credentials) -> Optional[str]:
    """Token if a well-formed bearer header is present, else None; never raises."""
    if credentials is None or not credentials.credentials:
        return None
    return credentials.credentials


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
AdminToken = Annotated[str, Depends(require_admin)]
OptionalToken = Annotated[Optional[str], Depends(optional_bearer_token)]
