"""
Context Dependencies
Resolve services from the application container on app.state
"""
from __future__ import annotations

from fastapi import Request

from agilesync.dependencies import AppContainer
from agilesync.identity.application.services.auth_service import AuthService
from agilesync.identity.application.services.authorization_gate import AuthorizationGate
from agilesync.identity.application.services.tenant_service import TenantAdminService
from agilesync.identity.application.services.user_service import UserService


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


def get_gate(request: Request) -> AuthorizationGate:
    return get_container(request).gate


def get_auth_service(request: Request) -> AuthService:
    return get_container(request).auth_service


def get_user_service(request: Request) -> UserService:
    return get_container(request).user_service


def get_tenant_service(request: Request) -> TenantAdminService:
    return get_container(request).tenant_service
