import pytest

from agilesync.shared.exceptions import UnauthenticatedError
from agilesync.identity.application.services.authorization_gate import (
    AuthorizationGate,
    Principal,
    extract_bearer_token,
)
from agilesync.identity.application.services.session_service import SessionManager


@pytest.mark.parametrize(
    "header",
    [None, "", "Bearer", "Bearer ", "Basic dXNlcjpwYXNz", "Token abc", "Bearer a b", "abc"],
)
def test_malformed_headers_are_rejected(header):
    with pytest.raises(UnauthenticatedError):
        extract_bearer_token(header)


@pytest.mark.parametrize("header", ["Bearer abc", "bearer abc", "BEARER abc", "  Bearer   abc  "])
def test_bearer_scheme_is_case_insensitive(header):
    assert extract_bearer_token(header) == "abc"


@pytest.fixture
def sessions():
    return SessionManager()


@pytest.fixture
def gate(sessions):
    return AuthorizationGate(sessions)


def test_user_token_resolves_to_principal(gate, sessions):
    token = sessions.issue_user_session("user-1")
    principal = gate.authenticate_user(f"Bearer {token}")
    assert principal == Principal("user-1", is_superadmin=False)


def test_impersonation_token_is_superadmin_principal(gate, sessions):
    token = sessions.issue_impersonation_token()
    principal = gate.authenticate_user(f"Bearer {token}")
    assert principal.is_superadmin
    assert principal.subject == "superadmin"


def test_unknown_or_revoked_token_is_unauthenticated(gate, sessions):
    with pytest.raises(UnauthenticatedError):
        gate.authenticate_user("Bearer unknown")

    token = sessions.issue_user_session("user-1")
    sessions.revoke_user_token(token)
    with pytest.raises(UnauthenticatedError):
        gate.authenticate_user(f"Bearer {token}")


def test_admin_gate_uses_admin_registry_only(gate, sessions):
    admin_token = sessions.issue_admin_session()
    gate.authenticate_admin(f"Bearer {admin_token}")

    with pytest.raises(UnauthenticatedError):
        gate.authenticate_user(f"Bearer {admin_token}")

    app_token = sessions.issue_impersonation_token()
    with pytest.raises(UnauthenticatedError):
        gate.authenticate_admin(f"Bearer {app_token}")


def test_unauthenticated_error_shape():
    err = UnauthenticatedError("Unauthorized")
    assert err.status_code == 401
    assert err.code == "unauthorized"
