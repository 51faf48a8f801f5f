from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone
from itertools import count

import pytest

from agilesync.identity.application.services.session_service import SUPERADMIN_PRINCIPAL, SessionManager
from agilesync.identity.infrastructure.sessions.registry import SessionRegistry


class FakeClock:
    def __init__(self):
        self.now = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def registry(clock):
    return SessionRegistry("user", timedelta(hours=8), clock=clock)


def test_resolve_after_issue_returns_principal(registry):
    token = registry.issue("user-1")
    assert registry.resolve(token) == "user-1"
    # resolving does not consume the session
    assert registry.resolve(token) == "user-1"


def test_tokens_are_fresh_and_opaque(registry):
    tokens = {registry.issue("user-1") for _ in range(50)}
    assert len(tokens) == 50
    assert all("user-1" not in t for t in tokens)
    assert all(len(t) >= 32 for t in tokens)


def test_unknown_and_empty_tokens_resolve_to_nothing(registry):
    assert registry.resolve("nope") is None
    assert registry.resolve("") is None


def test_valid_until_window_elapses(registry, clock):
    token = registry.issue("user-1")
    clock.advance(hours=7, minutes=59)
    assert registry.resolve(token) == "user-1"


def test_expiry_is_sticky(registry, clock):
    token = registry.issue("user-1")
    clock.advance(hours=8, seconds=1)
    assert registry.resolve(token) is None
    assert len(registry) == 0
    clock.now -= timedelta(hours=1)
    assert registry.resolve(token) is None


def test_revoke_then_resolve(registry):
    token = registry.issue("user-1")
    assert registry.revoke(token) is True
    assert registry.resolve(token) is None
    assert registry.revoke(token) is False
    assert registry.revoke("never-issued") is False


def test_purge_expired_only_drops_expired(registry, clock):
    old = registry.issue("a")
    clock.advance(hours=5)
    fresh = registry.issue("b")
    clock.advance(hours=4)
    assert registry.purge_expired() == 1
    assert old not in registry
    assert registry.resolve(fresh) == "b"


def test_lookup_exposes_expiry(registry, clock):
    token = registry.issue("a")
    session = registry.lookup(token)
    assert session.principal == "a"
    assert session.expires_at == clock.now + timedelta(hours=8)


def test_token_collision_is_retried(clock):
    values = iter(["dup", "dup", "other"])
    reg = SessionRegistry("user", clock=clock, token_factory=lambda: next(values))
    assert reg.issue("a") == "dup"
    assert reg.issue("b") == "other"
    assert reg.resolve("dup") == "a"


def test_non_positive_ttl_rejected():
    with pytest.raises(ValueError):
        SessionRegistry("user", timedelta(0))


def test_concurrent_issue_never_collides():
    reg = SessionRegistry("user")
    seq = count()

    def issue_many(_):
        return [reg.issue(f"user-{next(seq)}") for _ in range(200)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        batches = list(pool.map(issue_many, range(8)))

    tokens = [t for batch in batches for t in batch]
    assert len(set(tokens)) == 1600
    assert len(reg) == 1600


def test_concurrent_resolve_and_revoke_are_consistent():
    reg = SessionRegistry("user")
    tokens = [reg.issue("u") for _ in range(500)]

    def resolve_all(_):
        return [reg.resolve(t) for t in tokens]

    with ThreadPoolExecutor(max_workers=4) as pool:
        readers = [pool.submit(resolve_all, i) for i in range(3)]
        revoker = pool.submit(lambda: [reg.revoke(t) for t in tokens])
        results = [f.result() for f in readers]
        assert all(revoker.result())

    for seen in results:
        assert set(seen) <= {"u", None}
    assert len(reg) == 0


def test_session_manager_keeps_registries_apart():
    sessions = SessionManager()
    user_token = sessions.issue_user_session("user-1")
    admin_token = sessions.issue_admin_session()

    assert sessions.resolve_user_token(user_token) == "user-1"
    assert sessions.resolve_admin_token(admin_token) is True
    assert sessions.resolve_user_token(admin_token) is None
    assert sessions.resolve_admin_token(user_token) is False


def test_impersonation_token_lives_in_user_registry():
    sessions = SessionManager()
    token = sessions.issue_impersonation_token()
    assert sessions.resolve_user_token(token) == SUPERADMIN_PRINCIPAL
    assert sessions.resolve_admin_token(token) is False


def test_session_manager_revoke_is_idempotent():
    sessions = SessionManager()
    token = sessions.issue_user_session("user-1")
    sessions.revoke_user_token(token)
    sessions.revoke_user_token(token)
    assert sessions.resolve_user_token(token) is None

    admin = sessions.issue_admin_session()
    sessions.revoke_admin_token(admin)
    sessions.revoke_admin_token(admin)
    assert sessions.resolve_admin_token(admin) is False


def test_session_manager_purge_sweeps_both_registries(clock):
    sessions = SessionManager(
        user_sessions=SessionRegistry("user", clock=clock),
        admin_sessions=SessionRegistry("admin", clock=clock),
    )
    sessions.issue_user_session("user-1")
    sessions.issue_admin_session()
    clock.advance(hours=9)
    live = sessions.issue_user_session("user-2")

    assert sessions.purge_expired() == 2
    assert sessions.resolve_user_token(live) == "user-2"
