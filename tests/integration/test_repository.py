from datetime import datetime, timezone

import pytest

from agilesync.shared.exceptions import (
    ConflictError,
    DomainError,
    NotFoundError,
    StaleEntityError,
    StoreUnavailableError,
)
from agilesync.dependencies import AppContainer
from agilesync.identity.domain.entities import Organization, User
from agilesync.identity.domain.value_objects import OrgRole, Theme
from agilesync.identity.infrastructure.persistence.models import UserModel
from agilesync.shared.database.base_repository import Repository

from tests.conftest import make_settings


def new_user(email="someone@example.com", **kwargs) -> User:
    return User(email=email, display_name="Someone", password_hash="hash", **kwargs)


async def test_repositories_satisfy_contract(container):
    assert isinstance(container.users, Repository)
    assert isinstance(container.organizations, Repository)


async def test_create_stamps_timestamps(container):
    stale = datetime(2000, 1, 1, tzinfo=timezone.utc)
    user = new_user(created_at=stale, updated_at=stale)
    await container.users.create(user)

    assert user.created_at > stale
    assert user.updated_at == user.created_at

    stored = await container.users.get_by_id(user.id)
    assert stored.created_at == user.created_at
    assert stored.created_at.tzinfo is not None


async def test_get_by_id_missing_returns_none(container):
    assert await container.users.get_by_id("missing") is None


async def test_update_is_strict(container):
    with pytest.raises(NotFoundError):
        await container.users.update(new_user())


async def test_update_refreshes_updated_at(container):
    user = await container.users.create(new_user())
    user.display_name = "Renamed"
    await container.users.update(user)

    stored = await container.users.get_by_id(user.id)
    assert stored.display_name == "Renamed"
    assert stored.updated_at >= stored.created_at


async def test_update_bumps_version(container):
    user = await container.users.create(new_user())
    assert user.version == 1

    await container.users.update(user)
    await container.users.update(user)

    assert user.version == 3
    assert (await container.users.get_by_id(user.id)).version == 3


async def test_update_from_stale_copy_is_rejected(container):
    user = await container.users.create(new_user())
    first = await container.users.get_by_id(user.id)
    second = await container.users.get_by_id(user.id)

    first.display_name = "First"
    await container.users.update(first)

    second.display_name = "Second"
    with pytest.raises(StaleEntityError) as exc:
        await container.users.update(second)
    assert exc.value.status_code == 409
    assert exc.value.code == "concurrent_modification"

    stored = await container.users.get_by_id(user.id)
    assert stored.display_name == "First"
    assert stored.version == 2


async def test_delete_is_idempotent(container):
    user = await container.users.create(new_user())
    await container.users.delete(user.id)
    await container.users.delete(user.id)
    await container.users.delete("never-existed")
    assert await container.users.get_by_id(user.id) is None


async def test_find_predicate_and_get_all(container):
    await container.users.create(new_user("a@example.com", is_active=False))
    await container.users.create(new_user("b@example.com"))

    assert len(await container.users.get_all()) == 2
    inactive = await container.users.find(lambda u: not u.is_active)
    assert [u.email for u in inactive] == ["a@example.com"]


async def test_find_by_unknown_column(container):
    with pytest.raises(DomainError) as exc:
        await container.users.find_by(shoe_size=42)
    assert exc.value.code == "invalid_request"


async def test_get_by_email_normalizes_input(container):
    user = await container.users.create(new_user(" User@Test.com "))
    assert user.email == "user@test.com"
    found = await container.users.get_by_email("  USER@test.COM")
    assert found.id == user.id


async def test_unique_email_maps_to_conflict(container):
    await container.users.create(new_user("dup@example.com"))
    with pytest.raises(ConflictError):
        await container.users.create(new_user("DUP@example.com"))


async def test_unique_slug_maps_to_conflict(container):
    await container.organizations.create(Organization.create("Acme", "acme"))
    with pytest.raises(ConflictError):
        await container.organizations.create(Organization.create("Acme 2", "ACME"))


async def test_embedded_documents_roundtrip(container):
    user = new_user()
    user.add_membership("org-1", OrgRole.OWNER)
    user.add_membership("org-2", OrgRole.VIEWER)
    user.theme_preferences.pwa = "light"
    await container.users.create(user)

    stored = await container.users.get_by_id(user.id)
    assert [(m.organization_id, m.role) for m in stored.memberships] == [
        ("org-1", OrgRole.OWNER),
        ("org-2", OrgRole.VIEWER),
    ]
    assert stored.memberships[0].joined_at.tzinfo is not None
    assert stored.theme_preferences.pwa is Theme.LIGHT
    assert stored.theme_preferences.web is Theme.DARK

    members = await container.users.list_members_of("org-2")
    assert [u.id for u in members] == [user.id]


async def test_organization_lookup_by_slug(container):
    org = await container.organizations.create(Organization.create("Acme", "ACME Corp"))
    found = await container.organizations.get_by_slug(" acme corp ")
    assert found.id == org.id
    assert found.tenant_id == org.id


async def test_unreachable_store_is_store_unavailable(tmp_path, passwords):
    settings = make_settings(tmp_path / "missing-dir" / "nested" / "db.sqlite", AUTO_CREATE_SCHEMA=False)
    broken = AppContainer.build(settings, passwords=passwords)
    try:
        with pytest.raises(StoreUnavailableError):
            await broken.users.get_by_id("x")
        with pytest.raises(StoreUnavailableError):
            await broken.users.create(new_user())
    finally:
        await broken.shutdown()


async def test_duplicate_stored_memberships_are_dropped_on_read(container):
    joined = datetime(2024, 1, 1, tzinfo=timezone.utc).isoformat()
    async with container.session_factory() as session:
        async with session.begin():
            session.add(
                UserModel(
                    id="dup-members",
                    email="twice@example.com",
                    display_name="Twice",
                    password_hash="hash",
                    role="Member",
                    is_active=True,
                    memberships=[
                        {"organization_id": "org-1", "role": "Admin", "joined_at": joined},
                        {"organization_id": "org-1", "role": "Viewer", "joined_at": joined},
                        {"organization_id": "org-2", "role": "Member", "joined_at": joined},
                    ],
                    theme_web="dark",
                    theme_pwa="dark",
                    created_at=datetime.now(timezone.utc),
                    updated_at=datetime.now(timezone.utc),
                )
            )

    stored = await container.users.get_by_id("dup-members")
    assert [(m.organization_id, m.role) for m in stored.memberships] == [
        ("org-1", OrgRole.ADMIN),
        ("org-2", OrgRole.MEMBER),
    ]
    assert [u.id for u in await container.users.get_all()] == ["dup-members"]
