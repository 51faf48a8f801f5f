import pytest
from argon2 import PasswordHasher

from agilesync.identity.infrastructure.adapters.password_service import PasswordService


@pytest.fixture
def service():
    return PasswordService(PasswordHasher(time_cost=1, memory_cost=8, parallelism=1))


def test_hash_roundtrip(service):
    h = service.hash("P@ssw0rd!!")
    assert h != "P@ssw0rd!!"
    assert service.verify("P@ssw0rd!!", h)
    assert not service.verify("wrong", h)


def test_hashes_are_salted(service):
    assert service.hash("same-password") != service.hash("same-password")


def test_malformed_hash_never_raises(service):
    assert service.verify("anything", "not-a-hash") is False
    assert service.verify("anything", "") is False


def test_empty_password_rejected(service):
    with pytest.raises(ValueError):
        service.hash("")


def test_needs_rehash_when_parameters_change(service):
    h = service.hash("P@ssw0rd!!")
    assert service.needs_rehash(h) is False
    stronger = PasswordService(PasswordHasher(time_cost=2, memory_cost=16, parallelism=1))
    assert stronger.needs_rehash(h) is True
    assert stronger.verify("P@ssw0rd!!", h)
