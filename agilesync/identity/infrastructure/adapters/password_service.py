"""
Password Service - Hashing and Verification
External adapter for password operations
"""
from __future__ import annotations

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from agilesync.shared.logging import get_logger

logger = get_logger(__name__)


class PasswordService:
    """
    Password hashing service using Argon2id.

    Hashes are salted and self-describing; verification is constant-time
    inside argon2 and never a string comparison.
    """

    def __init__(self, hasher: PasswordHasher | None = None) -> None:
        self._hasher = hasher or PasswordHasher(
            time_cost=2,  # iterations
            memory_cost=65536,  # 64 MB
            parallelism=4,  # threads
            hash_len=32,  # output length
            salt_len=16,  # salt length
        )

    def hash(self, plain_password: str) -> str:
        """
        Hash a plain text password.

        Raises:
            ValueError: If password is empty
        """
        if not plain_password:
            raise ValueError("Password must not be empty")
        return self._hasher.hash(plain_password)

    def verify(self, plain_password: str, password_hash: str) -> bool:
        """True if the password matches. Mismatch and malformed hashes both yield False."""
        if not plain_password or not password_hash:
            return False
        try:
            return self._hasher.verify(password_hash, plain_password)
        except VerifyMismatchError:
            return False
        except (InvalidHashError, VerificationError):
            logger.warning("Password hash could not be verified")
            return False

    def needs_rehash(self, password_hash: str) -> bool:
        """Check if hash needs updating due to new security parameters."""
        try:
            return self._hasher.check_needs_rehash(password_hash)
        except InvalidHashError:
            return True
