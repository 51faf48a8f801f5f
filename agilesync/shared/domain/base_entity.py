"""
Base Entity Contract for Domain Layer
Provides opaque string identity, tenant tagging, equality, and audit fields
"""
from __future__ import annotations

from abc import ABC
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops tzinfo) and normalize aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def new_id() -> str:
    return uuid4().hex


class BaseEntity(ABC):
    """
    Abstract base class for all persisted entities.

    Entities are defined by their identity (id), not their attributes.
    Two entities are equal if they have the same id, regardless of other attributes.

    Attributes:
        id: Opaque identifier, generated at construction and never reassigned
        tenant_id: Owning tenant (organization) id; may be set once
        created_at: Timestamp of creation (UTC)
        updated_at: Timestamp of last write (UTC), never earlier than created_at
        version: Stored revision this instance was read at; bumped by each update
    """

    def __init__(
        self,
        id: Optional[str] = None,
        tenant_id: Optional[str] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        version: int = 1,
    ) -> None:
        now = utcnow()
        self._id: str = id or new_id()
        self._tenant_id: Optional[str] = tenant_id
        self._created_at: datetime = as_utc(created_at) if created_at else now
        self._updated_at: datetime = as_utc(updated_at) if updated_at else self._created_at
        if self._updated_at < self._created_at:
            self._updated_at = self._created_at
        self._version: int = version

    @property
    def id(self) -> str:
        return self._id

    @property
    def tenant_id(self) -> Optional[str]:
        return self._tenant_id

    @tenant_id.setter
    def tenant_id(self, value: Optional[str]) -> None:
        if self._tenant_id is not None and value != self._tenant_id:
            raise ValueError(f"tenant_id of {self!r} is already set")
        self._tenant_id = value

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def mark_created(self, now: Optional[datetime] = None) -> None:
        """Stamp both timestamps for a first write, overwriting whatever was there."""
        stamp = as_utc(now) if now else utcnow()
        self._created_at = stamp
        self._updated_at = stamp

    @property
    def version(self) -> int:
        return self._version

    def mark_updated(self, now: Optional[datetime] = None) -> None:
        """Refresh updated_at, clamped so it never precedes created_at."""
        stamp = as_utc(now) if now else utcnow()
        self._updated_at = max(stamp, self._created_at)

    def bump_version(self) -> None:
        self._version += 1

    def __eq__(self, other: object) -> bool:
        """Entities are equal if they have the same id and type."""
        if not isinstance(other, self.__class__):
            return False
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self._id})"
