"""
Shared Domain Layer
Base building blocks for all bounded contexts
"""
from agilesync.shared.domain.base_entity import BaseEntity, as_utc, new_id, utcnow

__all__ = [
    "BaseEntity",
    "as_utc",
    "new_id",
    "utcnow",
]
