"""
Email Value Object
"""
from __future__ import annotations

import re
from typing import Final

from agilesync.shared.exceptions import ValidationError


EMAIL_REGEX: Final[str] = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'


def normalize_email(value: str) -> str:
    """Lower-case and trim. Applied on every write and on every lookup."""
    return value.strip().lower()


class Email:
    """
    Email address value object with validation.

    Ensures email format is valid and normalizes to lowercase.
    """

    __slots__ = ("_value",)

    def __init__(self, value: str) -> None:
        normalized = normalize_email(value)

        if not re.match(EMAIL_REGEX, normalized):
            raise ValidationError(f"Invalid email format: {value}")

        self._value = normalized

    @property
    def value(self) -> str:
        return self._value

    @classmethod
    def is_valid(cls, value: str) -> bool:
        return re.match(EMAIL_REGEX, normalize_email(value)) is not None

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Email) and other._value == self._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __str__(self) -> str:
        return self._value
