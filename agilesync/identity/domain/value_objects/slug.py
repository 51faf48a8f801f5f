"""Slug value object."""

import re
from dataclasses import dataclass

from agilesync.shared.exceptions import ValidationError

SLUG_PATTERN = re.compile(r'^[a-z0-9]+(?:-[a-z0-9]+)*$')
SLUG_MAX_LENGTH = 100


def normalize_slug(value: str) -> str:
    """Lower-case, trim, and collapse internal whitespace runs to a single hyphen."""
    return re.sub(r"\s+", "-", value.strip().lower())


@dataclass(frozen=True, slots=True)
class Slug:
    """URL-safe organization slug, always held in normalized form."""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValidationError("Slug cannot be empty")

        if len(self.value) > SLUG_MAX_LENGTH:
            raise ValidationError(f"Slug must not exceed {SLUG_MAX_LENGTH} characters")

        if not SLUG_PATTERN.match(self.value):
            raise ValidationError(
                f"Slug must be lowercase alphanumeric with hyphens only: {self.value}"
            )

    @classmethod
    def parse(cls, raw: str) -> "Slug":
        """Normalize user input, then validate it."""
        return cls(normalize_slug(raw))

    def __str__(self) -> str:
        return self.value
