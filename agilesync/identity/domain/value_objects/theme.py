"""Theme preference value objects."""

from enum import StrEnum
from typing import Any, Self

from agilesync.shared.exceptions import ValidationError


class Theme(StrEnum):
    DARK = "dark"
    LIGHT = "light"

    @classmethod
    def coerce(cls, value: Any) -> Self:
        """Map any input onto a theme. Unrecognized values fall back to dark, never raise."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            match value.strip().lower():
                case "light":
                    return cls.LIGHT
                case "dark":
                    return cls.DARK
        return cls.DARK


class Platform(StrEnum):
    WEB = "web"
    PWA = "pwa"

    @classmethod
    def parse(cls, value: str) -> Self:
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValidationError(
                "Invalid platform. Use 'web' or 'pwa'.",
                details={"platform": value},
            )
