"""
Standard API Response Models
Consistent response structure across all endpoints
"""
from __future__ import annotations

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class SuccessResponse(BaseModel, Generic[T]):
    """
    Standard success response wrapper.

    Attributes:
        success: Always True for success responses
        data: Response payload
        message: Optional success message
    """

    model_config = ConfigDict(frozen=True)

    success: bool = Field(True, description="Indicates successful operation")
    data: T = Field(..., description="Response payload")
    message: Optional[str] = Field(None, description="Optional success message")


class MessageResponse(BaseModel):
    """Success body for operations that return no payload."""

    model_config = ConfigDict(frozen=True)

    success: bool = Field(True, description="Indicates successful operation")
    message: str = Field(..., description="Success message")
