"""Pydantic schemas for user API."""
from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Payload for registering a user."""

    email: str = Field(..., min_length=3)
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    phone_numbers: list[str] = []


class UserResponse(BaseModel):
    """User profile."""

    email: str
    first_name: str
    last_name: str
    phone_numbers: list[str] = []
