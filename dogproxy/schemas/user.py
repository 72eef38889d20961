"""User Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - UserPayload: name 1-100, email 3-255 (local@domain), address 1-255 chars
    - All string fields stripped; email lower-cased so uniqueness is case-insensitive
    - UserResponse mirrors the persisted record, including the generated id

Design Decisions:
    - Regex over EmailStr: avoids the email-validator extra for a basic shape check
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserPayload(BaseModel):
    """Body of POST /api/users and PUT /api/users/{id}."""
    name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=255, pattern=EMAIL_PATTERN)
    address: str = Field(min_length=1, max_length=255)

    @field_validator("name", "address", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class UserResponse(BaseModel):
    """Public-facing user data."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    address: str
