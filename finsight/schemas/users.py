# finsight/schemas/users.py
"""
Pydantic schemas for users.

Users exist only to own portfolios and alerts; there is no login.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class UserCreate(BaseModel):
    email: EmailStr = Field(..., description="Unique email address")
    name: str | None = Field(default=None, max_length=100, description="Display name")

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator('name')
    @classmethod
    def normalize_name(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class UserResponse(BaseModel):
    id: int
    email: str
    name: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
