"""User-related Pydantic schemas."""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class RegisterRequest(BaseModel):
    """Schema for user registration."""

    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    email: str = Field(..., max_length=320, description="Unique login email")
    password: str = Field(..., min_length=1, description="Plaintext password")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Validate the email has a plausible local@domain shape."""
        v = v.strip()
        if not _EMAIL_PATTERN.match(v):
            raise ValueError("Email must look like name@example.com")
        return v


class PublicUser(BaseModel):
    """Registration response; never carries the credential."""

    id: int
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class LoginRequest(BaseModel):
    """Schema for login submissions."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class Token(BaseModel):
    """Signed bearer token returned after successful login."""

    token: str = Field(..., description="JWT access token")
    token_type: str = Field("bearer", description="Token type")
    expires_at: datetime = Field(..., description="Absolute expiry instant")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
