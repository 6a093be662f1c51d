# ski_scheduler/application/dtos/user_dto.py

"""
DTOs for users and authentication.

Request fields are optional on purpose: a missing field is reported by
the service as a validation error with the regular ``{message, error}``
body instead of FastAPI's 422 schema error.
"""

from typing import Optional
from uuid import UUID

from pydantic import Field

from ski_scheduler.application.dtos.base_dto import CustomBaseModel


class RegisterRequest(CustomBaseModel):
    username: Optional[str] = Field(None, description="Unique, case-sensitive login name.")
    password: Optional[str] = Field(None, description="Plain text password, hashed before storage.")
    admin: Optional[bool] = Field(None, description="Whether the new user is an admin.")


class LoginRequest(CustomBaseModel):
    username: Optional[str] = Field(None, description="Login name.")
    password: Optional[str] = Field(None, description="Plain text password.")


class CredentialsOutput(CustomBaseModel):
    """Identity decoded from a session token."""
    user_id: str
    username: str
    admin: bool


class UserOutput(CustomBaseModel):
    """User data safe to expose (no password hash)."""
    id: UUID
    username: str
    admin: bool
