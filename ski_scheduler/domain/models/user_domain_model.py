# ski_scheduler/domain/models/user_domain_model.py

from uuid import UUID
from dataclasses import dataclass


@dataclass
class User:
    """Domain model for a registered user."""
    id: UUID
    username: str
    password: str  # bcrypt hash, never the plain text
    admin: bool


@dataclass(frozen=True)
class Credentials:
    """Identity carried by a session token."""
    user_id: str
    username: str
    admin: bool
