# ski_scheduler/adapters/outbound/persistence/models/user_model.py

"""
User model.

Stores the credentials of instructors and admins. Usernames are unique
at the storage level so concurrent registrations cannot both succeed.
"""

import uuid

from sqlalchemy import Column, Boolean, String, DateTime, Uuid, func

from ski_scheduler.adapters.outbound.persistence.models.base_model import Base


class User(Base):
    """
    Registered user of the scheduler.

    Attributes:
        id: Unique identifier (UUID), assigned at creation
        username: Login name, unique and case-sensitive
        password: bcrypt hash of the password
        admin: Whether the user may create lessons and manage users
        created_at: Creation timestamp
    """
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    username = Column(String(100), unique=True, nullable=False, index=True)
    password = Column(String, nullable=False)
    admin = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    def __repr__(self) -> str:
        return f"<User(username={self.username}, admin={self.admin})>"
