# ski_scheduler/adapters/outbound/persistence/models/__init__.py

"""
Data models.

Exports every SQLAlchemy model so that importing this package
registers all tables on ``Base.metadata``.
"""

from ski_scheduler.adapters.outbound.persistence.models.base_model import Base
from ski_scheduler.adapters.outbound.persistence.models.user_model import User
from ski_scheduler.adapters.outbound.persistence.models.lesson_model import Lesson

__all__ = [
    "Base",
    "User",
    "Lesson",
]
