"""Database persistence infrastructure.

- Base model and column types
- Database connection and session management
- Lifecycle store (transaction-scoped repositories)
"""

from src.infrastructure.persistence.base import BaseModel
from src.infrastructure.persistence.database import Database
from src.infrastructure.persistence.lifecycle_store import SqlAlchemyLifecycleStore

__all__ = [
    "BaseModel",
    "Database",
    "SqlAlchemyLifecycleStore",
]
