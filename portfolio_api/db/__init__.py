"""Database package.

SQLAlchemy models, the storage handle, row mappers and the startup migrator.
"""

from .base import Base
from .session import DBRuntime, create_engine_and_sessionmaker

__all__ = ["Base", "DBRuntime", "create_engine_and_sessionmaker"]
