"""Database package."""

from hirehive.db.base import Base, build_engine, get_db, get_session_factory, init_db
from hirehive.db.tables import Application, Job, User

__all__ = [
    "Base",
    "build_engine",
    "get_db",
    "get_session_factory",
    "init_db",
    "User",
    "Job",
    "Application",
]
