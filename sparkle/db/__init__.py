"""Database package."""

from sparkle.db.base import Base, close_db, get_engine, init_db
from sparkle.db.session import get_async_session, get_session_factory

__all__ = ["Base", "get_engine", "init_db", "close_db", "get_async_session", "get_session_factory"]
