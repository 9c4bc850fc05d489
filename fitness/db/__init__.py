"""Database package: engine, session, base."""

from fitness.db.session import async_session_maker, get_db, session_scope

__all__ = ["async_session_maker", "get_db", "session_scope"]
