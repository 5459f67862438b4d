# Database Models

from .database import Base, engine, async_session_maker, get_session, init_db
from .visitor import Visitor, UNKNOWN_PLACE

__all__ = [
    "Base",
    "engine",
    "async_session_maker",
    "get_session",
    "init_db",
    "Visitor",
    "UNKNOWN_PLACE",
]
