"""Database package."""

from .db import configure_engine, get_session, init_db
from .models import Character, XPLog, Unlock

__all__ = ["configure_engine", "get_session", "init_db", "Character", "XPLog", "Unlock"]
