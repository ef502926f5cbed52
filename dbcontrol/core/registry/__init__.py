"""
Registry of named SQLite databases.

One SQLAlchemy engine per logical name, opened at startup and disposed at shutdown.
"""

from .connect import execute, open_database, ping, set_pragma
from .health import health_check
from .manager import DatabaseRegistry

__all__ = [
    "open_database",
    "execute",
    "ping",
    "set_pragma",
    "health_check",
    "DatabaseRegistry",
]
