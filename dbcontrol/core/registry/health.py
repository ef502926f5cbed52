"""
Connection health check for registered databases.
"""

from sqlalchemy import Engine

from .connect import ping


def health_check(engine: Engine) -> bool:
    """
    Run SELECT 1 and return True if no exception.
    """
    try:
        ping(engine)
        return True
    except Exception:
        return False
