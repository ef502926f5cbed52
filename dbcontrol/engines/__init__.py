"""
Engines: SQL builders + dispatcher, and the DataAccessExecutor operation layer.
"""

from dbcontrol.engines.executor import DataAccessExecutor
from dbcontrol.engines.sql import dispatch, validate_identifier

__all__ = [
    "DataAccessExecutor",
    "dispatch",
    "validate_identifier",
]
