"""
SQL engine: identifier policy, value carrier, statement builders, dispatcher.

Exports: validate_identifier, build_* builders, dispatch.
"""

from dbcontrol.engines.sql.builder import (
    build_create_table,
    build_create_trigger,
    build_delete,
    build_insert,
    build_raw,
    build_select,
    build_update,
)
from dbcontrol.engines.sql.executor import dispatch
from dbcontrol.engines.sql.identifiers import validate_identifier

__all__ = [
    "validate_identifier",
    "build_create_table",
    "build_insert",
    "build_delete",
    "build_select",
    "build_update",
    "build_create_trigger",
    "build_raw",
    "dispatch",
]
