"""
Identifier gate for structured statements.

Table, column and trigger names cannot be bound parameters, so they are
interpolated as text. Every name that reaches the builder must first pass
``validate_identifier``: an unquoted SQLite identifier (letter or underscore,
then letters, digits, underscores).

Usage::

    validate_identifier("users")            # -> "users"
    validate_identifier("a; DROP TABLE x")  # -> InvalidIdentifier
    parse_reference("users(id)")            # -> ("users", "id")
"""

import re
from collections.abc import Iterable

from dbcontrol.core.errors import InvalidIdentifier, InvalidInput

_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

# FOREIGN KEY target: table(column), whitespace tolerated around the parts
_REFERENCE_RE = re.compile(r"\s*(?P<table>[^()\s]+)\s*\(\s*(?P<column>[^()\s]+)\s*\)\s*")

# Declared column types are engine-native syntax ("INTEGER PRIMARY KEY", "VARCHAR(20) NOT NULL").
# They are interpolated too, so statement separators, comments and placeholders are refused.
_TYPE_FORBIDDEN = (";", "--", "/*", "*/", "?")


def validate_identifier(name: object) -> str:
    """Return *name* unchanged if it is a valid identifier; raise InvalidIdentifier otherwise."""
    if not isinstance(name, str) or not _IDENTIFIER_RE.fullmatch(name):
        raise InvalidIdentifier(name)
    return name


def validate_identifiers(names: Iterable[object]) -> list[str]:
    """Validate every name, preserving order."""
    return [validate_identifier(n) for n in names]


def parse_reference(reference: object) -> tuple[str, str]:
    """Split a ``table(column)`` foreign-key reference and validate both parts."""
    if not isinstance(reference, str):
        raise InvalidInput(f"Foreign key reference must be a string: {reference!r}")
    m = _REFERENCE_RE.fullmatch(reference)
    if m is None:
        raise InvalidInput(
            f"Foreign key reference must look like 'table(column)': {reference!r}"
        )
    return validate_identifier(m.group("table")), validate_identifier(m.group("column"))


def validate_column_type(column: str, declared: object) -> str:
    """Check a declared column type is a non-empty single-statement fragment."""
    if not isinstance(declared, str) or not declared.strip():
        raise InvalidInput(f"Column {column!r} needs a non-empty type string")
    if any(tok in declared for tok in _TYPE_FORBIDDEN):
        raise InvalidInput(f"Column {column!r} has an unsafe type declaration: {declared!r}")
    return declared.strip()
