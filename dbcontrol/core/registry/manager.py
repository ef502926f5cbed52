"""
Database registry: logical name -> engine.

Built once at startup from ``settings.databases`` and read-only afterwards, so
lookups need no locking. Defaulting an empty name to ``settings.DEFAULT_DATABASE``
is the caller's job; ``resolve`` is a pure lookup.
"""

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType

from sqlalchemy import Engine

from dbcontrol.core.errors import UnknownDatabase

from .connect import open_database, ping
from .health import health_check

_log = logging.getLogger(__name__)


class DatabaseRegistry:
    """Immutable mapping of logical database names to open engines."""

    def __init__(self, handles: Mapping[str, Engine]) -> None:
        self._handles: Mapping[str, Engine] = MappingProxyType(dict(handles))

    @classmethod
    def open_all(
        cls,
        databases: Mapping[str, str],
        *,
        busy_timeout: float | None = None,
    ) -> "DatabaseRegistry":
        """
        Open and verify one engine per (name, path).

        Any failure disposes what was already opened and re-raises: the
        process must not start with a partial registry.
        """
        opened: dict[str, Engine] = {}
        try:
            for name, path in databases.items():
                engine = open_database(path, busy_timeout=busy_timeout)
                opened[name] = engine
                ping(engine)
                _log.info("Opened database %r at %s", name, path)
        except Exception as e:
            _log.critical("Failed to open database %r: %s", name, e)
            for engine in opened.values():
                engine.dispose()
            raise RuntimeError(f"Failed to open database {name!r} at {path!r}: {e}") from e
        return cls(opened)

    def resolve(self, name: str) -> Engine:
        """Return the engine for *name* or raise UnknownDatabase."""
        try:
            return self._handles[name]
        except KeyError:
            raise UnknownDatabase(name) from None

    def names(self) -> list[str]:
        return list(self._handles)

    def health(self) -> dict[str, bool]:
        """SELECT 1 against every database."""
        return {name: health_check(engine) for name, engine in self._handles.items()}

    def dispose(self) -> None:
        """Close every pooled connection. Called once at shutdown."""
        for name, engine in self._handles.items():
            engine.dispose()
            _log.info("Closed database %r", name)

    def __contains__(self, name: object) -> bool:
        return name in self._handles

    def __iter__(self) -> Iterator[str]:
        return iter(self._handles)

    def __len__(self) -> int:
        return len(self._handles)
