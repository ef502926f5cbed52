"""
Health-check helpers for liveness and readiness probes.

Liveness : is the process alive and not deadlocked?  (cheap, no I/O)
Readiness: can it serve traffic?  (SELECT 1 on every registered database)
"""

import logging

from dbcontrol.core.registry import DatabaseRegistry

logger = logging.getLogger(__name__)


def liveness_check() -> tuple[bool, list[str]]:
    """
    Lightweight liveness probe: just confirms the Python process is responsive.
    No I/O, no DB calls.  Return format matches readiness_check for consistency.
    """
    return (True, [])


def readiness_check(registry: DatabaseRegistry) -> tuple[bool, list[str]]:
    """
    SELECT 1 on each database.
    Returns (ok, names of databases that failed). ok is False if any failed.
    """
    failures = [name for name, ok in registry.health().items() if not ok]
    if failures:
        logger.warning("Readiness check failed for databases: %s", ", ".join(failures))
    return (len(failures) == 0, failures)
