from unittest.mock import MagicMock

from dbcontrol.core.health import liveness_check, readiness_check
from dbcontrol.core.registry import DatabaseRegistry


def test_liveness_check() -> None:
    assert liveness_check() == (True, [])


def test_readiness_check_ok(registry: DatabaseRegistry) -> None:
    assert readiness_check(registry) == (True, [])


def test_readiness_check_reports_failing_databases() -> None:
    registry = MagicMock()
    registry.health.return_value = {"main": True, "logs": False, "audit": False}
    ok, failures = readiness_check(registry)
    assert ok is False
    assert failures == ["logs", "audit"]
