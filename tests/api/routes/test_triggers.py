"""Tests for POST /trigger."""

from fastapi.testclient import TestClient

from dbcontrol.core.config import settings
from dbcontrol.engines import DataAccessExecutor
from dbcontrol.models import TableDescriptor


def _base() -> str:
    return f"{settings.API_V1_STR}/trigger"


def _tables(executor: DataAccessExecutor) -> None:
    executor.create_tables(
        [
            TableDescriptor(name="items", attributes={"id": "INTEGER", "qty": "INTEGER"}),
            TableDescriptor(name="audit", attributes={"item_id": "INTEGER"}),
        ]
    )


def _body(**kw) -> dict:
    body = {
        "trigger_name": "big_order",
        "action": "AFTER INSERT",
        "table_name": "items",
        "triggering_event": "NEW.qty > 10",
        "sql_operation": "INSERT INTO audit (item_id) VALUES (NEW.id);",
    }
    body.update(kw)
    return body


def test_create_trigger_fires(client: TestClient, executor: DataAccessExecutor) -> None:
    _tables(executor)
    response = client.post(_base(), json=_body())
    assert response.status_code == 200
    assert response.json()["status"] == "success"

    executor.insert_record("items", {"id": 1, "qty": 3})
    executor.insert_record("items", {"id": 2, "qty": 30})
    assert executor.query_records("audit") == [[2]]


def test_create_trigger_without_predicate(
    client: TestClient, executor: DataAccessExecutor
) -> None:
    _tables(executor)
    response = client.post(_base(), json=_body(triggering_event=""))
    assert response.status_code == 200

    executor.insert_record("items", {"id": 1, "qty": 3})
    assert executor.query_records("audit") == [[1]]


def test_create_trigger_is_idempotent(client: TestClient, executor: DataAccessExecutor) -> None:
    _tables(executor)
    assert client.post(_base(), json=_body()).status_code == 200
    assert client.post(_base(), json=_body()).status_code == 200


def test_create_trigger_bad_name(client: TestClient, executor: DataAccessExecutor) -> None:
    _tables(executor)
    response = client.post(_base(), json=_body(trigger_name="x; DROP TABLE items"))
    assert response.status_code == 400
    assert response.json()["status"] == "error"


def test_create_trigger_bad_action(client: TestClient, executor: DataAccessExecutor) -> None:
    _tables(executor)
    response = client.post(_base(), json=_body(action="WHENEVER INSERT"))
    assert response.status_code == 400


def test_create_trigger_missing_table(client: TestClient) -> None:
    response = client.post(_base(), json=_body(table_name="ghost"))
    assert response.status_code == 500
    assert "no such table" in response.json()["message"]


def test_create_trigger_missing_field(client: TestClient) -> None:
    body = _body()
    del body["sql_operation"]
    response = client.post(_base(), json=body)
    assert response.status_code == 422
