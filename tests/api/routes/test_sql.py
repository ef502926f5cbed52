"""Tests for POST /sql (raw statements)."""

from fastapi.testclient import TestClient

from dbcontrol.core.config import settings
from dbcontrol.engines import DataAccessExecutor
from dbcontrol.models import TableDescriptor
from tests.utils.tables import create_people_table


def _base() -> str:
    return f"{settings.API_V1_STR}/sql"


def test_sql_query_list(client: TestClient) -> None:
    response = client.post(
        _base(),
        json={"sql_statement": "SELECT ? AS a, ? AS b", "values_tuple": [1, "x"], "query_mode": True},
    )
    assert response.status_code == 200
    assert response.json() == {"status": "success", "result": [[1, "x"]]}


def test_sql_query_dict(client: TestClient) -> None:
    response = client.post(
        _base(),
        json={
            "sql_statement": "SELECT 1 AS a, NULL AS b",
            "query_mode": True,
            "return_as_dict": True,
        },
    )
    assert response.json()["result"] == [{"a": 1, "b": None}]


def test_sql_blob_base64(client: TestClient) -> None:
    response = client.post(
        _base(), json={"sql_statement": "SELECT X'0001' AS b", "query_mode": True}
    )
    assert response.json()["result"] == [["AAE="]]


def test_sql_exec_rowcount(client: TestClient, executor: DataAccessExecutor) -> None:
    create_people_table(executor)
    response = client.post(
        _base(),
        json={
            "sql_statement": "INSERT INTO people (id, name) VALUES (?, ?)",
            "values_tuple": [1, "a"],
        },
    )
    assert response.status_code == 200
    assert response.json() == {"status": "success", "rowcount": 1}
    assert executor.query_records("people") == [[1, "a"]]


def test_sql_ddl(client: TestClient, executor: DataAccessExecutor) -> None:
    response = client.post(_base(), json={"sql_statement": "CREATE TABLE k (v TEXT)"})
    assert response.status_code == 200
    assert response.json()["status"] == "success"
    assert executor.query_records("k") == []


def test_sql_without_placeholders(client: TestClient) -> None:
    response = client.post(
        _base(),
        json={"sql_statement": "SELECT 7", "placeholders_mode": False, "query_mode": True},
    )
    assert response.json()["result"] == [[7]]


def test_sql_values_refused_without_placeholders(client: TestClient) -> None:
    response = client.post(
        _base(),
        json={"sql_statement": "SELECT ?", "placeholders_mode": False, "values_tuple": [1]},
    )
    assert response.status_code == 400
    assert "placeholders_mode" in response.json()["message"]


def test_sql_fk_mode(client: TestClient, executor: DataAccessExecutor) -> None:
    executor.create_tables(
        [
            TableDescriptor(name="parent", attributes={"id": "INTEGER PRIMARY KEY"}),
            TableDescriptor(
                name="child",
                attributes={"id": "INTEGER PRIMARY KEY", "parent_id": "INTEGER"},
                foreign_keys={"parent_id": "parent(id)"},
            ),
        ]
    )
    response = client.post(
        _base(),
        json={
            "sql_statement": "INSERT INTO child (id, parent_id) VALUES (?, ?)",
            "values_tuple": [1, 42],
            "fk_mode": True,
        },
    )
    assert response.status_code == 500
    assert response.json() == {"status": "error", "message": "FOREIGN KEY constraint failed"}


def test_sql_syntax_error(client: TestClient) -> None:
    response = client.post(_base(), json={"sql_statement": "SELEC 1"})
    assert response.status_code == 500
    assert "syntax error" in response.json()["message"]


def test_sql_unknown_database(client: TestClient) -> None:
    response = client.post(_base(), json={"sql_statement": "SELECT 1", "database": "nope"})
    assert response.status_code == 404


def test_sql_other_database(client: TestClient, executor: DataAccessExecutor) -> None:
    create_people_table(executor, database="other")
    response = client.post(
        _base(),
        json={"sql_statement": "SELECT COUNT(*) FROM people", "query_mode": True, "database": "other"},
    )
    assert response.json()["result"] == [[0]]


def test_sql_empty_statement(client: TestClient) -> None:
    response = client.post(_base(), json={"sql_statement": ""})
    assert response.status_code == 422


def test_sql_fk_mode_applies_to_that_request_only(
    client: TestClient, executor: DataAccessExecutor
) -> None:
    executor.create_tables(
        [
            TableDescriptor(name="parent", attributes={"id": "INTEGER PRIMARY KEY"}),
            TableDescriptor(
                name="child",
                attributes={"id": "INTEGER PRIMARY KEY", "parent_id": "INTEGER"},
                foreign_keys={"parent_id": "parent(id)"},
            ),
        ]
    )
    client.post(_base(), json={"sql_statement": "SELECT 1", "fk_mode": True})

    response = client.post(
        f"{settings.API_V1_STR}/record",
        json={"relation": "child", "records": {"id": 1, "parent_id": 7}},
    )
    assert response.status_code == 200


def test_sql_multiple_statements_rejected(client: TestClient) -> None:
    response = client.post(_base(), json={"sql_statement": "SELECT 1; SELECT 2"})
    assert response.status_code == 500
    assert response.json()["status"] == "error"
    assert "one statement" in response.json()["message"]
