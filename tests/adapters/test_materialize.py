import logging

import pytest
import sqlalchemy as sa

from mz_objects.adapters.materialize import MaterializeAdapter
from mz_objects.errors import ExecutionError


@pytest.fixture
def sqlite_conn(test_sqlite_engine):
    with test_sqlite_engine.connect() as conn:
        yield conn


def test_execute_returns_rowcount(sqlite_conn) -> None:
    adapter = MaterializeAdapter(sqlite_conn)
    adapter.execute('CREATE TABLE views (id TEXT, name TEXT)')
    assert adapter.execute("INSERT INTO views VALUES ('u1', 'a'), ('u2', 'b')") == 2


def test_query_yields_mappings(sqlite_conn) -> None:
    adapter = MaterializeAdapter(sqlite_conn)
    adapter.execute('CREATE TABLE views (id TEXT, name TEXT)')
    adapter.execute("INSERT INTO views VALUES ('u1', 'a')")
    assert list(adapter.query('SELECT id, name FROM views')) == [{'id': 'u1', 'name': 'a'}]


def test_statement_text_is_not_parameterised(sqlite_conn) -> None:
    adapter = MaterializeAdapter(sqlite_conn)
    assert list(adapter.query("SELECT '100%' AS pct, ':name' AS colon")) == [{'pct': '100%', 'colon': ':name'}]


def test_execute_logs_statement(sqlite_conn, caplog) -> None:
    adapter = MaterializeAdapter(sqlite_conn)
    with caplog.at_level(logging.INFO, logger='mz_objects.adapters.materialize'):
        adapter.execute('CREATE TABLE t1 (id TEXT)')
    assert 'Executing CREATE TABLE t1 (id TEXT)' in caplog.text


def test_execute_wraps_driver_errors(sqlite_conn) -> None:
    adapter = MaterializeAdapter(sqlite_conn)
    with pytest.raises(ExecutionError, match='no such table: missing') as exc_info:
        adapter.execute('DROP TABLE missing')
    assert exc_info.value.statement == 'DROP TABLE missing'
    assert isinstance(exc_info.value.__cause__, sa.exc.DBAPIError)


def test_query_wraps_driver_errors_on_iteration(sqlite_conn) -> None:
    adapter = MaterializeAdapter(sqlite_conn)
    rows = adapter.query('SELECT * FROM missing')
    with pytest.raises(ExecutionError, match=r'\(statement: SELECT \* FROM missing\)'):
        list(rows)
