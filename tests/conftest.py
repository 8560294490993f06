import pytest
import sqlalchemy as sa

from mz_objects.adapters.base import DatabaseAdapter
from mz_objects.errors import ExecutionError


class RecordingAdapter(DatabaseAdapter):
    """Adapter double: records statements and serves canned rows.

    Rows are queued per exact statement text; a query with nothing queued
    returns no rows. Statements containing any of ``failing`` raise
    ``ExecutionError``.
    """

    def __init__(self):
        super().__init__(conn=None)
        self.statements: list[str] = []
        self.rows: dict[str, list[list[dict]]] = {}
        self.default_rows: list[tuple[str, list[dict]]] = []
        self.failing: list[str] = []

    def add_rows(self, statement: str, rows: list[dict]):
        self.rows.setdefault(statement, []).append(rows)

    def add_rows_containing(self, fragment: str, rows: list[dict]):
        """Serve ``rows`` for every query containing ``fragment``."""
        self.default_rows.append((fragment, rows))

    def fail_on(self, fragment: str):
        self.failing.append(fragment)

    def _check(self, statement: str):
        self.statements.append(statement)
        for fragment in self.failing:
            if fragment in statement:
                raise ExecutionError(statement, 'permission denied')

    def execute(self, statement: str) -> int:
        self._check(statement)
        return 0

    def query(self, statement: str):
        self._check(statement)
        queued = self.rows.get(statement)
        if queued:
            yield from queued.pop(0)
            return
        for fragment, rows in self.default_rows:
            if fragment in statement:
                yield from rows
                return


@pytest.fixture
def adapter():
    return RecordingAdapter()


@pytest.fixture
def test_sqlite_engine():
    engine = sa.create_engine('sqlite:///:memory:')
    yield engine
    engine.dispose()
