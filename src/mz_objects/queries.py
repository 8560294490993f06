"""Predicate based SELECT queries against the catalog."""

from collections.abc import Iterator
from collections.abc import Mapping
from textwrap import dedent
from typing import Any

from mz_objects.adapters.base import DatabaseAdapter
from mz_objects.errors import AmbiguousResultError
from mz_objects.errors import NotFoundError
from mz_objects.identifiers import quote_string


class BaseQuery:
    """A SELECT statement without a WHERE clause.

    Predicates are appended by ``query_predicate``. Columns are sorted, so the
    same mapping always renders the same text whatever its insertion order.

    Example:
        >>> q = BaseQuery('SELECT id FROM mz_roles')
        >>> q.query_predicate({'mz_roles.name': 'analyst'})
        "SELECT id FROM mz_roles WHERE mz_roles.name = 'analyst'"
    """

    def __init__(self, base: str):
        self.base = dedent(base).strip()

    def query_predicate(self, predicates: Mapping[str, str | None]) -> str:
        """Render the query filtered on ``column = 'value'`` for each non-empty value."""
        clauses = [
            f'{column} = {quote_string(predicates[column])}' for column in sorted(predicates) if predicates[column]
        ]
        if not clauses:
            return self.base
        return f'{self.base} WHERE {" AND ".join(clauses)}'

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.base!r})'


def fetch_all(adapter: DatabaseAdapter, statement: str) -> Iterator[Mapping[str, Any]]:
    """Yield every row of ``statement``.

    The statement runs when iteration starts; iterate again to re-run it.
    """
    yield from adapter.query(statement)


def fetch_optional(adapter: DatabaseAdapter, statement: str) -> Mapping[str, Any] | None:
    """Return the single row of ``statement``, or None when there is none."""
    rows = list(adapter.query(statement))
    if len(rows) > 1:
        raise AmbiguousResultError(statement, len(rows))
    return rows[0] if rows else None


def fetch_one(adapter: DatabaseAdapter, statement: str) -> Mapping[str, Any]:
    """Return the single row of ``statement``.

    Raises:
        NotFoundError: if no row is returned.
        AmbiguousResultError: if more than one row is returned.
    """
    row = fetch_optional(adapter, statement)
    if row is None:
        raise NotFoundError(statement)
    return row
