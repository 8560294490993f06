"""Materialize adapter for mz_objects.

Runs statement text over a SQLAlchemy connection (``postgresql+psycopg``).
"""

import logging
from collections.abc import Iterator
from collections.abc import Mapping
from typing import Any

import sqlalchemy as sa

from mz_objects.adapters.base import DatabaseAdapter
from mz_objects.errors import ExecutionError

logger = logging.getLogger(__name__)


class MaterializeAdapter(DatabaseAdapter):
    """Materialize-specific implementation of DatabaseAdapter."""

    def _execute_sql(self, statement: str) -> sa.CursorResult:
        """Execute statement text as-is.

        ``exec_driver_sql`` with ``no_parameters`` hands the text straight to
        the cursor: colons and percent signs inside literals are never taken
        for bind parameters.
        """
        logger.info('Executing %s', statement)
        try:
            return self.conn.exec_driver_sql(statement, execution_options={'no_parameters': True})
        except sa.exc.DBAPIError as err:
            reason = str(err.orig) if err.orig is not None else str(err)
            raise ExecutionError(statement, reason.strip()) from err

    def execute(self, statement: str) -> int:
        """Execute a statement and return the affected row count."""
        return self._execute_sql(statement).rowcount

    def query(self, statement: str) -> Iterator[Mapping[str, Any]]:
        """Run a query and yield each row as a mapping."""
        result = self._execute_sql(statement)
        for row in result.mappings():
            yield dict(row)
