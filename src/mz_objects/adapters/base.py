"""Abstract base class for database adapters.

Defines the execution capability the rest of the package relies on.
"""

from abc import ABC
from abc import abstractmethod
from collections.abc import Iterator
from collections.abc import Mapping
from typing import Any


class DatabaseAdapter(ABC):
    """Abstract base class for running statement text against a database.

    Each database adapter must implement:
    - Executing a statement that returns no rows
    - Running a query and yielding its rows by column name

    Adapters do not retry, cache or batch: every call is one blocking round
    trip, and a failure surfaces as ``ExecutionError``.
    """

    def __init__(self, conn):
        """Initialize the adapter with a database connection.

        Args:
            conn: Database connection object (e.g., SQLAlchemy connection)
        """
        self.conn = conn

    @abstractmethod
    def execute(self, statement: str) -> int:
        """Execute a statement.

        Args:
            statement: Complete statement text, e.g. ``'DROP VIEW "db"."s"."v";'``

        Returns:
            Number of rows affected, as reported by the driver

        Raises:
            ExecutionError: if the database rejects or fails the statement
        """

    @abstractmethod
    def query(self, statement: str) -> Iterator[Mapping[str, Any]]:
        """Run a query.

        Args:
            statement: Complete SELECT (or SHOW) statement text

        Returns:
            Iterator of rows, each a mapping from column name to value

        Raises:
            ExecutionError: if the database rejects or fails the statement
        """
