"""Exceptions raised by mz_objects."""


class MaterializeError(Exception):
    """Base class for every error raised by this package."""


class NotFoundError(MaterializeError, LookupError):
    """A query expected to return a single row returned none."""

    def __init__(self, statement: str):
        super().__init__(f'No rows returned for: {statement}')
        self.statement = statement


class AmbiguousResultError(MaterializeError, LookupError):
    """A query expected to return a single row returned several."""

    def __init__(self, statement: str, count: int):
        super().__init__(f'Expected 1 row, got {count} for: {statement}')
        self.statement = statement
        self.count = count


class MalformedKeyError(MaterializeError, ValueError):
    """A persisted grant identifier does not have the expected number of fields."""

    def __init__(self, key: str, expected: int, got: int):
        super().__init__(f'{key}: cannot be parsed correctly, expected {expected} fields, got {got}')
        self.key = key


class ExecutionError(MaterializeError):
    """The database rejected or failed a statement.

    The driver exception is chained as ``__cause__``.
    """

    def __init__(self, statement: str, reason: str):
        super().__init__(f'{reason} (statement: {statement})')
        self.statement = statement
        self.reason = reason


class BuilderError(MaterializeError, ValueError):
    """A statement builder cannot render a valid statement."""


class MutualExclusionError(BuilderError):
    """Two optional clauses that cannot be combined were both set."""

    def __init__(self, first: str, second: str):
        super().__init__(f'`{first}` and `{second}` cannot be set at the same time')
        self.first = first
        self.second = second


class InvalidPrivilegeError(BuilderError):
    """A privilege does not apply to the object type it is granted on."""
