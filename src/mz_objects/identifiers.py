"""Quoting helpers for SQL identifiers and string literals.

Quoting goes through ``psycopg.sql`` rendered without a connection, so builder
output is identical with or without a live database.
"""

from decimal import Decimal

from psycopg import sql


def quote_identifier(value: str) -> str:
    """Wrap ``value`` in double quotes, doubling embedded double quotes."""
    return sql.Identifier(value).as_string(None)


def quote_string(value: str) -> str:
    """Render ``value`` as a single quoted string literal."""
    return sql.Literal(value).as_string(None)


def qualified_name(*parts: str) -> str:
    """Render a dot separated, quoted name from database, schema and object.

    Empty parts are skipped, so ``qualified_name('db', 'schema')`` renders a
    schema and ``qualified_name('', 'schema', 'view')`` a schema-relative item.

    Example:
        >>> qualified_name('materialize', 'public', 'orders')
        '"materialize"."public"."orders"'
    """
    segments = [part for part in parts if part]
    if not segments:
        raise ValueError('At least one non-empty name is required')
    return sql.Identifier(*segments).as_string(None)


def split_qualified_name(value: str) -> tuple[str, ...]:
    """Split a name rendered by ``qualified_name`` back into its parts."""
    parts = []
    current = []
    in_quotes = False
    i = 0
    while i < len(value):
        char = value[i]
        if char == '"':
            if in_quotes and value[i + 1 : i + 2] == '"':
                current.append('"')
                i += 2
                continue
            in_quotes = not in_quotes
        elif char == '.' and not in_quotes:
            parts.append(''.join(current))
            current = []
        else:
            current.append(char)
        i += 1
    if in_quotes:
        raise ValueError(f'Unterminated quoted identifier in {value!r}')
    parts.append(''.join(current))
    return tuple(parts)


def format_number(value: int | float) -> str:
    """Render a number in plain decimal notation (``0.00001``, never ``1e-05``)."""
    if isinstance(value, bool):
        raise TypeError(f'Expected a number, got {value!r}')
    if isinstance(value, int):
        return str(value)
    rendered = format(Decimal(repr(value)), 'f')
    return rendered if '.' in rendered else rendered + '.0'
