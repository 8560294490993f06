"""PostgreSQL sources replicating a publication."""

from dataclasses import dataclass
from dataclasses import field

from mz_objects.builders.base import TableAlias
from mz_objects.builders.base import for_tables
from mz_objects.builders.source import SourceBuilder
from mz_objects.errors import BuilderError
from mz_objects.identifiers import quote_string
from mz_objects.models import IdentifierSchemaStruct


@dataclass
class SourcePostgresBuilder(SourceBuilder):
    """A source fed by logical replication from PostgreSQL.

    Attributes:
        postgres_connection (IdentifierSchemaStruct): The POSTGRES connection.
        publication (str): Publication to replicate.
        text_columns (list[str]): Upstream columns decoded as ``text``.
        tables (list[TableAlias]): Tables to replicate; every table of the
            publication when empty.
    """

    postgres_connection: IdentifierSchemaStruct | None = None
    publication: str = ''
    text_columns: list[str] = field(default_factory=list)
    tables: list[TableAlias] = field(default_factory=list)

    def create(self) -> str:
        self._validate_placement()
        if self.postgres_connection is None:
            raise BuilderError('`postgres_connection` is required')

        q = [f'CREATE SOURCE {self.qualified_name()}{self._in_cluster()}']
        q.append(f' FROM POSTGRES CONNECTION {self.postgres_connection.qualified_name()}')

        options = f'PUBLICATION {quote_string(self.publication)}'
        if self.text_columns:
            options += f', TEXT COLUMNS ({", ".join(self.text_columns)})'
        q.append(f' ({options})')

        q.append(for_tables(self.tables) if self.tables else ' FOR ALL TABLES')
        q.append(self._with_options())
        q.append(';')
        return ''.join(q)
