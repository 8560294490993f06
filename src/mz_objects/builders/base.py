"""Shared behaviour of the object statement builders.

Builders render statement text only; ``mz_objects.core`` executes it.
"""

from abc import ABC
from abc import abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from mz_objects.errors import MutualExclusionError
from mz_objects.identifiers import qualified_name
from mz_objects.identifiers import quote_identifier
from mz_objects.identifiers import quote_string
from mz_objects.models import DEFAULT_DATABASE
from mz_objects.models import DEFAULT_SCHEMA
from mz_objects.models import MaterializeObject
from mz_objects.models import ObjectType
from mz_objects.queries import BaseQuery


@dataclass
class ObjectBuilder(ABC):
    """A schema-qualified catalog item.

    Attributes:
        name (str): The item name.
        schema_name (str): The schema holding the item. Defaults to ``public``.
        database_name (str): The database holding the schema. Defaults to
            ``materialize``.
    """

    name: str
    schema_name: str = DEFAULT_SCHEMA
    database_name: str = DEFAULT_DATABASE

    object_type: ClassVar[ObjectType]
    query: ClassVar[BaseQuery]

    def qualified_name(self) -> str:
        return qualified_name(self.database_name, self.schema_name, self.name)

    def identity(self) -> MaterializeObject:
        return MaterializeObject(self.object_type, self.name, self.schema_name, self.database_name)

    @abstractmethod
    def create(self) -> str:
        """Render the CREATE statement."""

    def rename(self, new_name: str) -> str:
        """Render the rename statement and point the builder at ``new_name``."""
        statement = (
            f'ALTER {self.object_type.sql} {self.qualified_name()} '
            f'RENAME TO {qualified_name(self.database_name, self.schema_name, new_name)};'
        )
        self.name = new_name
        return statement

    def drop(self) -> str:
        return f'DROP {self.object_type.sql} {self.qualified_name()};'

    def read_id(self) -> str:
        """Render the catalog lookup of this item by its qualified name."""
        return self.query.query_predicate(
            {
                f'{self.object_type.catalog_table}.name': self.name,
                'mz_schemas.name': self.schema_name,
                'mz_databases.name': self.database_name,
            },
        )

    @classmethod
    def read_params(cls, object_id: str) -> str:
        """Render the catalog lookup of this kind of item by durable id."""
        return cls.query.query_predicate({f'{cls.object_type.catalog_table}.id': object_id})


@dataclass
class SizedObjectBuilder(ObjectBuilder):
    """An item that runs either in a named cluster or with its own size."""

    cluster_name: str = ''
    size: str = ''

    def update_size(self, new_size: str) -> str:
        if self.cluster_name:
            raise MutualExclusionError('cluster_name', 'size')
        statement = f'ALTER {self.object_type.sql} {self.qualified_name()} SET (SIZE = {quote_string(new_size)});'
        self.size = new_size
        return statement

    def _validate_placement(self):
        if self.cluster_name and self.size:
            raise MutualExclusionError('cluster_name', 'size')

    def _in_cluster(self) -> str:
        return f' IN CLUSTER {quote_identifier(self.cluster_name)}' if self.cluster_name else ''

    def _with_options(self, *extra: str) -> str:
        options = ([f'SIZE = {quote_string(self.size)}'] if self.size else []) + list(extra)
        return f' WITH ({", ".join(options)})' if options else ''


@dataclass(frozen=True)
class TableAlias:
    """An upstream table (or load generator output) and the name to give it."""

    name: str
    alias: str = ''

    def render(self) -> str:
        return f'{self.name} AS {self.alias or self.name}'


def for_tables(tables: list[TableAlias]) -> str:
    return f' FOR TABLES ({", ".join(table.render() for table in tables)})'
