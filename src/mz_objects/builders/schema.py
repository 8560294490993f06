"""Schemas: the second level of the namespace hierarchy."""

from dataclasses import dataclass

from mz_objects.builders.base import ObjectBuilder
from mz_objects.identifiers import qualified_name
from mz_objects.identifiers import quote_identifier
from mz_objects.models import DEFAULT_DATABASE
from mz_objects.models import MaterializeObject
from mz_objects.models import ObjectType
from mz_objects.queries import BaseQuery

SCHEMA_QUERY = BaseQuery("""
    SELECT
        mz_schemas.id,
        mz_schemas.name,
        mz_databases.name AS database_name,
        comments.comment AS comment,
        mz_roles.name AS owner_name,
        mz_schemas.privileges
    FROM mz_schemas
    JOIN mz_databases
        ON mz_schemas.database_id = mz_databases.id
    JOIN mz_roles
        ON mz_schemas.owner_id = mz_roles.id
    LEFT JOIN (
        SELECT id, comment
        FROM mz_internal.mz_comments
        WHERE object_type = 'schema'
    ) comments
        ON mz_schemas.id = comments.id
""")


@dataclass
class SchemaBuilder(ObjectBuilder):
    """A schema inside ``database_name``; ``schema_name`` is unused."""

    object_type = ObjectType.SCHEMA
    query = SCHEMA_QUERY

    def __init__(self, name: str, database_name: str = DEFAULT_DATABASE):
        super().__init__(name, '', database_name)

    def qualified_name(self) -> str:
        return qualified_name(self.database_name, self.name)

    def identity(self) -> MaterializeObject:
        return MaterializeObject(self.object_type, self.name, database_name=self.database_name)

    def create(self) -> str:
        return f'CREATE SCHEMA {self.qualified_name()};'

    def rename(self, new_name: str) -> str:
        statement = f'ALTER SCHEMA {self.qualified_name()} RENAME TO {quote_identifier(new_name)};'
        self.name = new_name
        return statement

    def read_id(self) -> str:
        return self.query.query_predicate({'mz_schemas.name': self.name, 'mz_databases.name': self.database_name})


def list_schemas_query(database_name: str = '') -> str:
    return SCHEMA_QUERY.query_predicate({'mz_databases.name': database_name})
