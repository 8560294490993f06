"""Views: named, non-persisted queries."""

from dataclasses import dataclass

from mz_objects.builders.base import ObjectBuilder
from mz_objects.models import ObjectType
from mz_objects.queries import BaseQuery

VIEW_QUERY = BaseQuery("""
    SELECT
        mz_views.id,
        mz_views.name,
        mz_schemas.name AS schema_name,
        mz_databases.name AS database_name,
        comments.comment AS comment,
        mz_roles.name AS owner_name,
        mz_views.privileges
    FROM mz_views
    JOIN mz_schemas
        ON mz_views.schema_id = mz_schemas.id
    JOIN mz_databases
        ON mz_schemas.database_id = mz_databases.id
    JOIN mz_roles
        ON mz_views.owner_id = mz_roles.id
    LEFT JOIN (
        SELECT id, comment
        FROM mz_internal.mz_comments
        WHERE object_type = 'view'
    ) comments
        ON mz_views.id = comments.id
""")


@dataclass
class ViewBuilder(ObjectBuilder):
    select_stmt: str = ''

    object_type = ObjectType.VIEW
    query = VIEW_QUERY

    def create(self) -> str:
        return f'CREATE VIEW {self.qualified_name()} AS {self.select_stmt};'


def list_views_query(schema_name: str = '', database_name: str = '') -> str:
    return VIEW_QUERY.query_predicate({'mz_schemas.name': schema_name, 'mz_databases.name': database_name})
