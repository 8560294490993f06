"""Materialized views: query results maintained durably in a cluster."""

from dataclasses import dataclass
from dataclasses import field

from mz_objects.builders.base import ObjectBuilder
from mz_objects.identifiers import quote_identifier
from mz_objects.models import ObjectType
from mz_objects.queries import BaseQuery

MATERIALIZED_VIEW_QUERY = BaseQuery("""
    SELECT
        mz_materialized_views.id,
        mz_materialized_views.name,
        mz_schemas.name AS schema_name,
        mz_databases.name AS database_name,
        mz_clusters.name AS cluster_name,
        comments.comment AS comment,
        mz_roles.name AS owner_name,
        mz_materialized_views.privileges
    FROM mz_materialized_views
    JOIN mz_schemas
        ON mz_materialized_views.schema_id = mz_schemas.id
    JOIN mz_databases
        ON mz_schemas.database_id = mz_databases.id
    LEFT JOIN mz_clusters
        ON mz_materialized_views.cluster_id = mz_clusters.id
    JOIN mz_roles
        ON mz_materialized_views.owner_id = mz_roles.id
    LEFT JOIN (
        SELECT id, comment
        FROM mz_internal.mz_comments
        WHERE object_type = 'materialized-view'
    ) comments
        ON mz_materialized_views.id = comments.id
""")


@dataclass
class MaterializedViewBuilder(ObjectBuilder):
    """A materialized view.

    Attributes:
        cluster_name (str): Cluster maintaining the view; the session's
            default cluster when empty.
        not_null_assertions (list[str]): Columns asserted to never be null.
        select_stmt (str): The defining query.
    """

    cluster_name: str = ''
    not_null_assertions: list[str] = field(default_factory=list)
    select_stmt: str = ''

    object_type = ObjectType.MATERIALIZED_VIEW
    query = MATERIALIZED_VIEW_QUERY

    def create(self) -> str:
        q = [f'CREATE MATERIALIZED VIEW {self.qualified_name()}']

        if self.cluster_name:
            q.append(f' IN CLUSTER {quote_identifier(self.cluster_name)}')

        if self.not_null_assertions:
            assertions = ', '.join(f'ASSERT NOT NULL {quote_identifier(column)}' for column in self.not_null_assertions)
            q.append(f' WITH ({assertions})')

        q.append(f' AS {self.select_stmt};')
        return ''.join(q)
