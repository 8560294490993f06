"""Behaviour shared by every kind of source."""

from dataclasses import dataclass

from mz_objects.builders.base import SizedObjectBuilder
from mz_objects.models import ObjectType
from mz_objects.queries import BaseQuery

SOURCE_QUERY = BaseQuery("""
    SELECT
        mz_sources.id,
        mz_sources.name,
        mz_schemas.name AS schema_name,
        mz_databases.name AS database_name,
        mz_sources.type AS source_type,
        mz_sources.size,
        mz_sources.envelope_type,
        mz_connections.name AS connection_name,
        mz_clusters.name AS cluster_name,
        comments.comment AS comment,
        mz_roles.name AS owner_name,
        mz_sources.privileges
    FROM mz_sources
    JOIN mz_schemas
        ON mz_sources.schema_id = mz_schemas.id
    JOIN mz_databases
        ON mz_schemas.database_id = mz_databases.id
    LEFT JOIN mz_connections
        ON mz_sources.connection_id = mz_connections.id
    LEFT JOIN mz_clusters
        ON mz_sources.cluster_id = mz_clusters.id
    JOIN mz_roles
        ON mz_sources.owner_id = mz_roles.id
    LEFT JOIN (
        SELECT id, comment
        FROM mz_internal.mz_comments
        WHERE object_type = 'source'
    ) comments
        ON mz_sources.id = comments.id
""")

SUBSOURCE_QUERY = BaseQuery("""
    SELECT DISTINCT
        mz_sources.id,
        mz_sources.name,
        mz_schemas.name AS schema_name,
        mz_databases.name AS database_name,
        mz_sources.type
    FROM mz_internal.mz_object_dependencies
    JOIN mz_sources
        ON mz_object_dependencies.referenced_object_id = mz_sources.id
    JOIN mz_objects
        ON mz_object_dependencies.object_id = mz_objects.id
    JOIN mz_schemas
        ON mz_sources.schema_id = mz_schemas.id
    JOIN mz_databases
        ON mz_schemas.database_id = mz_databases.id
""")


@dataclass
class SourceBuilder(SizedObjectBuilder):
    object_type = ObjectType.SOURCE
    query = SOURCE_QUERY


def list_sources_query(schema_name: str = '', database_name: str = '') -> str:
    return SOURCE_QUERY.query_predicate({'mz_schemas.name': schema_name, 'mz_databases.name': database_name})


def subsources_query(source_id: str) -> str:
    """Render the lookup of the subsources (progress, tables) of a source."""
    return SUBSOURCE_QUERY.query_predicate(
        {'mz_object_dependencies.object_id': source_id, 'mz_objects.type': ObjectType.SOURCE.catalog_name},
    )
