"""Lookups of ids, privileges and defaults in the system catalog."""

from collections.abc import Iterable
from collections.abc import Iterator

from mz_objects.adapters.base import DatabaseAdapter
from mz_objects.builders.source import subsources_query
from mz_objects.models import DefaultPrivilegeRow
from mz_objects.models import MaterializeObject
from mz_objects.models import ObjectType
from mz_objects.models import PrivilegeRecord
from mz_objects.models import SubsourceParams
from mz_objects.models import parse_privileges
from mz_objects.queries import BaseQuery
from mz_objects.queries import fetch_all
from mz_objects.queries import fetch_one

# role id the catalog records for defaults set FOR ALL ROLES
PUBLIC_ROLE_ID = 'p'

ROLE_QUERY = BaseQuery('SELECT mz_roles.id FROM mz_roles')
DATABASE_QUERY = BaseQuery('SELECT mz_databases.id FROM mz_databases')
SCHEMA_ID_QUERY = BaseQuery("""
    SELECT mz_schemas.id
    FROM mz_schemas
    JOIN mz_databases
        ON mz_schemas.database_id = mz_databases.id
""")
DEFAULT_PRIVILEGES_QUERY = BaseQuery("""
    SELECT
        mz_default_privileges.object_type,
        mz_default_privileges.grantee,
        mz_default_privileges.role_id AS target_role_id,
        mz_default_privileges.database_id,
        mz_default_privileges.schema_id,
        mz_default_privileges.privileges
    FROM mz_default_privileges
""")


def role_id(adapter: DatabaseAdapter, role_name: str) -> str:
    return fetch_one(adapter, ROLE_QUERY.query_predicate({'mz_roles.name': role_name}))['id']


def database_id(adapter: DatabaseAdapter, database_name: str) -> str:
    return fetch_one(adapter, DATABASE_QUERY.query_predicate({'mz_databases.name': database_name}))['id']


def schema_id(adapter: DatabaseAdapter, schema_name: str, database_name: str) -> str:
    statement = SCHEMA_ID_QUERY.query_predicate({'mz_schemas.name': schema_name, 'mz_databases.name': database_name})
    return fetch_one(adapter, statement)['id']


def object_id(adapter: DatabaseAdapter, obj: MaterializeObject) -> str:
    """Resolve the durable id of ``obj`` through its kind's catalog table."""
    table = obj.object_type.catalog_table
    if obj.object_type is ObjectType.DATABASE:
        return database_id(adapter, obj.name)
    if obj.object_type is ObjectType.SCHEMA:
        return schema_id(adapter, obj.name, obj.database_name)
    if obj.object_type is ObjectType.CLUSTER:
        statement = BaseQuery(f'SELECT {table}.id FROM {table}').query_predicate({f'{table}.name': obj.name})
        return fetch_one(adapter, statement)['id']

    query = BaseQuery(f"""
        SELECT {table}.id
        FROM {table}
        JOIN mz_schemas
            ON {table}.schema_id = mz_schemas.id
        JOIN mz_databases
            ON mz_schemas.database_id = mz_databases.id
    """)
    statement = query.query_predicate(
        {f'{table}.name': obj.name, 'mz_schemas.name': obj.schema_name, 'mz_databases.name': obj.database_name},
    )
    return fetch_one(adapter, statement)['id']


def scan_privileges(adapter: DatabaseAdapter, object_type: ObjectType, object_id: str) -> tuple[PrivilegeRecord, ...]:
    """Return the ACL of the object with id ``object_id``."""
    table = object_type.catalog_table
    statement = BaseQuery(f'SELECT {table}.privileges FROM {table}').query_predicate({f'{table}.id': object_id})
    return parse_privileges(fetch_one(adapter, statement)['privileges'])


def map_grant_privileges(records: Iterable[PrivilegeRecord]) -> dict[str, set[str]]:
    """Group ACL items by grantee into the set of privilege codes held."""
    mapping: dict[str, set[str]] = {}
    for record in records:
        mapping.setdefault(record.grantee, set()).update(record.codes)
    return mapping


def scan_default_privileges(
    adapter: DatabaseAdapter,
    object_type: str,
    grantee_id: str,
    target_role_id: str = '',
    database_id: str = '',
    schema_id: str = '',
) -> Iterator[DefaultPrivilegeRow]:
    """Yield the default privilege rows matching the given scope.

    Empty ids are not filtered on.
    """
    statement = DEFAULT_PRIVILEGES_QUERY.query_predicate(
        {
            'mz_default_privileges.object_type': object_type.lower(),
            'mz_default_privileges.grantee': grantee_id,
            'mz_default_privileges.role_id': target_role_id,
            'mz_default_privileges.database_id': database_id,
            'mz_default_privileges.schema_id': schema_id,
        },
    )
    for row in fetch_all(adapter, statement):
        yield DefaultPrivilegeRow.from_row(row)


def map_default_privileges(rows: Iterable[DefaultPrivilegeRow]) -> dict[str, set[str]]:
    """Group default privilege rows by scope key into the set of privilege codes."""
    mapping: dict[str, set[str]] = {}
    for row in rows:
        mapping.setdefault(row.scope_key(), set()).update(row.privileges or '')
    return mapping


def list_subsources(adapter: DatabaseAdapter, source_id: str) -> list[SubsourceParams]:
    return [SubsourceParams.from_row(row) for row in fetch_all(adapter, subsources_query(source_id))]


def current_cluster(adapter: DatabaseAdapter) -> str:
    return fetch_one(adapter, 'SHOW CLUSTER;')['cluster']
