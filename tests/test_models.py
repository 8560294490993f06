import pytest

from mz_objects.models import DefaultPrivilegeRow
from mz_objects.models import IdentifierSchemaStruct
from mz_objects.models import MaterializeObject
from mz_objects.models import ObjectType
from mz_objects.models import Privilege
from mz_objects.models import PrivilegeRecord
from mz_objects.models import SourceParams
from mz_objects.models import parse_privileges


@pytest.mark.parametrize(
    ('value', 'expected'),
    [
        ('SELECT', Privilege.SELECT),
        ('usage', Privilege.USAGE),
        ('U', Privilege.USAGE),
        ('r', Privilege.SELECT),
        ('C', Privilege.CREATE),
        (Privilege.DELETE, Privilege.DELETE),
    ],
)
def test_privilege_parse(value, expected) -> None:
    assert Privilege.parse(value) is expected


def test_privilege_parse_unknown() -> None:
    with pytest.raises(ValueError, match="Unknown privilege: 'TRUNCATE'"):
        Privilege.parse('TRUNCATE')


@pytest.mark.parametrize(
    ('object_type', 'grant_keyword', 'plural', 'catalog_name', 'catalog_table'),
    [
        (ObjectType.VIEW, 'TABLE', 'VIEWS', 'view', 'mz_views'),
        (ObjectType.MATERIALIZED_VIEW, 'TABLE', 'MATERIALIZED VIEWS', 'materialized-view', 'mz_materialized_views'),
        (ObjectType.SOURCE, 'TABLE', 'SOURCES', 'source', 'mz_sources'),
        (ObjectType.TYPE, 'TYPE', 'TYPES', 'type', 'mz_types'),
        (ObjectType.SCHEMA, 'SCHEMA', 'SCHEMAS', 'schema', 'mz_schemas'),
    ],
)
def test_object_type_spellings(object_type, grant_keyword, plural, catalog_name, catalog_table) -> None:
    assert object_type.grant_keyword == grant_keyword
    assert object_type.plural == plural
    assert object_type.catalog_name == catalog_name
    assert object_type.catalog_table == catalog_table


@pytest.mark.parametrize('value', ['materialized-view', 'MATERIALIZED VIEW', 'materialized_view'])
def test_object_type_parse(value) -> None:
    assert ObjectType.parse(value) is ObjectType.MATERIALIZED_VIEW


def test_object_type_parse_unknown() -> None:
    with pytest.raises(ValueError, match="Unknown object type: 'INDEX'"):
        ObjectType.parse('INDEX')


@pytest.mark.parametrize(
    ('obj', 'expected'),
    [
        (MaterializeObject(ObjectType.CLUSTER, 'cluster'), '"cluster"'),
        (MaterializeObject(ObjectType.DATABASE, 'database'), '"database"'),
        (MaterializeObject(ObjectType.SCHEMA, 'schema', database_name='database'), '"database"."schema"'),
        (MaterializeObject(ObjectType.VIEW, 'view', 'schema', 'database'), '"database"."schema"."view"'),
    ],
)
def test_materialize_object_qualified_name(obj, expected) -> None:
    assert obj.qualified_name() == expected


def test_identifier_schema_struct_defaults() -> None:
    assert IdentifierSchemaStruct('kafka_conn').qualified_name() == '"materialize"."public"."kafka_conn"'


def test_parse_privileges_from_array_text() -> None:
    assert parse_privileges('{u1=rw/u2,=r/u2}') == (
        PrivilegeRecord('u1', 'rw', 'u2'),
        PrivilegeRecord('', 'r', 'u2'),
    )


def test_parse_privileges_from_list() -> None:
    assert parse_privileges(['s1=U/s1']) == (PrivilegeRecord('s1', 'U', 's1'),)


def test_parse_privileges_none() -> None:
    assert parse_privileges(None) == ()


def test_row_decodes_by_column_name() -> None:
    params = SourceParams.from_row({'name': 'source', 'id': 'u1', 'size': 'xsmall', 'unrelated': 1})
    assert params.id == 'u1'
    assert params.name == 'source'
    assert params.size == 'xsmall'
    assert params.cluster_name is None


def test_default_privilege_row_scope_key() -> None:
    row = DefaultPrivilegeRow.from_row(
        {'object_type': 'SCHEMA', 'grantee': 'u1', 'target_role_id': 'u2', 'privileges': 'UC'},
    )
    assert row.scope_key() == 'schema|u1|u2||'
