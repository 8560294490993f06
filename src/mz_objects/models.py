"""Catalog object, privilege and row models."""

import re
from collections.abc import Iterable
from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import fields
from enum import Enum
from typing import Any
from typing import TypeVar

from mz_objects.identifiers import qualified_name

DEFAULT_SCHEMA = 'public'
DEFAULT_DATABASE = 'materialize'


class Privilege(Enum):
    """Enumeration of privileges understood by the catalog.

    Members carry the single character code the catalog uses in ACL items
    (``mz_aclitem``) and in ``mz_default_privileges.privileges``.
    """

    SELECT = 'r'
    """Read rows from tables, views, materialized views and sources."""
    INSERT = 'a'
    """Insert rows into tables."""
    UPDATE = 'w'
    """Update rows in tables."""
    DELETE = 'd'
    """Delete rows from tables."""
    CREATE = 'C'
    """Create objects in a database, schema or cluster."""
    USAGE = 'U'
    """Use a schema, type, secret, connection, database or cluster."""
    CREATEROLE = 'R'
    """Create roles (system privilege)."""
    CREATEDB = 'B'
    """Create databases (system privilege)."""
    CREATECLUSTER = 'N'
    """Create clusters (system privilege)."""

    @property
    def code(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: 'str | Privilege') -> 'Privilege':
        """Accept a member, a privilege name in any case or a catalog code."""
        if isinstance(value, Privilege):
            return value
        if value in cls._value2member_map_:
            return cls(value)
        try:
            return cls[value.upper()]
        except KeyError:
            raise ValueError(f'Unknown privilege: {value!r}') from None


class ObjectType(Enum):
    """Kinds of catalog objects, mapped to their SQL and catalog spellings."""

    DATABASE = 'DATABASE'
    SCHEMA = 'SCHEMA'
    CLUSTER = 'CLUSTER'
    TABLE = 'TABLE'
    VIEW = 'VIEW'
    MATERIALIZED_VIEW = 'MATERIALIZED VIEW'
    SOURCE = 'SOURCE'
    SINK = 'SINK'
    TYPE = 'TYPE'
    CONNECTION = 'CONNECTION'
    SECRET = 'SECRET'
    SYSTEM = 'SYSTEM'

    @property
    def sql(self) -> str:
        """Keyword used in CREATE/ALTER/DROP/COMMENT statements."""
        return self.value

    @property
    def grant_keyword(self) -> str:
        """Keyword used after ``GRANT ... ON``; relation-like items are granted as tables."""
        if self in (ObjectType.VIEW, ObjectType.MATERIALIZED_VIEW, ObjectType.SOURCE):
            return ObjectType.TABLE.value
        return self.value

    @property
    def plural(self) -> str:
        """Form used by ``ALTER DEFAULT PRIVILEGES ... ON <plural>``."""
        return self.value + 'S'

    @property
    def catalog_name(self) -> str:
        """Lowercase spelling stored in catalog ``object_type`` columns."""
        return self.value.lower().replace(' ', '-')

    @property
    def catalog_table(self) -> str:
        return _CATALOG_TABLES[self]

    @property
    def privileges(self) -> frozenset[Privilege]:
        """Privileges that can be granted on this kind of object."""
        return _VALID_PRIVILEGES[self]

    @classmethod
    def parse(cls, value: 'str | ObjectType') -> 'ObjectType':
        """Accept a member, its SQL spelling or its catalog spelling."""
        if isinstance(value, ObjectType):
            return value
        normalised = value.upper().replace('-', ' ').replace('_', ' ')
        try:
            return cls(normalised)
        except ValueError:
            raise ValueError(f'Unknown object type: {value!r}') from None


_CATALOG_TABLES = {
    ObjectType.DATABASE: 'mz_databases',
    ObjectType.SCHEMA: 'mz_schemas',
    ObjectType.CLUSTER: 'mz_clusters',
    ObjectType.TABLE: 'mz_tables',
    ObjectType.VIEW: 'mz_views',
    ObjectType.MATERIALIZED_VIEW: 'mz_materialized_views',
    ObjectType.SOURCE: 'mz_sources',
    ObjectType.SINK: 'mz_sinks',
    ObjectType.TYPE: 'mz_types',
    ObjectType.CONNECTION: 'mz_connections',
    ObjectType.SECRET: 'mz_secrets',
    ObjectType.SYSTEM: 'mz_system_privileges',
}

_VALID_PRIVILEGES = {
    ObjectType.DATABASE: frozenset({Privilege.USAGE, Privilege.CREATE}),
    ObjectType.SCHEMA: frozenset({Privilege.USAGE, Privilege.CREATE}),
    ObjectType.CLUSTER: frozenset({Privilege.USAGE, Privilege.CREATE}),
    ObjectType.TABLE: frozenset({Privilege.SELECT, Privilege.INSERT, Privilege.UPDATE, Privilege.DELETE}),
    ObjectType.VIEW: frozenset({Privilege.SELECT}),
    ObjectType.MATERIALIZED_VIEW: frozenset({Privilege.SELECT}),
    ObjectType.SOURCE: frozenset({Privilege.SELECT}),
    ObjectType.SINK: frozenset(),
    ObjectType.TYPE: frozenset({Privilege.USAGE}),
    ObjectType.CONNECTION: frozenset({Privilege.USAGE}),
    ObjectType.SECRET: frozenset({Privilege.USAGE}),
    ObjectType.SYSTEM: frozenset({Privilege.CREATEROLE, Privilege.CREATEDB, Privilege.CREATECLUSTER}),
}


@dataclass(frozen=True)
class MaterializeObject:
    """Identity of a catalog object.

    Attributes:
        object_type (ObjectType): The kind of object.
        name (str): The object name.
        schema_name (str): The schema containing the object. Empty for
            databases, schemas and clusters.
        database_name (str): The database containing the object. Empty for
            clusters and databases.
    """

    object_type: ObjectType
    name: str
    schema_name: str = ''
    database_name: str = ''

    def qualified_name(self) -> str:
        if self.object_type is ObjectType.DATABASE or self.object_type is ObjectType.CLUSTER:
            return qualified_name(self.name)
        if self.object_type is ObjectType.SCHEMA:
            return qualified_name(self.database_name, self.name)
        return qualified_name(self.database_name, self.schema_name, self.name)


@dataclass(frozen=True)
class IdentifierSchemaStruct:
    """Reference to another catalog item, e.g. a connection or a secret."""

    name: str
    schema_name: str = DEFAULT_SCHEMA
    database_name: str = DEFAULT_DATABASE

    def qualified_name(self) -> str:
        return qualified_name(self.database_name, self.schema_name, self.name)


# ===== Rows decoded from catalog queries =====

R = TypeVar('R', bound='Row')


class Row:
    """Mixin decoding a query row into a dataclass by column name."""

    @classmethod
    def from_row(cls: type[R], row: Mapping[str, Any]) -> R:
        return cls(**{f.name: row.get(f.name) for f in fields(cls)})


_ACL_ITEM = re.compile(r'(\w*)=(\w*)/(\w*)')


@dataclass(frozen=True)
class PrivilegeRecord:
    """One ACL item: the privileges ``grantor`` gave to ``grantee``.

    Attributes:
        grantee (str): Role id receiving the privileges (empty for PUBLIC).
        privileges (str): Privilege codes, e.g. ``'rw'``.
        grantor (str): Role id that granted them.
    """

    grantee: str
    privileges: str
    grantor: str

    @property
    def codes(self) -> frozenset[str]:
        return frozenset(self.privileges)


def parse_privileges(value: str | Iterable[str] | None) -> tuple[PrivilegeRecord, ...]:
    """Parse ``mz_aclitem[]`` values, given either as a list or as array text."""
    if value is None:
        return ()
    text = value if isinstance(value, str) else ','.join(value)
    return tuple(PrivilegeRecord(*match.groups()) for match in _ACL_ITEM.finditer(text))


@dataclass(frozen=True)
class DefaultPrivilegeRow(Row):
    object_type: str | None
    grantee: str | None
    target_role_id: str | None
    database_id: str | None
    schema_id: str | None
    privileges: str | None

    def scope_key(self) -> str:
        return '|'.join(
            (
                (self.object_type or '').lower(),
                self.grantee or '',
                self.target_role_id or '',
                self.database_id or '',
                self.schema_id or '',
            ),
        )


@dataclass(frozen=True)
class SchemaParams(Row):
    id: str | None
    name: str | None
    database_name: str | None
    comment: str | None
    owner_name: str | None
    privileges: Any


@dataclass(frozen=True)
class ViewParams(Row):
    id: str | None
    name: str | None
    schema_name: str | None
    database_name: str | None
    comment: str | None
    owner_name: str | None
    privileges: Any


@dataclass(frozen=True)
class MaterializedViewParams(Row):
    id: str | None
    name: str | None
    schema_name: str | None
    database_name: str | None
    cluster_name: str | None
    comment: str | None
    owner_name: str | None
    privileges: Any


@dataclass(frozen=True)
class TypeParams(Row):
    id: str | None
    name: str | None
    schema_name: str | None
    database_name: str | None
    category: str | None
    comment: str | None
    owner_name: str | None
    privileges: Any


@dataclass(frozen=True)
class SourceParams(Row):
    id: str | None
    name: str | None
    schema_name: str | None
    database_name: str | None
    source_type: str | None
    size: str | None
    envelope_type: str | None
    connection_name: str | None
    cluster_name: str | None
    comment: str | None
    owner_name: str | None
    privileges: Any


@dataclass(frozen=True)
class SubsourceParams(Row):
    id: str | None
    name: str | None
    schema_name: str | None
    database_name: str | None
    type: str | None


@dataclass(frozen=True)
class SinkParams(Row):
    id: str | None
    name: str | None
    schema_name: str | None
    database_name: str | None
    sink_type: str | None
    size: str | None
    envelope_type: str | None
    connection_name: str | None
    cluster_name: str | None
    comment: str | None
    owner_name: str | None
