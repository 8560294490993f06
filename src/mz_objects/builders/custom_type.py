"""Custom types: named list and map types."""

from dataclasses import dataclass

from mz_objects.builders.base import ObjectBuilder
from mz_objects.errors import BuilderError
from mz_objects.errors import MutualExclusionError
from mz_objects.models import ObjectType
from mz_objects.queries import BaseQuery

TYPE_QUERY = BaseQuery("""
    SELECT
        mz_types.id,
        mz_types.name,
        mz_schemas.name AS schema_name,
        mz_databases.name AS database_name,
        mz_types.category,
        comments.comment AS comment,
        mz_roles.name AS owner_name,
        mz_types.privileges
    FROM mz_types
    JOIN mz_schemas
        ON mz_types.schema_id = mz_schemas.id
    JOIN mz_databases
        ON mz_schemas.database_id = mz_databases.id
    JOIN mz_roles
        ON mz_types.owner_id = mz_roles.id
    LEFT JOIN (
        SELECT id, comment
        FROM mz_internal.mz_comments
        WHERE object_type = 'type'
    ) comments
        ON mz_types.id = comments.id
""")


@dataclass(frozen=True)
class ListProperties:
    element_type: str


@dataclass(frozen=True)
class MapProperties:
    key_type: str
    value_type: str


@dataclass
class TypeBuilder(ObjectBuilder):
    """A custom type, either a list or a map; exactly one must be set."""

    list_properties: ListProperties | None = None
    map_properties: MapProperties | None = None

    object_type = ObjectType.TYPE
    query = TYPE_QUERY

    def create(self) -> str:
        if self.list_properties is not None and self.map_properties is not None:
            raise MutualExclusionError('list_properties', 'map_properties')

        if self.list_properties is not None:
            properties = f'LIST (ELEMENT TYPE = {self.list_properties.element_type})'
        elif self.map_properties is not None:
            properties = f'MAP (KEY TYPE {self.map_properties.key_type}, VALUE TYPE = {self.map_properties.value_type})'
        else:
            raise BuilderError('One of `list_properties` or `map_properties` must be set')

        return f'CREATE TYPE {self.qualified_name()} AS {properties};'
