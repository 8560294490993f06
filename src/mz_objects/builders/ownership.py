"""Ownership transfer and comments on existing objects."""

from dataclasses import dataclass

from mz_objects.identifiers import quote_identifier
from mz_objects.identifiers import quote_string
from mz_objects.models import MaterializeObject


@dataclass
class OwnershipBuilder:
    obj: MaterializeObject

    def alter(self, role_name: str) -> str:
        return f'ALTER {self.obj.object_type.sql} {self.obj.qualified_name()} OWNER TO {quote_identifier(role_name)};'


@dataclass
class CommentBuilder:
    """Comments on an object or on one of its columns.

    The comment text is stored as given.
    """

    obj: MaterializeObject

    def object(self, comment: str) -> str:
        return f'COMMENT ON {self.obj.object_type.sql} {self.obj.qualified_name()} IS {quote_string(comment)};'

    def column(self, column_name: str, comment: str) -> str:
        return (
            f'COMMENT ON COLUMN {self.obj.qualified_name()}.{quote_identifier(column_name)} '
            f'IS {quote_string(comment)};'
        )
