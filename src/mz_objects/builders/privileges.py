"""GRANT/REVOKE on objects and ALTER DEFAULT PRIVILEGES."""

from dataclasses import dataclass

from mz_objects.errors import InvalidPrivilegeError
from mz_objects.identifiers import qualified_name
from mz_objects.identifiers import quote_identifier
from mz_objects.models import MaterializeObject
from mz_objects.models import ObjectType
from mz_objects.models import Privilege

DEFAULT_PRIVILEGE_OBJECT_TYPES = frozenset(
    {
        ObjectType.TABLE,
        ObjectType.TYPE,
        ObjectType.SECRET,
        ObjectType.CONNECTION,
        ObjectType.DATABASE,
        ObjectType.SCHEMA,
        ObjectType.CLUSTER,
    },
)


def _validate(privilege: Privilege | str, object_type: ObjectType) -> Privilege:
    try:
        privilege = Privilege.parse(privilege)
    except ValueError as err:
        raise InvalidPrivilegeError(str(err)) from None
    if privilege not in object_type.privileges:
        raise InvalidPrivilegeError(f'{privilege.name} is not a valid privilege for {object_type.sql}')
    return privilege


@dataclass
class PrivilegeBuilder:
    """Grant or revoke one privilege on one object to one role.

    Attributes:
        role_name (str): The grantee.
        privilege (Privilege | str): Member, name or catalog code.
        obj (MaterializeObject): The object the privilege applies to.
    """

    role_name: str
    privilege: Privilege | str
    obj: MaterializeObject

    def _clause(self) -> str:
        privilege = _validate(self.privilege, self.obj.object_type)
        return f'{privilege.name} ON {self.obj.object_type.grant_keyword} {self.obj.qualified_name()}'

    def grant(self) -> str:
        return f'GRANT {self._clause()} TO {quote_identifier(self.role_name)};'

    def revoke(self) -> str:
        return f'REVOKE {self._clause()} FROM {quote_identifier(self.role_name)};'


@dataclass
class DefaultPrivilegeBuilder:
    """Privileges applied to objects created in the future.

    With no ``target_role_name`` the default applies to objects created by
    any role, which the catalog records against the PUBLIC role id. ``schema_name`` scopes it to one schema (of ``database_name``),
    ``database_name`` alone to one database.
    """

    object_type: ObjectType
    grantee_name: str
    privilege: Privilege | str
    target_role_name: str = ''
    database_name: str = ''
    schema_name: str = ''

    def _prefix(self) -> str:
        q = ['ALTER DEFAULT PRIVILEGES']
        if self.target_role_name:
            q.append(f' FOR ROLE {quote_identifier(self.target_role_name)}')
        else:
            q.append(' FOR ALL ROLES')

        if self.schema_name:
            q.append(f' IN SCHEMA {qualified_name(self.database_name, self.schema_name)}')
        elif self.database_name:
            q.append(f' IN DATABASE {quote_identifier(self.database_name)}')
        return ''.join(q)

    def _privilege(self) -> Privilege:
        if self.object_type not in DEFAULT_PRIVILEGE_OBJECT_TYPES:
            raise InvalidPrivilegeError(f'Default privileges cannot be set on {self.object_type.plural}')
        return _validate(self.privilege, self.object_type)

    def grant(self) -> str:
        privilege = self._privilege()
        return (
            f'{self._prefix()} GRANT {privilege.name} ON {self.object_type.plural} '
            f'TO {quote_identifier(self.grantee_name)};'
        )

    def revoke(self) -> str:
        privilege = self._privilege()
        return (
            f'{self._prefix()} REVOKE {privilege.name} ON {self.object_type.plural} '
            f'FROM {quote_identifier(self.grantee_name)};'
        )
