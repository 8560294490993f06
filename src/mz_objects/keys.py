"""Identifiers persisted for tracked objects and grants.

Object ids are stored with a region prefix (``aws/us-east-1:u1``). Grants have
no catalog id of their own, so their identifier encodes the full addressing
tuple as ``|`` separated fields, the first of which is a marker optionally
prefixed by the region.
"""

from dataclasses import astuple
from dataclasses import dataclass

from mz_objects.errors import MalformedKeyError

REGION_SEPARATOR = ':'
KEY_SEPARATOR = '|'

GRANT_MARKER = 'GRANT'
DEFAULT_PRIVILEGE_MARKER = 'GRANT DEFAULT'


def transform_id_with_region(region: str, object_id: str) -> str:
    """Prefix ``object_id`` with ``region``, leaving already prefixed ids alone."""
    if REGION_SEPARATOR in object_id:
        return object_id
    return f'{region}{REGION_SEPARATOR}{object_id}'


def extract_id(identifier: str) -> str:
    """Return the catalog id of a region prefixed identifier."""
    return identifier.split(REGION_SEPARATOR, 1)[-1]


def extract_region(identifier: str) -> str:
    """Return the region of a prefixed identifier, or an empty string."""
    region, separator, _ = identifier.partition(REGION_SEPARATOR)
    return region if separator else ''


def _marker(region: str, marker: str) -> str:
    return f'{region}{REGION_SEPARATOR}{marker}' if region else marker


def _split(key: str, expected: int) -> list[str]:
    parts = key.split(KEY_SEPARATOR)
    if len(parts) != expected:
        raise MalformedKeyError(key, expected, len(parts))
    return parts


@dataclass(frozen=True)
class DefaultPrivilegeKey:
    """Addressing tuple of a default privilege.

    Serialises to exactly 7 fields:
    ``marker|object_type|grantee_id|target_role_id|database_id|schema_id|privilege``.
    Database and schema ids are empty when the default privilege is not
    scoped to them.
    """

    marker: str
    object_type: str
    grantee_id: str
    target_role_id: str
    database_id: str
    schema_id: str
    privilege: str

    FIELDS = 7

    def encode(self) -> str:
        return KEY_SEPARATOR.join(astuple(self))

    @classmethod
    def decode(cls, key: str) -> 'DefaultPrivilegeKey':
        return cls(*_split(key, cls.FIELDS))

    @property
    def region(self) -> str:
        return extract_region(self.marker)

    def scope_key(self) -> str:
        """Key matching ``DefaultPrivilegeRow.scope_key`` for the same scope."""
        return KEY_SEPARATOR.join(
            (self.object_type.lower(), self.grantee_id, self.target_role_id, self.database_id, self.schema_id),
        )


@dataclass(frozen=True)
class GrantKey:
    """Addressing tuple of a privilege granted on an existing object.

    Serialises to ``marker|object_type|object_id|role_id|privilege``.
    """

    marker: str
    object_type: str
    object_id: str
    role_id: str
    privilege: str

    FIELDS = 5

    def encode(self) -> str:
        return KEY_SEPARATOR.join(astuple(self))

    @classmethod
    def decode(cls, key: str) -> 'GrantKey':
        return cls(*_split(key, cls.FIELDS))

    @property
    def region(self) -> str:
        return extract_region(self.marker)


def default_privilege_key(
    region: str,
    object_type: str,
    grantee_id: str,
    target_role_id: str,
    database_id: str,
    schema_id: str,
    privilege: str,
) -> str:
    return DefaultPrivilegeKey(
        _marker(region, DEFAULT_PRIVILEGE_MARKER),
        object_type,
        grantee_id,
        target_role_id,
        database_id,
        schema_id,
        privilege,
    ).encode()


def grant_key(region: str, object_type: str, object_id: str, role_id: str, privilege: str) -> str:
    return GrantKey(_marker(region, GRANT_MARKER), object_type, object_id, role_id, privilege).encode()
