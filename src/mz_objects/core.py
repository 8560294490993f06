"""Object lifecycle and grant reconciliation.

This module executes the statements rendered by the builders through a
database adapter and turns catalog ids into the identifiers persisted by
callers. It is the only layer that talks to the database and logs.
"""

import logging
from enum import Enum

from mz_objects import catalog
from mz_objects.adapters.base import DatabaseAdapter
from mz_objects.adapters.materialize import MaterializeAdapter
from mz_objects.builders.base import ObjectBuilder
from mz_objects.builders.base import SizedObjectBuilder
from mz_objects.builders.ownership import CommentBuilder
from mz_objects.builders.ownership import OwnershipBuilder
from mz_objects.builders.privileges import DefaultPrivilegeBuilder
from mz_objects.builders.privileges import PrivilegeBuilder
from mz_objects.errors import AmbiguousResultError
from mz_objects.errors import BuilderError
from mz_objects.errors import MalformedKeyError
from mz_objects.errors import MaterializeError
from mz_objects.errors import NotFoundError
from mz_objects.keys import DefaultPrivilegeKey
from mz_objects.keys import GrantKey
from mz_objects.keys import default_privilege_key
from mz_objects.keys import extract_id
from mz_objects.keys import grant_key
from mz_objects.keys import transform_id_with_region
from mz_objects.models import ObjectType
from mz_objects.models import Privilege
from mz_objects.models import R
from mz_objects.queries import fetch_one
from mz_objects.queries import fetch_optional

log = logging.getLogger(__name__)


class GrantStatus(Enum):
    """Outcome of reconciling a tracked grant with the catalog."""

    GRANTED = 'granted'
    """The privilege is still held; keep the tracked record."""
    REMOVED = 'removed'
    """The privilege is gone or the record is unreadable; drop the tracked record."""


def get_adapter(conn) -> DatabaseAdapter:
    """Factory function to get the appropriate adapter."""
    dialect = conn.engine.dialect.name

    adapters: dict[str, type[DatabaseAdapter]] = {
        'postgresql': MaterializeAdapter,
    }

    adapter_class = adapters.get(dialect)
    if not adapter_class:
        raise ValueError(f'Unsupported database dialect: {dialect}')

    return adapter_class(conn)


# ===== Object lifecycle =====


def create_object(
    adapter: DatabaseAdapter,
    builder: ObjectBuilder,
    region: str,
    ownership_role: str | None = None,
    comment: str | None = None,
) -> str:
    """Create an object, then set its owner and comment.

    If setting the owner or the comment fails, the object is dropped again and
    the error re-raised, so no half-configured object is left behind.

    Args:
        adapter (DatabaseAdapter): Adapter to execute statements with.
        builder (ObjectBuilder): The object to create.
        region (str): Region tag prefixed to the returned id.
        ownership_role (str | None): Role to hand the object over to.
        comment (str | None): Comment to set on the object.

    Returns:
        str: The region prefixed durable id, e.g. ``'aws/us-east-1:u1'``.

    Raises:
        BuilderError: if the builder cannot render a valid statement.
        ExecutionError: if a statement fails.
    """
    adapter.execute(builder.create())

    obj = builder.identity()
    try:
        if ownership_role:
            adapter.execute(OwnershipBuilder(obj).alter(ownership_role))
        if comment:
            adapter.execute(CommentBuilder(obj).object(comment))
    except MaterializeError:
        log.debug('Post create step failed, dropping %s', builder.qualified_name())
        try:
            adapter.execute(builder.drop())
        except MaterializeError:
            log.exception('Could not drop %s after a failed create', builder.qualified_name())
        raise

    row = fetch_one(adapter, builder.read_id())
    return transform_id_with_region(region, row['id'])


def update_object(
    adapter: DatabaseAdapter,
    builder: ObjectBuilder,
    new_name: str | None = None,
    new_size: str | None = None,
    ownership_role: str | None = None,
    comment: str | None = None,
):
    """Apply in-place changes to an existing object.

    The rename runs first and moves the builder to ``new_name``; every later
    statement targets the new name. A failed rename or resize leaves the
    builder as it was.
    """
    if new_name:
        old_name = builder.name
        try:
            adapter.execute(builder.rename(new_name))
        except MaterializeError:
            builder.name = old_name
            raise

    if new_size:
        if not isinstance(builder, SizedObjectBuilder):
            raise BuilderError(f'{builder.object_type.sql} cannot be resized')
        old_size = builder.size
        try:
            adapter.execute(builder.update_size(new_size))
        except MaterializeError:
            builder.size = old_size
            raise

    obj = builder.identity()
    if ownership_role:
        adapter.execute(OwnershipBuilder(obj).alter(ownership_role))
    if comment is not None:
        adapter.execute(CommentBuilder(obj).object(comment))


def delete_object(adapter: DatabaseAdapter, builder: ObjectBuilder):
    adapter.execute(builder.drop())


def read_object(
    adapter: DatabaseAdapter,
    params_type: type[R],
    builder_type: type[ObjectBuilder],
    identifier: str,
) -> R | None:
    """Read the catalog record of a tracked object.

    Returns:
        The decoded record, or None when the object no longer exists and
        should be dropped from tracked state.
    """
    object_id = extract_id(identifier)
    if not object_id:
        log.warning('Dropping identifier without an object id: %r', identifier)
        return None

    row = fetch_optional(adapter, builder_type.read_params(object_id))
    if row is None:
        log.warning('Object %s no longer exists', identifier)
        return None
    return params_type.from_row(row)


# ===== Grants on existing objects =====


def grant_privilege(adapter: DatabaseAdapter, builder: PrivilegeBuilder, region: str) -> str:
    """Grant the privilege and return the key tracking it."""
    adapter.execute(builder.grant())

    object_id = catalog.object_id(adapter, builder.obj)
    role_id = catalog.role_id(adapter, builder.role_name)
    privilege = Privilege.parse(builder.privilege)
    return grant_key(region, builder.obj.object_type.sql, object_id, role_id, privilege.code)


def revoke_privilege(adapter: DatabaseAdapter, builder: PrivilegeBuilder):
    adapter.execute(builder.revoke())


def read_grant(adapter: DatabaseAdapter, identifier: str) -> GrantStatus:
    """Check whether the grant tracked by ``identifier`` still holds."""
    try:
        key = GrantKey.decode(identifier)
        object_type = ObjectType.parse(key.object_type)
        code = Privilege.parse(key.privilege).code
    except (MalformedKeyError, ValueError) as err:
        log.warning('Dropping unreadable grant identifier: %s', err)
        return GrantStatus.REMOVED
    if not key.object_id or not key.role_id:
        log.warning('Dropping grant identifier without object or role id: %r', identifier)
        return GrantStatus.REMOVED

    try:
        records = catalog.scan_privileges(adapter, object_type, key.object_id)
    except (NotFoundError, AmbiguousResultError):
        log.debug('Object of grant %s no longer exists', identifier)
        return GrantStatus.REMOVED

    held = catalog.map_grant_privileges(records).get(key.role_id, set())
    if code not in held:
        log.debug('Privilege of grant %s is no longer held', identifier)
        return GrantStatus.REMOVED
    return GrantStatus.GRANTED


# ===== Default privileges =====


def grant_default_privilege(adapter: DatabaseAdapter, builder: DefaultPrivilegeBuilder, region: str) -> str:
    """Set the default privilege and return the key tracking it."""
    adapter.execute(builder.grant())

    grantee_id = catalog.role_id(adapter, builder.grantee_name)
    if builder.target_role_name:
        target_role_id = catalog.role_id(adapter, builder.target_role_name)
    else:
        target_role_id = catalog.PUBLIC_ROLE_ID
    database_id = catalog.database_id(adapter, builder.database_name) if builder.database_name else ''
    schema_id = (
        catalog.schema_id(adapter, builder.schema_name, builder.database_name) if builder.schema_name else ''
    )
    privilege = Privilege.parse(builder.privilege)
    return default_privilege_key(
        region,
        builder.object_type.sql,
        grantee_id,
        target_role_id,
        database_id,
        schema_id,
        privilege.code,
    )


def revoke_default_privilege(adapter: DatabaseAdapter, builder: DefaultPrivilegeBuilder):
    adapter.execute(builder.revoke())


def read_default_privilege(adapter: DatabaseAdapter, identifier: str) -> GrantStatus:
    """Check whether the default privilege tracked by ``identifier`` still holds.

    The privilege counts as held only if its code is in the set of codes the
    catalog reports for exactly the key's scope (object type, grantee, target
    role, database and schema).
    """
    try:
        key = DefaultPrivilegeKey.decode(identifier)
        code = Privilege.parse(key.privilege).code
    except (MalformedKeyError, ValueError) as err:
        log.warning('Dropping unreadable default privilege identifier: %s', err)
        return GrantStatus.REMOVED
    if not key.grantee_id or not key.target_role_id:
        log.warning('Dropping default privilege identifier without grantee or target role: %r', identifier)
        return GrantStatus.REMOVED

    rows = catalog.scan_default_privileges(
        adapter,
        key.object_type,
        key.grantee_id,
        key.target_role_id,
        key.database_id,
        key.schema_id,
    )
    privileges = catalog.map_default_privileges(rows)
    if not privileges:
        log.debug('No default privileges found for %s', identifier)
        return GrantStatus.REMOVED

    if code not in privileges.get(key.scope_key(), set()):
        log.debug('Default privilege %s is no longer held', identifier)
        return GrantStatus.REMOVED
    return GrantStatus.GRANTED
