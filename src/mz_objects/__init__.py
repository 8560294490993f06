"""Materialize object lifecycle package."""

from mz_objects.config import Settings
from mz_objects.core import GrantStatus
from mz_objects.core import create_object
from mz_objects.core import delete_object
from mz_objects.core import get_adapter
from mz_objects.core import grant_default_privilege
from mz_objects.core import grant_privilege
from mz_objects.core import read_default_privilege
from mz_objects.core import read_grant
from mz_objects.core import read_object
from mz_objects.core import revoke_default_privilege
from mz_objects.core import revoke_privilege
from mz_objects.core import update_object
from mz_objects.models import IdentifierSchemaStruct
from mz_objects.models import MaterializeObject
from mz_objects.models import ObjectType
from mz_objects.models import Privilege

SELECT = Privilege.SELECT
INSERT = Privilege.INSERT
UPDATE = Privilege.UPDATE
DELETE = Privilege.DELETE
CREATE = Privilege.CREATE
USAGE = Privilege.USAGE
CREATEROLE = Privilege.CREATEROLE
CREATEDB = Privilege.CREATEDB
CREATECLUSTER = Privilege.CREATECLUSTER
