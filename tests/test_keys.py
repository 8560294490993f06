import re

import pytest

from mz_objects.errors import MalformedKeyError
from mz_objects.keys import DefaultPrivilegeKey
from mz_objects.keys import GrantKey
from mz_objects.keys import default_privilege_key
from mz_objects.keys import extract_id
from mz_objects.keys import extract_region
from mz_objects.keys import grant_key
from mz_objects.keys import transform_id_with_region


def test_transform_id_with_region() -> None:
    assert transform_id_with_region('aws/us-east-1', 'u1') == 'aws/us-east-1:u1'


def test_transform_id_with_region_is_idempotent() -> None:
    assert transform_id_with_region('aws/us-east-1', 'aws/us-east-1:u1') == 'aws/us-east-1:u1'


@pytest.mark.parametrize(
    ('identifier', 'object_id', 'region'),
    [
        ('aws/us-east-1:u1', 'u1', 'aws/us-east-1'),
        ('u1', 'u1', ''),
    ],
)
def test_extract(identifier, object_id, region) -> None:
    assert extract_id(identifier) == object_id
    assert extract_region(identifier) == region


def test_default_privilege_key_layout() -> None:
    key = default_privilege_key('aws/us-east-1', 'TABLE', 'u1', 'u2', 'u3', 'u4', 'r')
    assert key == 'aws/us-east-1:GRANT DEFAULT|TABLE|u1|u2|u3|u4|r'


def test_default_privilege_key_without_region() -> None:
    assert default_privilege_key('', 'SCHEMA', 'u1', 'u2', '', '', 'U') == 'GRANT DEFAULT|SCHEMA|u1|u2|||U'


@pytest.mark.parametrize(
    'key',
    [
        DefaultPrivilegeKey('GRANT DEFAULT', 'TABLE', 'u1', 'u2', 'u3', 'u4', 'r'),
        DefaultPrivilegeKey('aws/eu-west-1:GRANT DEFAULT', 'SCHEMA', 'u1', 'u2', '', '', 'U'),
        DefaultPrivilegeKey('GRANT DEFAULT', 'TYPE', 'u1', '', '', '', 'U'),
    ],
)
def test_default_privilege_key_decodes_what_it_encodes(key) -> None:
    assert DefaultPrivilegeKey.decode(key.encode()) == key


@pytest.mark.parametrize(
    ('key', 'got'),
    [
        ('GRANT DEFAULT|TABLE|u1|u2|u3|r', 6),
        ('GRANT DEFAULT|TABLE|u1|u2|u3|u4|r|extra', 8),
        ('', 1),
    ],
)
def test_default_privilege_key_rejects_wrong_field_count(key, got) -> None:
    with pytest.raises(
        MalformedKeyError,
        match=re.escape(f'{key}: cannot be parsed correctly, expected 7 fields, got {got}'),
    ):
        DefaultPrivilegeKey.decode(key)


def test_default_privilege_key_region_and_scope() -> None:
    key = DefaultPrivilegeKey.decode('aws/us-east-1:GRANT DEFAULT|SCHEMA|u1|u2|u3||U')
    assert key.region == 'aws/us-east-1'
    assert key.scope_key() == 'schema|u1|u2|u3|'


def test_grant_key() -> None:
    key = grant_key('aws/us-east-1', 'VIEW', 'u10', 'u2', 'r')
    assert key == 'aws/us-east-1:GRANT|VIEW|u10|u2|r'
    assert GrantKey.decode(key) == GrantKey('aws/us-east-1:GRANT', 'VIEW', 'u10', 'u2', 'r')


def test_grant_key_rejects_wrong_field_count() -> None:
    with pytest.raises(MalformedKeyError, match='expected 5 fields, got 4'):
        GrantKey.decode('GRANT|VIEW|u10|r')
