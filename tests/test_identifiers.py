import pytest

from mz_objects.identifiers import format_number
from mz_objects.identifiers import qualified_name
from mz_objects.identifiers import quote_identifier
from mz_objects.identifiers import quote_string
from mz_objects.identifiers import split_qualified_name


def test_quote_identifier_doubles_double_quotes() -> None:
    assert quote_identifier('my "view"') == '"my ""view"""'


def test_quote_string_doubles_single_quotes() -> None:
    assert quote_string("it's") == "'it''s'"


def test_quote_string_escapes_backslashes() -> None:
    assert quote_string('a\\b') == " E'a\\\\b'"


@pytest.mark.parametrize(
    ('parts', 'expected'),
    [
        (('database', 'schema', 'view'), '"database"."schema"."view"'),
        (('database', 'schema'), '"database"."schema"'),
        (('cluster',), '"cluster"'),
        (('', 'schema', 'view'), '"schema"."view"'),
    ],
)
def test_qualified_name(parts, expected) -> None:
    assert qualified_name(*parts) == expected


def test_qualified_name_doubles_embedded_quotes() -> None:
    assert qualified_name('database', 'schema', 'ty"pe') == '"database"."schema"."ty""pe"'


def test_qualified_name_requires_a_part() -> None:
    with pytest.raises(ValueError, match='At least one non-empty name is required'):
        qualified_name('', '')


@pytest.mark.parametrize(
    'parts',
    [
        ('database', 'schema', 'view'),
        ('data.base', 'sch"ema', 'v.i"e"w'),
        ('a', 'b'),
    ],
)
def test_split_qualified_name_inverts_qualified_name(parts) -> None:
    assert split_qualified_name(qualified_name(*parts)) == parts


def test_split_qualified_name_rejects_unterminated_quote() -> None:
    with pytest.raises(ValueError, match='Unterminated'):
        split_qualified_name('"database"."schema')


@pytest.mark.parametrize(
    ('value', 'expected'),
    [
        (0.01, '0.01'),
        (0.00001, '0.00001'),
        (1.5, '1.5'),
        (10, '10'),
        (2.0, '2.0'),
        (-1000, '-1000'),
    ],
)
def test_format_number(value, expected) -> None:
    assert format_number(value) == expected


def test_format_number_rejects_bool() -> None:
    with pytest.raises(TypeError):
        format_number(True)
