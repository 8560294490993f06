import pytest

from mz_objects.config import Settings

ENV_VARS = ('MZ_HOST', 'MZ_USER', 'MZ_PASSWORD', 'MZ_PORT', 'MZ_DATABASE', 'MZ_SSLMODE')


@pytest.fixture
def clean_env(monkeypatch):
    # setenv first so that undo also removes values written later by load_dotenv
    for name in ENV_VARS:
        monkeypatch.setenv(name, '')
        monkeypatch.delenv(name)
    return monkeypatch


@pytest.mark.parametrize(
    ('host', 'region'),
    [
        ('abc123.us-east-1.aws.materialize.cloud', 'aws/us-east-1'),
        ('xyz.eu-west-1.aws.materialize.cloud', 'aws/eu-west-1'),
        ('localhost', 'local'),
        ('materialized.internal.example.com', 'local'),
    ],
)
def test_region(host, region) -> None:
    assert Settings(host=host, user='joe').region == region


def test_from_env(clean_env, tmp_path) -> None:
    clean_env.setenv('MZ_HOST', 'abc123.us-east-1.aws.materialize.cloud')
    clean_env.setenv('MZ_USER', 'joe')
    clean_env.setenv('MZ_PORT', '6877')

    settings = Settings.from_env(dotenv_path=str(tmp_path / 'missing.env'))

    assert settings == Settings(host='abc123.us-east-1.aws.materialize.cloud', user='joe', port=6877)


def test_from_env_reads_dotenv(clean_env, tmp_path) -> None:
    env_file = tmp_path / '.env'
    env_file.write_text('MZ_HOST=localhost\nMZ_USER=materialize\nMZ_SSLMODE=disable\n')

    settings = Settings.from_env(dotenv_path=str(env_file))

    assert settings.host == 'localhost'
    assert settings.user == 'materialize'
    assert settings.sslmode == 'disable'
    assert settings.port == 6875


def test_from_env_environment_wins_over_dotenv(clean_env, tmp_path) -> None:
    clean_env.setenv('MZ_HOST', 'mz.internal')
    env_file = tmp_path / '.env'
    env_file.write_text('MZ_HOST=localhost\nMZ_USER=materialize\n')

    assert Settings.from_env(dotenv_path=str(env_file)).host == 'mz.internal'


def test_from_env_requires_host(clean_env, tmp_path) -> None:
    with pytest.raises(KeyError, match='MZ_HOST'):
        Settings.from_env(dotenv_path=str(tmp_path / 'missing.env'))


def test_url() -> None:
    url = Settings(host='localhost', user='joe', password='secret', sslmode='disable').url()
    assert url.drivername == 'postgresql+psycopg'
    assert url.username == 'joe'
    assert url.password == 'secret'
    assert url.port == 6875
    assert url.database == 'materialize'
    assert dict(url.query) == {'sslmode': 'disable', 'application_name': 'mz-objects'}


def test_create_engine_uses_autocommit() -> None:
    engine = Settings(host='localhost', user='joe').create_engine()
    assert engine.dialect.name == 'postgresql'
    assert engine.get_execution_options()['isolation_level'] == 'AUTOCOMMIT'
    engine.dispose()
