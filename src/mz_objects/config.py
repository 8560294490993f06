"""Connection settings for a Materialize region.

Settings come from ``MZ_*`` environment variables, optionally loaded from a
``.env`` file first.

Example:
    >>> settings = Settings.from_env()
    >>> engine = settings.create_engine()
    >>> with engine.connect() as conn:
    ...     adapter = get_adapter(conn)
"""

import os
from dataclasses import dataclass

import sqlalchemy as sa
from dotenv import load_dotenv

LOCAL_REGION = 'local'
CLOUD_DOMAIN = 'materialize.cloud'


@dataclass(frozen=True)
class Settings:
    """Where and how to connect.

    Attributes:
        host (str): Server host name, e.g. ``abc123.us-east-1.aws.materialize.cloud``.
        user (str): Login role.
        password (str): Password or app password.
        port (int): SQL port. Defaults to 6875.
        database (str): Database to connect to. Defaults to ``materialize``.
        sslmode (str): libpq ``sslmode``. Defaults to ``require``.
        application_name (str): Reported in ``pg_stat_activity`` style views.
    """

    host: str
    user: str
    password: str = ''
    port: int = 6875
    database: str = 'materialize'
    sslmode: str = 'require'
    application_name: str = 'mz-objects'

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> 'Settings':
        """Build settings from ``MZ_HOST``, ``MZ_USER``, ``MZ_PASSWORD``, ``MZ_PORT``,
        ``MZ_DATABASE`` and ``MZ_SSLMODE``.

        Variables already set in the environment win over the ``.env`` file.

        Raises:
            KeyError: if ``MZ_HOST`` or ``MZ_USER`` is missing.
        """
        load_dotenv(dotenv_path=dotenv_path)
        return cls(
            host=os.environ['MZ_HOST'],
            user=os.environ['MZ_USER'],
            password=os.environ.get('MZ_PASSWORD', ''),
            port=int(os.environ.get('MZ_PORT', '6875')),
            database=os.environ.get('MZ_DATABASE', 'materialize'),
            sslmode=os.environ.get('MZ_SSLMODE', 'require'),
        )

    @property
    def region(self) -> str:
        """Region tag used to prefix persisted ids, e.g. ``aws/us-east-1``."""
        parts = self.host.split('.')
        if len(parts) == 5 and '.'.join(parts[3:]) == CLOUD_DOMAIN:
            return f'{parts[2]}/{parts[1]}'
        return LOCAL_REGION

    def url(self) -> sa.engine.URL:
        return sa.engine.URL.create(
            'postgresql+psycopg',
            username=self.user,
            password=self.password or None,
            host=self.host,
            port=self.port,
            database=self.database,
            query={'sslmode': self.sslmode, 'application_name': self.application_name},
        )

    def create_engine(self, **kwargs) -> sa.Engine:
        """Create an engine running every statement in its own transaction."""
        return sa.create_engine(self.url(), **kwargs).execution_options(isolation_level='AUTOCOMMIT')
