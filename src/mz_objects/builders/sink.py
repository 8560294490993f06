"""Sinks writing the changes of a relation to Kafka."""

from dataclasses import dataclass
from dataclasses import field
from enum import Enum

from mz_objects.builders.base import SizedObjectBuilder
from mz_objects.builders.formats import SinkFormatSpec
from mz_objects.builders.formats import sink_format_spec_sql
from mz_objects.errors import BuilderError
from mz_objects.identifiers import quote_string
from mz_objects.models import IdentifierSchemaStruct
from mz_objects.models import ObjectType
from mz_objects.queries import BaseQuery

SINK_QUERY = BaseQuery("""
    SELECT
        mz_sinks.id,
        mz_sinks.name,
        mz_schemas.name AS schema_name,
        mz_databases.name AS database_name,
        mz_sinks.type AS sink_type,
        mz_sinks.size,
        mz_sinks.envelope_type,
        mz_connections.name AS connection_name,
        mz_clusters.name AS cluster_name,
        comments.comment AS comment,
        mz_roles.name AS owner_name
    FROM mz_sinks
    JOIN mz_schemas
        ON mz_sinks.schema_id = mz_schemas.id
    JOIN mz_databases
        ON mz_schemas.database_id = mz_databases.id
    LEFT JOIN mz_connections
        ON mz_sinks.connection_id = mz_connections.id
    LEFT JOIN mz_clusters
        ON mz_sinks.cluster_id = mz_clusters.id
    JOIN mz_roles
        ON mz_sinks.owner_id = mz_roles.id
    LEFT JOIN (
        SELECT id, comment
        FROM mz_internal.mz_comments
        WHERE object_type = 'sink'
    ) comments
        ON mz_sinks.id = comments.id
""")


class SinkEnvelope(Enum):
    DEBEZIUM = 'DEBEZIUM'
    """Before/after change events."""
    UPSERT = 'UPSERT'
    """Latest value per key; requires ``key``."""


@dataclass
class SinkKafkaBuilder(SizedObjectBuilder):
    """A sink emitting every change of ``from_`` to a Kafka topic.

    Attributes:
        from_ (IdentifierSchemaStruct): The relation to sink.
        kafka_connection (IdentifierSchemaStruct): The KAFKA connection.
        topic (str): Destination topic.
        key (list[str]): Columns forming the message key.
        key_not_enforced (bool): Skip the uniqueness check on ``key``.
        format (SinkFormatSpec | None): Encoding of the messages.
        envelope (SinkEnvelope | None): Shape of the messages.
        snapshot (bool): Emit the current contents before the changes.
    """

    from_: IdentifierSchemaStruct | None = None
    kafka_connection: IdentifierSchemaStruct | None = None
    topic: str = ''
    key: list[str] = field(default_factory=list)
    key_not_enforced: bool = False
    format: SinkFormatSpec | None = None
    envelope: SinkEnvelope | None = None
    snapshot: bool = True

    object_type = ObjectType.SINK
    query = SINK_QUERY

    def create(self) -> str:
        self._validate_placement()
        if self.from_ is None:
            raise BuilderError('`from_` is required')
        if self.kafka_connection is None:
            raise BuilderError('`kafka_connection` is required')
        if self.envelope is SinkEnvelope.UPSERT and not self.key:
            raise BuilderError('`key` is required with the UPSERT envelope')

        q = [f'CREATE SINK {self.qualified_name()}{self._in_cluster()}']
        q.append(f' FROM {self.from_.qualified_name()}')
        q.append(f' INTO KAFKA CONNECTION {self.kafka_connection.qualified_name()} (TOPIC {quote_string(self.topic)})')

        if self.key:
            q.append(f' KEY ({", ".join(self.key)})')
            if self.key_not_enforced:
                q.append(' NOT ENFORCED')

        if self.format is not None:
            q.append(f' FORMAT {sink_format_spec_sql(self.format)}')

        if self.envelope is not None:
            q.append(f' ENVELOPE {self.envelope.value}')

        q.append(self._with_options(*([] if self.snapshot else ['SNAPSHOT = false'])))
        q.append(';')
        return ''.join(q)


def list_sinks_query(schema_name: str = '', database_name: str = '') -> str:
    return SINK_QUERY.query_predicate({'mz_schemas.name': schema_name, 'mz_databases.name': database_name})
