"""Kafka sources reading a topic through a KAFKA connection."""

from dataclasses import dataclass
from dataclasses import field
from enum import Enum

from mz_objects.builders.formats import FormatSpec
from mz_objects.builders.formats import format_spec_sql
from mz_objects.builders.source import SourceBuilder
from mz_objects.errors import BuilderError
from mz_objects.errors import MutualExclusionError
from mz_objects.identifiers import quote_string
from mz_objects.models import IdentifierSchemaStruct


class SourceEnvelope(Enum):
    """How records are interpreted once decoded."""

    NONE = 'NONE'
    """Append only, every record is an insert."""
    UPSERT = 'UPSERT'
    """Key/value semantics, a null value deletes the key."""
    DEBEZIUM = 'DEBEZIUM'
    """Debezium change events."""


@dataclass
class SourceKafkaBuilder(SourceBuilder):
    """A source consuming one Kafka topic.

    ``format`` decodes both key and value; ``key_format`` and ``value_format``
    decode them separately and cannot be combined with ``format``. Each
    ``include_*`` flag exposes a piece of record metadata as a column, named
    after the matching ``*_alias`` or after the metadata itself.
    """

    kafka_connection: IdentifierSchemaStruct | None = None
    topic: str = ''
    include_key: bool = False
    include_key_alias: str = ''
    include_headers: bool = False
    include_headers_alias: str = ''
    include_partition: bool = False
    include_partition_alias: str = ''
    include_offset: bool = False
    include_offset_alias: str = ''
    include_timestamp: bool = False
    include_timestamp_alias: str = ''
    format: FormatSpec | None = None
    key_format: FormatSpec | None = None
    value_format: FormatSpec | None = None
    envelope: SourceEnvelope | None = None
    start_offset: list[int] = field(default_factory=list)
    start_timestamp: int | None = None
    expose_progress: IdentifierSchemaStruct | None = None

    def _includes(self) -> list[str]:
        metadata = (
            ('KEY', self.include_key, self.include_key_alias),
            ('HEADERS', self.include_headers, self.include_headers_alias),
            ('PARTITION', self.include_partition, self.include_partition_alias),
            ('OFFSET', self.include_offset, self.include_offset_alias),
            ('TIMESTAMP', self.include_timestamp, self.include_timestamp_alias),
        )
        return [f'{keyword} AS {alias or keyword.lower()}' for keyword, included, alias in metadata if included]

    def create(self) -> str:
        self._validate_placement()
        if self.kafka_connection is None:
            raise BuilderError('`kafka_connection` is required')
        if self.format is not None and (self.key_format is not None or self.value_format is not None):
            raise MutualExclusionError('format', 'key_format' if self.key_format is not None else 'value_format')
        if (self.key_format is None) != (self.value_format is None):
            raise BuilderError('`key_format` and `value_format` must be set together')

        q = [f'CREATE SOURCE {self.qualified_name()}{self._in_cluster()}']
        q.append(f' FROM KAFKA CONNECTION {self.kafka_connection.qualified_name()}')

        options = [f'TOPIC {quote_string(self.topic)}']
        if self.start_timestamp is not None:
            options.append(f'START TIMESTAMP {self.start_timestamp}')
        if self.start_offset:
            options.append(f'START OFFSET ({",".join(str(offset) for offset in self.start_offset)})')
        q.append(f' ({", ".join(options)})')

        if self.format is not None:
            q.append(f' FORMAT {format_spec_sql(self.format)}')
        elif self.key_format is not None:
            q.append(f' KEY FORMAT {format_spec_sql(self.key_format)}')
            q.append(f' VALUE FORMAT {format_spec_sql(self.value_format)}')

        includes = self._includes()
        if includes:
            q.append(f' INCLUDE {", ".join(includes)}')

        if self.envelope is not None:
            q.append(f' ENVELOPE {self.envelope.value}')

        if self.expose_progress is not None:
            q.append(f' EXPOSE PROGRESS AS {self.expose_progress.qualified_name()}')

        q.append(self._with_options())
        q.append(';')
        return ''.join(q)
