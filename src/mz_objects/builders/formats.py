"""FORMAT clauses shared by Kafka sources and sinks."""

from dataclasses import dataclass
from dataclasses import field

from mz_objects.errors import BuilderError
from mz_objects.identifiers import quote_string
from mz_objects.models import IdentifierSchemaStruct


@dataclass(frozen=True)
class AvroFormatSpec:
    schema_registry_connection: IdentifierSchemaStruct
    key_strategy: str = ''
    value_strategy: str = ''


@dataclass(frozen=True)
class ProtobufFormatSpec:
    schema_registry_connection: IdentifierSchemaStruct
    message: str = ''


@dataclass(frozen=True)
class CsvFormatSpec:
    """CSV input, described by a column count or by a header row."""

    column: int = 0
    header: list[str] = field(default_factory=list)
    delimited_by: str = ''


@dataclass(frozen=True)
class FormatSpec:
    """Exactly one of the members describes the encoding."""

    avro: AvroFormatSpec | None = None
    protobuf: ProtobufFormatSpec | None = None
    csv: CsvFormatSpec | None = None
    bytes: bool = False
    text: bool = False
    json: bool = False


def format_spec_sql(spec: FormatSpec) -> str:
    """Render the body of a source FORMAT clause, e.g. ``'JSON'``."""
    if spec.avro is not None:
        q = [f'AVRO USING CONFLUENT SCHEMA REGISTRY CONNECTION {spec.avro.schema_registry_connection.qualified_name()}']
        if spec.avro.key_strategy:
            q.append(f' KEY STRATEGY {spec.avro.key_strategy}')
        if spec.avro.value_strategy:
            q.append(f' VALUE STRATEGY {spec.avro.value_strategy}')
        return ''.join(q)

    if spec.protobuf is not None:
        q = [
            'PROTOBUF USING CONFLUENT SCHEMA REGISTRY CONNECTION '
            f'{spec.protobuf.schema_registry_connection.qualified_name()}',
        ]
        if spec.protobuf.message:
            q.append(f' MESSAGE {quote_string(spec.protobuf.message)}')
        return ''.join(q)

    if spec.csv is not None:
        if spec.csv.header:
            q = [f'CSV WITH HEADER ({", ".join(spec.csv.header)})']
        elif spec.csv.column > 0:
            q = [f'CSV WITH {spec.csv.column} COLUMNS']
        else:
            raise BuilderError('CSV format needs either `column` or `header`')
        if spec.csv.delimited_by:
            q.append(f' DELIMITED BY {quote_string(spec.csv.delimited_by)}')
        return ''.join(q)

    if spec.bytes:
        return 'BYTES'
    if spec.text:
        return 'TEXT'
    if spec.json:
        return 'JSON'

    raise BuilderError('Format specification is empty')


@dataclass(frozen=True)
class SinkAvroFormatSpec:
    schema_registry_connection: IdentifierSchemaStruct
    avro_key_fullname: str = ''
    avro_value_fullname: str = ''


@dataclass(frozen=True)
class SinkFormatSpec:
    avro: SinkAvroFormatSpec | None = None
    json: bool = False


def sink_format_spec_sql(spec: SinkFormatSpec) -> str:
    """Render the body of a sink FORMAT clause."""
    if spec.avro is not None:
        q = [f'AVRO USING CONFLUENT SCHEMA REGISTRY CONNECTION {spec.avro.schema_registry_connection.qualified_name()}']
        options = []
        if spec.avro.avro_key_fullname:
            options.append(f'AVRO KEY FULLNAME {quote_string(spec.avro.avro_key_fullname)}')
        if spec.avro.avro_value_fullname:
            options.append(f'AVRO VALUE FULLNAME {quote_string(spec.avro.avro_value_fullname)}')
        if options:
            q.append(f' ({", ".join(options)})')
        return ''.join(q)

    if spec.json:
        return 'JSON'

    raise BuilderError('Sink format specification is empty')
