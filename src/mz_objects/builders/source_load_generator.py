"""Load generator sources: synthetic data for demos and performance tests."""

from dataclasses import dataclass
from dataclasses import field
from enum import Enum

from mz_objects.builders.base import TableAlias
from mz_objects.builders.base import for_tables
from mz_objects.builders.source import SourceBuilder
from mz_objects.errors import BuilderError
from mz_objects.errors import MutualExclusionError
from mz_objects.identifiers import format_number
from mz_objects.identifiers import quote_string
from mz_objects.models import IdentifierSchemaStruct


class LoadGeneratorType(Enum):
    """Enumeration of the built-in load generators."""

    AUCTION = 'AUCTION'
    """Auction house with users, auctions and bids; several tables."""
    COUNTER = 'COUNTER'
    """A single, monotonically increasing counter."""
    MARKETING = 'MARKETING'
    """Marketing campaign data; several tables."""
    TPCH = 'TPCH'
    """The TPC-H benchmark tables."""

    @property
    def has_tables(self) -> bool:
        return self is not LoadGeneratorType.COUNTER


@dataclass(frozen=True)
class LoadGeneratorOptions:
    """Generator tuning knobs.

    Attributes:
        tick_interval (str): Interval between emitted batches, e.g. ``'1s'``.
        scale_factor (float | None): Data volume multiplier.
        max_cardinality (int | None): Keep at most this many values (COUNTER only).
    """

    tick_interval: str = ''
    scale_factor: float | None = None
    max_cardinality: int | None = None

    def render(self) -> str:
        options = []
        if self.tick_interval:
            options.append(f'TICK INTERVAL {quote_string(self.tick_interval)}')
        if self.scale_factor is not None:
            options.append(f'SCALE FACTOR {format_number(self.scale_factor)}')
        if self.max_cardinality is not None:
            options.append(f'MAX CARDINALITY {format_number(self.max_cardinality)}')
        return f' ({", ".join(options)})' if options else ''


@dataclass
class SourceLoadgenBuilder(SourceBuilder):
    load_generator_type: LoadGeneratorType | str = LoadGeneratorType.COUNTER
    counter_options: LoadGeneratorOptions | None = None
    auction_options: LoadGeneratorOptions | None = None
    marketing_options: LoadGeneratorOptions | None = None
    tpch_options: LoadGeneratorOptions | None = None
    tables: list[TableAlias] = field(default_factory=list)
    expose_progress: IdentifierSchemaStruct | None = None

    def _options(self, generator: LoadGeneratorType) -> LoadGeneratorOptions | None:
        blocks = {
            'counter_options': self.counter_options,
            'auction_options': self.auction_options,
            'marketing_options': self.marketing_options,
            'tpch_options': self.tpch_options,
        }
        given = [name for name, value in blocks.items() if value is not None]
        if len(given) > 1:
            raise MutualExclusionError(given[0], given[1])
        if not given:
            return None
        if given[0] != f'{generator.value.lower()}_options':
            raise BuilderError(f'`{given[0]}` cannot be set for a {generator.value} load generator')
        return blocks[given[0]]

    def _generator(self) -> LoadGeneratorType:
        if isinstance(self.load_generator_type, LoadGeneratorType):
            return self.load_generator_type
        try:
            return LoadGeneratorType(self.load_generator_type.upper())
        except ValueError:
            raise BuilderError(f'Unknown load generator type: {self.load_generator_type!r}') from None

    def create(self) -> str:
        self._validate_placement()
        generator = self._generator()

        q = [f'CREATE SOURCE {self.qualified_name()}{self._in_cluster()}']
        q.append(f' FROM LOAD GENERATOR {generator.value}')

        options = self._options(generator)
        if options is not None:
            q.append(options.render())

        if self.tables:
            q.append(for_tables(self.tables))
        elif generator.has_tables:
            q.append(' FOR ALL TABLES')

        if self.expose_progress is not None:
            q.append(f' EXPOSE PROGRESS AS {self.expose_progress.qualified_name()}')

        q.append(self._with_options())
        q.append(';')
        return ''.join(q)
