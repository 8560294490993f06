"""Webhook sources: HTTP endpoints that append request bodies to a source."""

from dataclasses import dataclass
from dataclasses import field

from mz_objects.builders.source import SourceBuilder
from mz_objects.errors import BuilderError
from mz_objects.models import IdentifierSchemaStruct


@dataclass(frozen=True)
class CheckOption:
    """One binding available to the CHECK expression.

    Exactly one of ``body``, ``headers`` or ``secret`` is set; ``alias``
    names the binding inside the expression.
    """

    body: bool = False
    headers: bool = False
    secret: IdentifierSchemaStruct | None = None
    alias: str = ''

    def render(self) -> str:
        if self.body:
            option = 'BODY'
        elif self.headers:
            option = 'HEADERS'
        elif self.secret is not None:
            option = f'SECRET {self.secret.qualified_name()}'
        else:
            raise BuilderError('Check option needs one of `body`, `headers` or `secret`')
        return f'{option} AS {self.alias}' if self.alias else option


@dataclass
class SourceWebhookBuilder(SourceBuilder):
    """A webhook source. Runs in an existing cluster and cannot be sized."""

    body_format: str = 'JSON'
    include_headers: bool = False
    check_options: list[CheckOption] = field(default_factory=list)
    check_expression: str = ''

    def create(self) -> str:
        if not self.cluster_name:
            raise BuilderError('`cluster_name` is required for webhook sources')
        if self.size:
            raise BuilderError('webhook sources cannot set `size`')

        q = [f'CREATE SOURCE {self.qualified_name()}{self._in_cluster()} FROM WEBHOOK']
        q.append(f' BODY FORMAT {self.body_format}')

        if self.include_headers:
            q.append(' INCLUDE HEADERS')

        if self.check_expression:
            check = self.check_expression
            if self.check_options:
                check = f'WITH ({", ".join(option.render() for option in self.check_options)}) {check}'
            q.append(f' CHECK ({check})')

        q.append(';')
        return ''.join(q)

    def update_size(self, new_size: str) -> str:
        raise BuilderError('webhook sources cannot be resized')
