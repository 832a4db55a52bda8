"""Builds the Terraform text of one application."""

from typing import List, Optional, Protocol, Sequence

import structlog

from .emitters.terraform import EmitterContext, TerraformEmitter, join_blocks
from .models import ApiKey, App, Namespace, Queue, Rule

logger = structlog.get_logger(__name__)


class AppResourceSource(Protocol):
    """What the aggregator needs from the Control API client."""

    def list_keys(self, app_id: str) -> Sequence[ApiKey]: ...

    def list_namespaces(self, app_id: str) -> Sequence[Namespace]: ...

    def list_queues(self, app_id: str) -> Sequence[Queue]: ...

    def list_rules(self, app_id: str) -> Sequence[Rule]: ...


class AppAggregator:
    """
    Fetches an application's resources kind by kind and emits them.

    Output order is fixed: the application block, then keys, namespaces,
    queues and rules. Each kind is fetched and emitted before the next kind
    is fetched, so a fetch failure surfaces before later kinds are requested.
    """

    def __init__(self, source: AppResourceSource, emitter: TerraformEmitter):
        self.source = source
        self.emitter = emitter

    def aggregate(
        self,
        app: App,
        account_id: Optional[str] = None,
        context: Optional[EmitterContext] = None,
    ) -> str:
        """
        Produce the complete file content for ``app``.

        Per-app counts are collected on ``context`` (a new one when omitted);
        the caller decides whether to commit them to the run statistics.

        Raises:
            ControlApiError: If fetching one of the app's resource kinds fails
        """
        log = logger.bind(app_id=app.id, app_name=app.name, account_id=account_id)
        if context is None:
            context = self.emitter.new_context(app)

        blocks: List[str] = [self.emitter.emit_app(app, context)]

        keys = self.source.list_keys(app.id)
        blocks.extend(self.emitter.emit_keys(keys, context))

        namespaces = self.source.list_namespaces(app.id)
        blocks.extend(self.emitter.emit_namespaces(namespaces, context))

        queues = self.source.list_queues(app.id)
        blocks.extend(self.emitter.emit_queues(queues, context))

        rules = self.source.list_rules(app.id)
        blocks.extend(self.emitter.emit_rules(rules, context))

        log.info(
            "Aggregated application",
            keys=len(keys),
            namespaces=len(namespaces),
            queues=len(queues),
            rules=len(rules),
            blocks=len(blocks),
        )
        return join_blocks(blocks)
