"""TerraformEmitter - Dispatches Ably entities to their Terraform handlers.

Architecture:
    Emitter (this file) -> Resource handlers -> HandlerRegistry -> Target handlers
                       |
                       v
                  EmitterContext (per-app state and counts)

The emitter performs no I/O. It turns already-fetched entities into HCL
text, isolates failures of single rules, and keeps run statistics for the
applications whose output was committed.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from pydantic import ValidationError

from ...exceptions import UnsupportedRuleTypeError
from ...models import ApiKey, App, Namespace, Queue, Rule
from .context import EmitterContext
from .handlers import HandlerRegistry, ensure_handlers_registered
from .handlers.resources import (
    ApiKeyHandler,
    AppHandler,
    NamespaceHandler,
    QueueHandler,
    RuleHandler,
)

logger = logging.getLogger(__name__)


def join_blocks(blocks: Iterable[str]) -> str:
    """Concatenate rendered blocks with one blank line between them."""
    return "\n".join(blocks)


class TerraformEmitter:
    """Converts Ably entities into Terraform HCL blocks.

    Responsibilities:
    - Create one EmitterContext per application
    - Dispatch entities to resource handlers
    - Skip (and record on the context) rules with unknown types or invalid
      targets
    - Fold committed contexts into the run statistics

    Usage:
        emitter = TerraformEmitter(rule_block_style="generic")
        context = emitter.new_context(app)
        blocks = [emitter.emit_app(app, context), *emitter.emit_keys(keys, context)]
        emitter.commit(context)
    """

    def __init__(self, rule_block_style: str = "generic", strict_mode: bool = False):
        """Initialize emitter.

        Args:
            rule_block_style: "generic" (ably_rule + rule_type) or "typed"
                (ably_rule_<kind>)
            strict_mode: If True, raise on unsupported rule types and invalid
                targets instead of skipping the rule
        """
        self.rule_block_style = rule_block_style
        self.strict_mode = strict_mode

        self.app_handler = AppHandler()
        self.key_handler = ApiKeyHandler()
        self.namespace_handler = NamespaceHandler()
        self.queue_handler = QueueHandler()
        self.rule_handler = RuleHandler()

        ensure_handlers_registered()

        self.stats: Dict[str, Any] = {
            "committed_apps": 0,
            "emitted_blocks": {},
            "skipped_rules": 0,
            "unsupported_rule_types": {},
            "handler_errors": [],
        }

    def new_context(self, app: App) -> EmitterContext:
        return EmitterContext(
            app_name=app.name,
            rule_block_style=self.rule_block_style,
            strict_mode=self.strict_mode,
        )

    def emit_app(self, app: App, context: EmitterContext) -> str:
        return self.app_handler.emit(app, context)

    def emit_keys(self, keys: Sequence[ApiKey], context: EmitterContext) -> List[str]:
        return [self.key_handler.emit(key, context) for key in keys]

    def emit_namespaces(
        self, namespaces: Sequence[Namespace], context: EmitterContext
    ) -> List[str]:
        return [
            self.namespace_handler.emit(namespace, context) for namespace in namespaces
        ]

    def emit_queues(self, queues: Sequence[Queue], context: EmitterContext) -> List[str]:
        return [self.queue_handler.emit(queue, context) for queue in queues]

    def emit_rules(self, rules: Sequence[Rule], context: EmitterContext) -> List[str]:
        blocks = []
        for rule in rules:
            block = self.emit_rule(rule, context)
            if block is not None:
                blocks.append(block)
        return blocks

    def emit_rule(self, rule: Rule, context: EmitterContext) -> Optional[str]:
        """Emit one rule, or return None if it has to be skipped."""
        try:
            return self.rule_handler.emit(rule, context)
        except UnsupportedRuleTypeError:
            context.record_unsupported_rule(rule.rule_type, rule.id)
            logger.warning(
                f"Unsupported rule type: {rule.rule_type} "
                f"(rule '{rule.id}' of app '{context.app_name}' skipped)"
            )
            if self.strict_mode:
                raise
            return None
        except ValidationError as e:
            context.record_handler_error(rule.rule_type, rule.id, str(e))
            logger.warning(
                f"Invalid {rule.rule_type} target for rule '{rule.id}' "
                f"of app '{context.app_name}': {e.error_count()} validation error(s)"
            )
            if self.strict_mode:
                raise
            return None

    def commit(self, context: EmitterContext) -> None:
        """Add one application's counts to the run statistics.

        Called once the application's output has been delivered; contexts of
        applications that failed are dropped.
        """
        self.stats["committed_apps"] += 1
        counts = self.stats["emitted_blocks"]
        for terraform_type, count in context.block_counts().items():
            counts[terraform_type] = counts.get(terraform_type, 0) + count
        self.stats["skipped_rules"] += context.skipped_rules
        for rule_type, rule_ids in context.unsupported_rule_types.items():
            self.stats["unsupported_rule_types"].setdefault(rule_type, []).extend(
                rule_ids
            )
        self.stats["handler_errors"].extend(context.handler_errors)

    def get_supported_rule_types(self) -> List[str]:
        return HandlerRegistry.get_all_supported_types()

    def get_statistics(self) -> Dict[str, Any]:
        """Get emission statistics of the committed applications.

        Returns:
            Dictionary with emission statistics
        """
        return {
            "committed_apps": self.stats["committed_apps"],
            "emitted_blocks": dict(self.stats["emitted_blocks"]),
            "total_blocks": sum(self.stats["emitted_blocks"].values()),
            "skipped_rules": self.stats["skipped_rules"],
            "unsupported_rule_types": {
                rule_type: list(rule_ids)
                for rule_type, rule_ids in self.stats["unsupported_rule_types"].items()
            },
            "handler_errors_count": len(self.stats["handler_errors"]),
        }
