"""Integration rule handler for Terraform emission.

Handles: Rule (all registered rule types)
Emits: ably_rule (generic style) or ably_rule_<kind> (typed style)
"""

from typing import ClassVar

from .....exceptions import UnsupportedRuleTypeError
from .....models import Rule
from ...base_handler import ResourceHandler, RuleTargetHandler
from ...context import EmitterContext
from .. import HandlerRegistry, ensure_handlers_registered


class RuleHandler(ResourceHandler[Rule]):
    """Handler for integration rules.

    Emits the attributes shared by every rule, then delegates the ``target``
    block to the target handler registered for the rule's type.
    """

    TERRAFORM_TYPE: ClassVar[str] = "ably_rule"

    def emit(self, entity: Rule, context: EmitterContext) -> str:
        """Convert a rule to a Terraform resource block.

        Raises:
            UnsupportedRuleTypeError: If no target handler handles the rule type
            pydantic.ValidationError: If the target misses a required field
        """
        ensure_handlers_registered()
        target_handler = HandlerRegistry.get_handler(entity.rule_type)
        if target_handler is None:
            raise UnsupportedRuleTypeError(
                f"Unsupported rule type: {entity.rule_type}",
                rule_type=entity.rule_type,
                rule_id=entity.id,
            )

        # Project first so an invalid target leaves nothing tracked in the context
        target_block = target_handler.project(entity)

        typed = context.rule_block_style == "typed"
        block = self.resource_block(
            self.child_identifier(entity.id, context),
            context,
            self.terraform_type_for(target_handler, context),
        )
        block.set("app_id", self.app_reference(context))
        block.set("status", entity.status)
        if not typed:
            block.set("rule_type", entity.rule_type)
        block.set("request_mode", entity.request_mode)

        source_block = block.block("source")
        source_block.set("channel_filter", entity.source.channel_filter)
        source_block.set("type", entity.source.type)

        block.add_block(target_block)
        return block.render()

    def terraform_type_for(
        self, target_handler: RuleTargetHandler, context: EmitterContext
    ) -> str:
        """Resource type of a rule block under the context's rule block style."""
        if context.rule_block_style == "typed":
            return target_handler.TERRAFORM_TYPE
        return self.TERRAFORM_TYPE
