"""AMQP rule handlers for Terraform emission.

Handles: amqp, amqp/external
Emits: target block of ably_rule / ably_rule_amqp / ably_rule_amqp_external
"""

from typing import ClassVar, Set, Type

from .....models import AmqpExternalTarget, AmqpTarget, RuleTarget
from ...base_handler import RuleTargetHandler
from ...hcl import HclBlock
from .. import handler


@handler
class AmqpTargetHandler(RuleTargetHandler[AmqpTarget]):
    """Handler for rules publishing into an Ably queue."""

    HANDLED_TYPES: ClassVar[Set[str]] = {"amqp"}
    TERRAFORM_TYPE: ClassVar[str] = "ably_rule_amqp"
    TARGET_MODEL: ClassVar[Type[RuleTarget]] = AmqpTarget

    def project_fields(self, target: AmqpTarget, block: HclBlock) -> None:
        block.set("queue_id", target.queue_id)
        block.set("format", target.format)
        block.set("enveloped", self.flag(target.enveloped))


@handler
class AmqpExternalTargetHandler(RuleTargetHandler[AmqpExternalTarget]):
    """Handler for rules publishing to an external AMQP broker."""

    HANDLED_TYPES: ClassVar[Set[str]] = {"amqp/external"}
    TERRAFORM_TYPE: ClassVar[str] = "ably_rule_amqp_external"
    TARGET_MODEL: ClassVar[Type[RuleTarget]] = AmqpExternalTarget

    def project_fields(self, target: AmqpExternalTarget, block: HclBlock) -> None:
        block.set("url", target.url)
        block.set("routing_key", target.routing_key)
        block.set("mandatory_route", target.mandatory_route)
        block.set("persistent_messages", target.persistent_messages)
        # A TTL of 0 means "not set" in the API, same as a missing one
        block.set("message_ttl", target.message_ttl or None)
        block.set("format", target.format)
        block.set("headers", target.headers)
        block.set("enveloped", self.flag(target.enveloped))
