"""Streaming broker rule handlers for Terraform emission.

Handles: kafka, pulsar
Emits: target block of ably_rule / ably_rule_kafka / ably_rule_pulsar
"""

from typing import ClassVar, Set, Type

from .....models import KafkaTarget, PulsarTarget, RuleTarget
from ...base_handler import RuleTargetHandler
from ...hcl import HclBlock
from .. import handler


@handler
class KafkaTargetHandler(RuleTargetHandler[KafkaTarget]):
    """Handler for Kafka rules.

    Emits the SASL credentials as returned by the API, password included.
    """

    HANDLED_TYPES: ClassVar[Set[str]] = {"kafka"}
    TERRAFORM_TYPE: ClassVar[str] = "ably_rule_kafka"
    TARGET_MODEL: ClassVar[Type[RuleTarget]] = KafkaTarget

    def project_fields(self, target: KafkaTarget, block: HclBlock) -> None:
        block.set("brokers", target.brokers)
        block.set("routing_key", target.routing_key)
        block.set("format", target.format)
        block.set("enveloped", self.flag(target.enveloped))

        sasl = target.auth.sasl
        sasl_block = block.block("auth").block("sasl")
        sasl_block.set("mechanism", sasl.mechanism)
        sasl_block.set("username", sasl.username)
        sasl_block.set("password", sasl.password)


@handler
class PulsarTargetHandler(RuleTargetHandler[PulsarTarget]):
    HANDLED_TYPES: ClassVar[Set[str]] = {"pulsar"}
    TERRAFORM_TYPE: ClassVar[str] = "ably_rule_pulsar"
    TARGET_MODEL: ClassVar[Type[RuleTarget]] = PulsarTarget

    def project_fields(self, target: PulsarTarget, block: HclBlock) -> None:
        block.set("routing_key", target.routing_key)
        block.set("topic", target.topic)
        block.set("service_url", target.service_url)
        block.set("tls_trust_certs", target.tls_trust_certs)
        block.set("format", target.format)
        block.set("enveloped", self.flag(target.enveloped))

        auth_block = block.block("authentication")
        auth_block.set("mode", target.authentication.mode)
        auth_block.set("token", self.text(target.authentication.token))
