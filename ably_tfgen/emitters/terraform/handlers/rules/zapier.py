"""Zapier rule handler for Terraform emission.

Handles: zapier
Emits: target block of ably_rule / ably_rule_zapier
"""

from typing import ClassVar, Set, Type

from .....models import RuleTarget, ZapierTarget
from ...base_handler import RuleTargetHandler
from ...hcl import HclBlock
from .. import handler


@handler
class ZapierTargetHandler(RuleTargetHandler[ZapierTarget]):
    HANDLED_TYPES: ClassVar[Set[str]] = {"zapier"}
    TERRAFORM_TYPE: ClassVar[str] = "ably_rule_zapier"
    TARGET_MODEL: ClassVar[Type[RuleTarget]] = ZapierTarget

    def project_fields(self, target: ZapierTarget, block: HclBlock) -> None:
        block.set("url", target.url)
        block.set("headers", target.headers)
        block.set("signing_key_id", self.text(target.signing_key_id))
