"""HTTP webhook rule handler for Terraform emission.

Handles: http
Emits: target block of ably_rule / ably_rule_http
"""

from typing import ClassVar, Set, Type

from .....models import HttpTarget, RuleTarget
from ...base_handler import RuleTargetHandler
from ...hcl import HclBlock
from .. import handler


@handler
class HttpTargetHandler(RuleTargetHandler[HttpTarget]):
    """Handler for webhook rules delivering to an HTTP endpoint."""

    HANDLED_TYPES: ClassVar[Set[str]] = {"http"}
    TERRAFORM_TYPE: ClassVar[str] = "ably_rule_http"
    TARGET_MODEL: ClassVar[Type[RuleTarget]] = HttpTarget

    def project_fields(self, target: HttpTarget, block: HclBlock) -> None:
        block.set("url", target.url)
        block.set("format", target.format)
        block.set("headers", target.headers)
        block.set("signing_key_id", self.text(target.signing_key_id))
        block.set("enveloped", self.flag(target.enveloped))
