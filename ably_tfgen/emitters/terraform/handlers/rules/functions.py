"""Cloud function rule handlers for Terraform emission.

Handles: azure/function, google/function
Emits: target block of ably_rule / ably_rule_azure_function /
ably_rule_google_function
"""

from typing import ClassVar, Set, Type

from .....models import AzureFunctionTarget, GoogleFunctionTarget, RuleTarget
from ...base_handler import RuleTargetHandler
from ...hcl import HclBlock
from .. import handler


@handler
class AzureFunctionTargetHandler(RuleTargetHandler[AzureFunctionTarget]):
    HANDLED_TYPES: ClassVar[Set[str]] = {"azure/function"}
    TERRAFORM_TYPE: ClassVar[str] = "ably_rule_azure_function"
    TARGET_MODEL: ClassVar[Type[RuleTarget]] = AzureFunctionTarget

    def project_fields(self, target: AzureFunctionTarget, block: HclBlock) -> None:
        block.set("azure_app_id", target.azure_app_id)
        block.set("function_name", target.function_name)
        block.set("format", target.format)
        block.set("headers", target.headers)
        block.set("signing_key_id", self.text(target.signing_key_id))
        block.set("enveloped", self.flag(target.enveloped))


@handler
class GoogleFunctionTargetHandler(RuleTargetHandler[GoogleFunctionTarget]):
    HANDLED_TYPES: ClassVar[Set[str]] = {"google/function"}
    TERRAFORM_TYPE: ClassVar[str] = "ably_rule_google_function"
    TARGET_MODEL: ClassVar[Type[RuleTarget]] = GoogleFunctionTarget

    def project_fields(self, target: GoogleFunctionTarget, block: HclBlock) -> None:
        block.set("region", target.region)
        block.set("project_id", target.project_id)
        block.set("function_name", target.function_name)
        block.set("format", target.format)
        block.set("headers", target.headers)
        block.set("signing_key_id", self.text(target.signing_key_id))
        block.set("enveloped", self.flag(target.enveloped))
