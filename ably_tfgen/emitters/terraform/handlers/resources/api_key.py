"""API key handler for Terraform emission.

Handles: ApiKey
Emits: ably_api_key
"""

from typing import ClassVar

from .....models import ApiKey
from ...base_handler import ResourceHandler
from ...context import EmitterContext
from ...hcl import jsonencode


class ApiKeyHandler(ResourceHandler[ApiKey]):
    """Handler for application API keys.

    The key material is never emitted; Terraform creates new key secrets.
    """

    TERRAFORM_TYPE: ClassVar[str] = "ably_api_key"

    def emit(self, entity: ApiKey, context: EmitterContext) -> str:
        block = self.resource_block(
            self.child_identifier(entity.name, context), context
        )
        block.set("app_id", self.app_reference(context))
        block.set("name", entity.name)
        block.set("capability", jsonencode(entity.capability))
        block.set("revocable_tokens", False)
        return block.render()
