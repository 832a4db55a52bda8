"""Application handler for Terraform emission.

Handles: App
Emits: ably_app
"""

from typing import ClassVar

from .....models import App
from ...base_handler import ResourceHandler
from ...context import EmitterContext


class AppHandler(ResourceHandler[App]):
    """Handler for the root ``ably_app`` block every other block references."""

    TERRAFORM_TYPE: ClassVar[str] = "ably_app"

    def emit(self, entity: App, context: EmitterContext) -> str:
        block = self.resource_block(self.sanitize_name(entity.name), context)
        block.set("name", entity.name)
        return block.render()
