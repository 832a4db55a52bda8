"""Queue handler for Terraform emission.

Handles: Queue
Emits: ably_queue
"""

from typing import ClassVar

from .....models import Queue
from ...base_handler import ResourceHandler
from ...context import EmitterContext


class QueueHandler(ResourceHandler[Queue]):
    TERRAFORM_TYPE: ClassVar[str] = "ably_queue"

    def emit(self, entity: Queue, context: EmitterContext) -> str:
        block = self.resource_block(
            self.child_identifier(entity.name, context), context
        )
        block.set("app_id", self.app_reference(context))
        block.set("name", entity.name)
        block.set("ttl", entity.ttl)
        block.set("max_length", entity.max_length)
        block.set("region", entity.region)
        return block.render()
