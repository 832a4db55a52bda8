"""Namespace handler for Terraform emission.

Handles: Namespace
Emits: ably_namespace
"""

from typing import ClassVar

from .....models import Namespace
from ...base_handler import ResourceHandler
from ...context import EmitterContext


class NamespaceHandler(ResourceHandler[Namespace]):
    """Handler for channel namespaces, identified by their id (the prefix)."""

    TERRAFORM_TYPE: ClassVar[str] = "ably_namespace"

    def emit(self, entity: Namespace, context: EmitterContext) -> str:
        block = self.resource_block(self.child_identifier(entity.id, context), context)
        block.set("app_id", self.app_reference(context))
        block.set("id", entity.id)
        block.set("authenticated", entity.authenticated)
        block.set("persisted", entity.persisted)
        block.set("persist_last", entity.persist_last)
        block.set("push_enabled", entity.push_enabled)
        block.set("tls_only", entity.tls_only)
        # Batching fields are always present so every namespace block has the same shape
        block.set("batching_enabled", bool(entity.batching_enabled))
        block.set("batching_interval", entity.batching_interval or None)
        block.set("batching_policy", entity.batching_policy or "")
        return block.render()
