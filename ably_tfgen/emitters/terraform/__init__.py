"""Terraform emitter package for Ably resource IaC generation.

This package provides handler-based Terraform HCL generation from Ably
Control API resources. Resource handlers emit one block per entity; rule
target handlers, registered by rule type, project the polymorphic rule
targets.

Main Components:
- TerraformEmitter: Dispatches entities to handlers, keeps statistics
- EmitterContext: Per-application state passed to all handlers
- ResourceHandler / RuleTargetHandler: Abstract base classes for handlers
- HandlerRegistry: Registry for target handler lookup by rule type

Usage:
    from ably_tfgen.emitters.terraform import TerraformEmitter

    emitter = TerraformEmitter()
    context = emitter.new_context(app)
    text = join_blocks([emitter.emit_app(app, context), *emitter.emit_keys(keys, context)])
    emitter.commit(context)
"""

from .context import EmitterContext
from .emitter import TerraformEmitter, join_blocks
from .handlers import HandlerRegistry, ensure_handlers_registered, handler
from .naming import resource_identifier, sanitize_name

__all__ = [
    "EmitterContext",
    "HandlerRegistry",
    "TerraformEmitter",
    "ensure_handlers_registered",
    "handler",
    "join_blocks",
    "resource_identifier",
    "sanitize_name",
]
