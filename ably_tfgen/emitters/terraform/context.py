"""EmitterContext - Shared state passed to all handlers during emission.

This module contains the EmitterContext dataclass that carries the owning
application, the output options every handler needs, and the per-app
emission counts while one application's Terraform file is being generated.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .naming import sanitize_name

RULE_BLOCK_STYLES = ("generic", "typed")


@dataclass
class EmitterContext:
    """Shared context passed to all handlers during emission.

    One context is created per application, so nothing leaks between files.
    The counts collected here only reach the run statistics when the emitter
    commits the context.

    Usage:
        context = EmitterContext(app_name="My App")
        handler.emit(key, context)
    """

    # Owning application (raw name, sanitized on use)
    app_name: str

    # "generic": resource "ably_rule" with rule_type
    # "typed":   resource "ably_rule_<kind>"
    rule_block_style: str = "generic"
    strict_mode: bool = False

    # Resource tracking: terraform type -> identifiers emitted for this app
    emitted_resources: Dict[str, List[str]] = field(default_factory=dict)

    # Rules left out of this app's file
    skipped_rules: int = 0
    unsupported_rule_types: Dict[str, List[str]] = field(default_factory=dict)
    handler_errors: List[Dict[str, Any]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.rule_block_style not in RULE_BLOCK_STYLES:
            raise ValueError(
                f"Rule block style must be one of {RULE_BLOCK_STYLES}, "
                f"got '{self.rule_block_style}'"
            )

    @property
    def app_identifier(self) -> str:
        """Terraform identifier of the owning ``ably_app`` block."""
        return sanitize_name(self.app_name)

    def add_resource(self, terraform_type: str, name: str) -> None:
        """Track a resource that has been emitted.

        Args:
            terraform_type: Terraform resource type (e.g., "ably_queue")
            name: Terraform resource name (sanitized)
        """
        self.emitted_resources.setdefault(terraform_type, []).append(name)

    def resource_exists(self, terraform_type: str, name: str) -> bool:
        return name in self.emitted_resources.get(terraform_type, [])

    def block_counts(self) -> Dict[str, int]:
        return {
            terraform_type: len(names)
            for terraform_type, names in self.emitted_resources.items()
        }

    def record_unsupported_rule(self, rule_type: str, rule_id: str) -> None:
        self.skipped_rules += 1
        self.unsupported_rule_types.setdefault(rule_type, []).append(rule_id)

    def record_handler_error(self, rule_type: str, rule_id: str, error: str) -> None:
        self.skipped_rules += 1
        self.handler_errors.append(
            {"app": self.app_name, "rule": rule_id, "type": rule_type, "error": error}
        )
