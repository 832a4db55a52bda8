"""Base handler interfaces for Ably resource handlers.

This module defines the abstract base classes implemented by every handler:

- ResourceHandler converts one Ably entity (app, key, namespace, queue,
  rule) into a Terraform ``resource`` block.
- RuleTargetHandler projects the target of one rule type into the rule's
  ``target`` block. Target handlers are registered by rule type.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, Generic, Optional, Set, Type, TypeVar

from ...models import Rule, RuleTarget
from .context import EmitterContext
from .hcl import HclBlock, RawExpression, reference
from .naming import resource_identifier, sanitize_name

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT")
TargetT = TypeVar("TargetT", bound=RuleTarget)


class ResourceHandler(ABC, Generic[EntityT]):
    """Abstract base class for Ably entity handlers.

    Handlers should be:
    - Stateless: Use EmitterContext for shared state
    - Pure: No network or file I/O
    - Deterministic: The same entity and app always give the same text
    """

    # Terraform resource type this handler emits
    TERRAFORM_TYPE: ClassVar[str] = ""

    @abstractmethod
    def emit(self, entity: EntityT, context: EmitterContext) -> str:
        """Convert an entity to a Terraform resource block.

        Args:
            entity: Parsed Control API record
            context: Shared emitter context for the owning app

        Returns:
            HCL text of one resource block, ending with a newline
        """
        raise NotImplementedError

    # Utility methods available to all handlers

    @staticmethod
    def sanitize_name(name: str) -> str:
        return sanitize_name(name)

    @staticmethod
    def child_identifier(entity_name: str, context: EmitterContext) -> str:
        """Identifier for a resource owned by the context's app."""
        return resource_identifier(context.app_name, entity_name)

    @staticmethod
    def app_reference(context: EmitterContext) -> RawExpression:
        """``ably_app.<app>.id`` for the owning application."""
        return reference("ably_app", context.app_identifier)

    def resource_block(
        self,
        name: str,
        context: EmitterContext,
        terraform_type: Optional[str] = None,
    ) -> HclBlock:
        """Start a resource block and track it in the context."""
        terraform_type = terraform_type or self.TERRAFORM_TYPE
        context.add_resource(terraform_type, name)
        return HclBlock("resource", terraform_type, name)


class RuleTargetHandler(ABC, Generic[TargetT]):
    """Abstract base class for rule target handlers.

    Usage:
        @handler
        class HttpTargetHandler(RuleTargetHandler[HttpTarget]):
            HANDLED_TYPES = {"http"}
            TERRAFORM_TYPE = "ably_rule_http"
            TARGET_MODEL = HttpTarget

            def project_fields(self, target, block):
                block.set("url", target.url)
    """

    # Rule types (the Control API ``ruleType``) handled by this class
    HANDLED_TYPES: ClassVar[Set[str]] = set()

    # Kind-specific resource type used by the "typed" rule block style
    TERRAFORM_TYPE: ClassVar[str] = ""

    # Pydantic model the raw target is validated against
    TARGET_MODEL: ClassVar[Type[RuleTarget]] = RuleTarget

    def parse_target(self, raw_target: Dict[str, Any]) -> TargetT:
        """Validate the raw target mapping.

        Raises:
            pydantic.ValidationError: If a required field is missing or invalid
        """
        return self.TARGET_MODEL.model_validate(raw_target)  # type: ignore[return-value]

    def project(self, rule: Rule) -> HclBlock:
        """Build the ``target`` block for a rule."""
        target = self.parse_target(rule.target)
        block = HclBlock("target")
        self.project_fields(target, block)
        return block

    @abstractmethod
    def project_fields(self, target: TargetT, block: HclBlock) -> None:
        """Set the target-specific attributes and nested blocks on ``block``."""
        raise NotImplementedError

    # Fallbacks for optional fields, which are rendered rather than omitted

    @staticmethod
    def text(value: Optional[str]) -> str:
        return value or ""

    @staticmethod
    def flag(value: Optional[bool]) -> bool:
        return bool(value)
