"""Handler registry for rule type dispatch.

This module provides the HandlerRegistry class that manages registration
and lookup of rule target handlers by Control API ``ruleType``.
"""

import logging
from typing import Dict, List, Optional, Type

from ....models import RuleType
from ..base_handler import RuleTargetHandler

logger = logging.getLogger(__name__)


class HandlerRegistry:
    """Registry for rule target handlers with type-based dispatch.

    Usage:
        @handler
        class MyHandler(RuleTargetHandler):
            HANDLED_TYPES = {"http"}
            ...

        # Later:
        target_handler = HandlerRegistry.get_handler("http")
        if target_handler:
            block = target_handler.project(rule)
    """

    _handlers: List[Type[RuleTargetHandler]] = []
    _type_cache: Dict[str, Type[RuleTargetHandler]] = {}

    @classmethod
    def register(
        cls, handler_class: Type[RuleTargetHandler]
    ) -> Type[RuleTargetHandler]:
        """Register a handler class.

        Args:
            handler_class: Handler class to register

        Returns:
            The handler class (unchanged)
        """
        if handler_class not in cls._handlers:
            cls._handlers.append(handler_class)

            for rule_type in handler_class.HANDLED_TYPES:
                cls._type_cache[rule_type] = handler_class
                logger.debug(
                    f"Registered handler {handler_class.__name__} for {rule_type}"
                )

        return handler_class

    @classmethod
    def get_handler(cls, rule_type: str) -> Optional[RuleTargetHandler]:
        """Get handler instance for a rule type.

        Args:
            rule_type: Control API rule type (e.g., "aws/lambda")

        Returns:
            Handler instance or None if no handler registered
        """
        handler_class = cls._type_cache.get(rule_type)
        return handler_class() if handler_class is not None else None

    @classmethod
    def get_all_supported_types(cls) -> List[str]:
        """Get all rule types supported by registered handlers."""
        types = set()
        for handler_class in cls._handlers:
            types.update(handler_class.HANDLED_TYPES)
        return sorted(types)

    @classmethod
    def get_all_handlers(cls) -> List[Type[RuleTargetHandler]]:
        return cls._handlers.copy()


def handler(cls: Type[RuleTargetHandler]) -> Type[RuleTargetHandler]:
    """Decorator to register a rule target handler class."""
    return HandlerRegistry.register(cls)


def _register_all_handlers() -> None:
    """Import all handler modules to trigger registration."""
    from .rules import amqp, aws, functions, http, streaming, zapier  # noqa: F401

    missing = sorted(
        {rule_type.value for rule_type in RuleType}
        - set(HandlerRegistry.get_all_supported_types())
    )
    if missing:
        logger.error(f"No rule target handler registered for: {missing}")

    logger.debug(
        f"Registered {len(HandlerRegistry._handlers)} handlers "
        f"covering {len(HandlerRegistry.get_all_supported_types())} rule types"
    )


_handlers_registered = False


def ensure_handlers_registered() -> None:
    """Ensure all handlers are registered.

    Called lazily on first use by the emitter.
    """
    global _handlers_registered
    if not _handlers_registered:
        _register_all_handlers()
        _handlers_registered = True


__all__ = ["HandlerRegistry", "ensure_handlers_registered", "handler"]
