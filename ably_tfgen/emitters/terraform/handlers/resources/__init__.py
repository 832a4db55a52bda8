"""Handlers for the app-level Ably resources."""

from .api_key import ApiKeyHandler
from .app import AppHandler
from .namespace import NamespaceHandler
from .queue import QueueHandler
from .rule import RuleHandler

__all__ = [
    "ApiKeyHandler",
    "AppHandler",
    "NamespaceHandler",
    "QueueHandler",
    "RuleHandler",
]
