"""Ably Control API access."""

from .client import ControlApiClient

__all__ = ["ControlApiClient"]
