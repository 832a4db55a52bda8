"""Terraform identifier helpers.

Identifiers for child resources are the sanitized app name joined with the
sanitized entity name, so references such as ``ably_app.<app>.id`` resolve
as long as both sides sanitize the same raw app name.
"""

import re

_INVALID_IDENTIFIER_CHARS = re.compile(r"[^a-z0-9_]")


def sanitize_name(name: str) -> str:
    """Sanitize a name for use as a Terraform identifier.

    Lowercases the name and replaces every character outside ``[a-z0-9_]``
    with an underscore. An empty name gives an empty identifier.

    Examples:
        >>> sanitize_name("My App")
        'my_app'
        >>> sanitize_name("Prod-Key.v2")
        'prod_key_v2'
    """
    return _INVALID_IDENTIFIER_CHARS.sub("_", name.lower())


def resource_identifier(app_name: str, entity_name: str) -> str:
    """Identifier of an app-owned resource: ``<app>_<entity>``."""
    return f"{sanitize_name(app_name)}_{sanitize_name(entity_name)}"


__all__ = ["resource_identifier", "sanitize_name"]
