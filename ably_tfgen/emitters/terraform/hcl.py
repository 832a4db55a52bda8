"""HCL serialization helpers.

Renders Python values as HCL literals and lays out ``resource`` blocks the
way ``terraform fmt`` does (two-space indent, ``=`` aligned across each run
of consecutive attributes). All quoted strings go through ``escape_string``.
"""

import json
from typing import Any, List, Mapping, Sequence, Tuple, Union

_STRING_ESCAPES = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\t", "\\t"),
    # Template sequences would otherwise be interpolated by Terraform
    ("${", "$${"),
    ("%{", "%%{"),
)

INDENT = "  "


class RawExpression:
    """An HCL expression emitted verbatim, e.g. a reference or function call."""

    __slots__ = ("text",)

    def __init__(self, text: str) -> None:
        self.text = text

    def __eq__(self, other: object) -> bool:
        return isinstance(other, RawExpression) and other.text == self.text

    def __repr__(self) -> str:
        return f"RawExpression({self.text!r})"


def escape_string(value: str) -> str:
    """Escape a string for use inside an HCL double-quoted literal.

    Examples:
        >>> escape_string('say "hi"')
        'say \\\\"hi\\\\"'
    """
    for raw, escaped in _STRING_ESCAPES:
        value = value.replace(raw, escaped)
    return value


def quote(value: str) -> str:
    """Render a string as a quoted, escaped HCL literal."""
    return f'"{escape_string(value)}"'


def render_value(value: Any) -> str:
    """Render a Python value as an HCL expression.

    Supports ``None``, booleans, numbers, strings, sequences and mappings
    (recursively) plus ``RawExpression``. Mapping keys are always quoted so
    that arbitrary keys such as channel patterns survive unchanged.

    Raises:
        TypeError: If the value has no HCL literal form
    """
    if isinstance(value, RawExpression):
        return value.text
    if value is None:
        return "null"
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return json.dumps(value)
    if isinstance(value, str):
        return quote(value)
    if isinstance(value, Mapping):
        if not value:
            return "{}"
        items = ", ".join(
            f"{quote(str(key))} = {render_value(item)}" for key, item in value.items()
        )
        return f"{{ {items} }}"
    if isinstance(value, (list, tuple, set, frozenset)):
        values: Sequence[Any] = sorted(value) if isinstance(value, (set, frozenset)) else value
        return "[" + ", ".join(render_value(item) for item in values) + "]"
    raise TypeError(f"Cannot render value of type {type(value).__name__} as HCL")


def reference(resource_type: str, name: str, attribute: str = "id") -> RawExpression:
    """Reference to another resource's attribute, e.g. ``ably_app.x.id``."""
    return RawExpression(f"{resource_type}.{name}.{attribute}")


def jsonencode(value: Any) -> RawExpression:
    """Wrap a value in Terraform's ``jsonencode()``."""
    return RawExpression(f"jsonencode({render_value(value)})")


class HclBlock:
    """A Terraform block with ordered attributes and nested blocks.

    Usage:
        block = HclBlock("resource", "ably_app", "my_app")
        block.set("name", "My App")
        text = block.render()
    """

    def __init__(self, block_type: str, *labels: str) -> None:
        self.block_type = block_type
        self.labels: Tuple[str, ...] = labels
        self._body: List[Union[Tuple[str, Any], "HclBlock"]] = []

    def set(self, name: str, value: Any) -> "HclBlock":
        """Append an attribute; returns self for chaining."""
        self._body.append((name, value))
        return self

    def block(self, block_type: str, *labels: str) -> "HclBlock":
        """Append and return a new nested block."""
        return self.add_block(HclBlock(block_type, *labels))

    def add_block(self, child: "HclBlock") -> "HclBlock":
        self._body.append(child)
        return child

    @property
    def attribute_names(self) -> List[str]:
        return [item[0] for item in self._body if isinstance(item, tuple)]

    @property
    def blocks(self) -> List["HclBlock"]:
        return [item for item in self._body if isinstance(item, HclBlock)]

    def get(self, name: str) -> Any:
        """Return the value of an attribute.

        Raises:
            KeyError: If the attribute is not set
        """
        for item in self._body:
            if isinstance(item, tuple) and item[0] == name:
                return item[1]
        raise KeyError(name)

    def render(self, depth: int = 0) -> str:
        """Render the block as HCL text ending with a newline."""
        return "\n".join(self._render_lines(depth)) + "\n"

    def _render_lines(self, depth: int) -> List[str]:
        pad = INDENT * depth
        header = " ".join([self.block_type, *(quote(label) for label in self.labels)])
        lines = [f"{pad}{header} {{"]

        run: List[Tuple[str, Any]] = []
        for item in self._body:
            if isinstance(item, HclBlock):
                lines.extend(self._render_attributes(run, depth + 1))
                run = []
                lines.extend(item._render_lines(depth + 1))
            else:
                run.append(item)
        lines.extend(self._render_attributes(run, depth + 1))

        lines.append(f"{pad}}}")
        return lines

    @staticmethod
    def _render_attributes(attributes: List[Tuple[str, Any]], depth: int) -> List[str]:
        if not attributes:
            return []
        pad = INDENT * depth
        width = max(len(name) for name, _ in attributes)
        return [
            f"{pad}{name.ljust(width)} = {render_value(value)}"
            for name, value in attributes
        ]


__all__ = [
    "HclBlock",
    "RawExpression",
    "escape_string",
    "jsonencode",
    "quote",
    "reference",
    "render_value",
]
