"""Render the TypeScript client from the template context.

Templates live in apigen/templates. Besides the context, they get four
helpers as globals:
- get_ref(key)                 model name for a $ref key
- render_schema(node)          TypeScript type text for a schema node
- is_empty(value)              None or an empty container
- compare(left, op, right)     ==, ===, !=, !==, <, <=, >, >=, &&, ||
"""

from __future__ import annotations

import json
import operator
import re
from pathlib import Path
from typing import Any, Callable

import jinja2

from .registry import SchemaRegistry
from .schema import SCHEMA_NODE_TYPES, SchemaNode

TEMPLATE_DIR = Path(__file__).parent / "templates"
API_TEMPLATE = "api.ts.j2"
SCHEMA_TEMPLATE = "schema.ts.j2"
CLIENT_TEMPLATE = "client.ts"

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

_PRIMITIVES: dict[str, str] = {
    "string": "string",
    "boolean": "boolean",
    "number": "number",
    "integer": "number",
    "null": "null",
    "any": "any",
}

_COMPARISONS: dict[str, Callable[[Any, Any], Any]] = {
    "==": operator.eq,
    "===": lambda a, b: type(a) is type(b) and a == b,
    "!=": operator.ne,
    "!==": lambda a, b: type(a) is not type(b) or a != b,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
    "&&": lambda a, b: bool(a and b),
    "||": lambda a, b: bool(a or b),
}


def is_empty(value: Any) -> bool:
    """True for None and for containers with nothing in them."""
    if value is None:
        return True
    if isinstance(value, (dict, list, tuple, set)):
        return len(value) == 0
    return False


def compare(left: Any, op: str, right: Any) -> bool:
    """Evaluate a comparison by operator name; unknown operators are false."""
    fn = _COMPARISONS.get(op)
    if fn is None:
        return False
    try:
        return bool(fn(left, right))
    except TypeError:
        return False


def ts_key(name: str) -> str:
    """Quote property names that are not valid TypeScript identifiers."""
    if _IDENTIFIER.match(name):
        return name
    return json.dumps(name)


def ts_primitive(type_name: str) -> str:
    return _PRIMITIVES.get(type_name, "any")


def ts_literal(value: Any) -> str:
    return json.dumps(value)


def doc(text: str | None) -> str:
    """Make text safe for a single-line /** */ comment."""
    if not text:
        return ""
    text = text.replace("*/", "*\\/")
    return " ".join(text.split())


class Renderer:
    """Jinja2 environment bound to one SchemaRegistry."""

    def __init__(self, registry: SchemaRegistry, template_dir: Path = TEMPLATE_DIR) -> None:
        self.registry = registry
        self.env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=jinja2.StrictUndefined,
        )
        self.env.globals.update(
            get_ref=self.get_ref,
            render_schema=self.render_schema,
            is_empty=is_empty,
            compare=compare,
        )
        self.env.filters.update(
            ts_key=ts_key,
            ts_primitive=ts_primitive,
            ts_literal=ts_literal,
            doc=doc,
        )
        self._schema_template = self.env.get_template(SCHEMA_TEMPLATE)

    def get_ref(self, key: str) -> str | None:
        return self.registry.resolve_name(key)

    def render_schema(self, node: SchemaNode | None) -> str:
        """TypeScript type text for a schema node.

        References render as the model name, so self-referencing schemas
        stop at the first $ref instead of recursing.
        """
        if node is None:
            return "any"
        if not isinstance(node, SCHEMA_NODE_TYPES):
            raise TypeError(f"not a schema node: {node!r}")
        return self._schema_template.render(node=node).strip()

    def render(self, context: dict[str, Any]) -> str:
        """Render api.ts for the full context (models + operations)."""
        template = self.env.get_template(API_TEMPLATE)
        return template.render(**context)


def render(context: dict[str, Any]) -> str:
    """Render api.ts using the registry carried in the context."""
    return Renderer(context["registry"]).render(context)


def client_source() -> str:
    """The runtime wrapper written next to api.ts."""
    return (TEMPLATE_DIR / CLIENT_TEMPLATE).read_text(encoding="utf-8")
