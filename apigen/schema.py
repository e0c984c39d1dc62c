"""Schema nodes parsed from OpenAPI JSON.

A raw schema dict becomes exactly one of:
- ObjectSchema        (type: object / properties)
- ArraySchema         (type: array)
- PrimitiveSchema     (string, boolean, number, integer, null, any)
- RefSchema           ($ref)
- UnionSchema         (oneOf / anyOf)
- IntersectionSchema  (allOf)

References are kept as keys and never expanded here, so cyclic component
schemas parse like any other.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Union

PRIMITIVE_TYPES = ("string", "boolean", "number", "integer", "null", "any")


@dataclass
class ObjectSchema:
    properties: dict[str, SchemaNode] = field(default_factory=dict)
    required: list[str] = field(default_factory=list)
    description: str | None = None

    kind: ClassVar[str] = "object"


@dataclass
class ArraySchema:
    items: SchemaNode
    description: str | None = None

    kind: ClassVar[str] = "array"


@dataclass
class PrimitiveSchema:
    type: str = "any"
    description: str | None = None
    enum: list[Any] | None = None
    format: str | None = None

    kind: ClassVar[str] = "primitive"


@dataclass
class RefSchema:
    ref: str
    description: str | None = None

    kind: ClassVar[str] = "ref"


@dataclass
class UnionSchema:
    members: list[SchemaNode]
    description: str | None = None

    kind: ClassVar[str] = "union"


@dataclass
class IntersectionSchema:
    members: list[SchemaNode]
    description: str | None = None

    kind: ClassVar[str] = "intersection"


SchemaNode = Union[
    ObjectSchema,
    ArraySchema,
    PrimitiveSchema,
    RefSchema,
    UnionSchema,
    IntersectionSchema,
]

SCHEMA_NODE_TYPES = (
    ObjectSchema,
    ArraySchema,
    PrimitiveSchema,
    RefSchema,
    UnionSchema,
    IntersectionSchema,
)


def is_string(node: SchemaNode) -> bool:
    """True for a plain string primitive."""
    return isinstance(node, PrimitiveSchema) and node.type == "string"


def string_array(description: str | None = None) -> ArraySchema:
    return ArraySchema(items=PrimitiveSchema("string"), description=description)


def _parse_members(raw: list[dict[str, Any]]) -> list[SchemaNode]:
    return [parse_schema(member) for member in raw]


def parse_schema(raw: dict[str, Any] | None) -> SchemaNode:
    """Parse a raw OpenAPI schema dict into a SchemaNode."""
    if not raw:
        return PrimitiveSchema("any")

    description = raw.get("description")

    if "$ref" in raw:
        return RefSchema(ref=raw["$ref"], description=description)

    if "oneOf" in raw:
        return UnionSchema(members=_parse_members(raw["oneOf"]), description=description)

    if "anyOf" in raw:
        return UnionSchema(members=_parse_members(raw["anyOf"]), description=description)

    if "allOf" in raw:
        return IntersectionSchema(members=_parse_members(raw["allOf"]), description=description)

    schema_type = raw.get("type")

    # OpenAPI 3.1 allows a list of types, e.g. ["string", "null"]
    if isinstance(schema_type, list):
        rest = {k: v for k, v in raw.items() if k not in ("type", "description")}
        members = [parse_schema({**rest, "type": t}) for t in schema_type]
        if len(members) == 1:
            members[0].description = description
            return members[0]
        return UnionSchema(members=members, description=description)

    if schema_type == "array":
        return ArraySchema(items=parse_schema(raw.get("items")), description=description)

    if schema_type == "object" or "properties" in raw:
        properties = {
            name: parse_schema(prop)
            for name, prop in raw.get("properties", {}).items()
        }
        return ObjectSchema(
            properties=properties,
            required=list(raw.get("required", [])),
            description=description,
        )

    if schema_type in PRIMITIVE_TYPES:
        return PrimitiveSchema(
            type=schema_type,
            description=description,
            enum=raw.get("enum"),
            format=raw.get("format"),
        )

    if "enum" in raw:
        values = raw["enum"]
        inferred = "string" if all(isinstance(v, str) for v in values) else "any"
        return PrimitiveSchema(type=inferred, description=description, enum=values)

    return PrimitiveSchema("any", description=description)
