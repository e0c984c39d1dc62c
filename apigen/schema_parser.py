"""Extract parameters, request bodies and responses from OpenAPI operations.

Handles:
- Path / query / header parameters (cookie parameters are ignored)
- Request body (application/json, multipart/form-data; multipart wins)
- The 200 response's application/json schema
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .errors import DocumentError
from .schema import SchemaNode, parse_schema

PARAMETER_LOCATIONS = ("path", "query", "header")

JSON_CONTENT = "application/json"
MULTIPART_CONTENT = "multipart/form-data"


@dataclass
class ParameterDescriptor:
    name: str
    location: str
    schema: SchemaNode
    required: bool = False
    description: str = ""


@dataclass
class RequestBodyDescriptor:
    content_type: str = ""
    schema: SchemaNode | None = None


@dataclass
class JsonResponse:
    description: str = ""
    schema: SchemaNode | None = None


@dataclass
class ParameterGroups:
    path: list[ParameterDescriptor] = field(default_factory=list)
    query: list[ParameterDescriptor] = field(default_factory=list)
    header: list[ParameterDescriptor] = field(default_factory=list)


def parse_parameter(raw: dict[str, Any]) -> ParameterDescriptor:
    """Parse one entry of an operation's parameters list."""
    return ParameterDescriptor(
        name=raw["name"],
        location=raw["in"],
        schema=parse_schema(raw.get("schema")),
        required=bool(raw.get("required", False)),
        description=raw.get("description") or "",
    )


def parse_parameters(operation: dict[str, Any]) -> ParameterGroups:
    """Partition an operation's parameters by location, in document order."""
    groups = ParameterGroups()
    for raw in operation.get("parameters") or []:
        # skips $ref entries (no "in") and cookie parameters
        if raw.get("in") not in PARAMETER_LOCATIONS:
            continue
        param = parse_parameter(raw)
        getattr(groups, param.location).append(param)
    return groups


def parse_request_body(operation: dict[str, Any]) -> RequestBodyDescriptor:
    """Pick the request body schema: JSON first, then multipart overwrites it."""
    body = RequestBodyDescriptor()
    content = (operation.get("requestBody") or {}).get("content") or {}

    for content_type in (JSON_CONTENT, MULTIPART_CONTENT):
        if content_type not in content:
            continue
        entry = content[content_type] or {}
        body.content_type = content_type
        body.schema = parse_schema(entry["schema"]) if "schema" in entry else None

    return body


def get_json_response(operation: dict[str, Any], method: str, path: str) -> JsonResponse:
    """Read the 200 response. Operations without one cannot be generated."""
    responses = operation.get("responses") or {}
    success = responses.get("200")
    if success is None:
        raise DocumentError(
            f"{method.upper()} {path} has no '200' response; "
            "only operations with a 200 response can be generated"
        )

    content = success.get("content") or {}
    json_content = content.get(JSON_CONTENT)
    schema = None
    if json_content is not None and "schema" in json_content:
        schema = parse_schema(json_content["schema"])

    return JsonResponse(description=success.get("description") or "", schema=schema)
