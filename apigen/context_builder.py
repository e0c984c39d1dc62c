"""Build the Jinja2 template context from a parsed OpenAPI document.

Names every component schema once (SchemaRegistry), turns each
(path, method, operation) into an OperationDescriptor, and assembles the
context dict for api.ts.j2.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any

from .loader import get_paths, get_schemas
from .naming import mangle, operation_name
from .query_params import flatten_query_params
from .registry import SchemaRegistry
from .schema_parser import (
    JsonResponse,
    ParameterDescriptor,
    RequestBodyDescriptor,
    get_json_response,
    parse_parameters,
    parse_request_body,
)

logger = logging.getLogger(__name__)

# Keys of a path item that are operations; anything else (parameters,
# summary, servers, x-*) is not.
HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

_PATH_TOKEN = re.compile(r"\{(.*?)\}")


@dataclass
class OperationDescriptor:
    name: str
    display_name: str
    method: str
    path: str
    raw_path: str
    summary: str = ""
    description: str = ""
    tags: list[str] = field(default_factory=list)
    deprecated: bool = False
    path_params: list[ParameterDescriptor] = field(default_factory=list)
    query_params: list[ParameterDescriptor] = field(default_factory=list)
    headers: list[ParameterDescriptor] = field(default_factory=list)
    request_body: RequestBodyDescriptor = field(default_factory=RequestBodyDescriptor)
    has_params: bool = False
    query_params_required: bool = False
    headers_required: bool = False
    request_body_required: bool = True
    responses: dict[str, Any] = field(default_factory=dict)
    json_response: JsonResponse = field(default_factory=JsonResponse)


def rewrite_path(path: str) -> str:
    """Turn /pets/{petId} into the template literal /pets/${params.path.petId}."""
    return _PATH_TOKEN.sub(r"${params.path.\1}", path)


def build_operation(path: str, method: str, operation: dict[str, Any]) -> OperationDescriptor:
    """Normalize one operation of the document."""
    groups = parse_parameters(operation)
    query_params = flatten_query_params(groups.query)
    request_body = parse_request_body(operation)
    json_response = get_json_response(operation, method, path)

    name = operation_name(method, path, operation.get("operationId"))
    param_count = len(groups.path) + len(query_params) + len(groups.header)

    return OperationDescriptor(
        name=name,
        display_name=mangle(name),
        method=method,
        path=rewrite_path(path),
        raw_path=path,
        summary=operation.get("summary") or "",
        description=operation.get("description") or "",
        tags=list(operation.get("tags") or []),
        deprecated=bool(operation.get("deprecated", False)),
        path_params=groups.path,
        query_params=query_params,
        headers=groups.header,
        request_body=request_body,
        has_params=param_count > 0 or request_body.schema is not None,
        query_params_required=any(p.required for p in query_params),
        headers_required=any(p.required for p in groups.header),
        # Always true, whether or not there is a body.
        request_body_required=True,
        responses=operation.get("responses") or {},
        json_response=json_response,
    )


def build_operations(spec: dict[str, Any]) -> list[OperationDescriptor]:
    """Every operation of the document, in document order."""
    operations: list[OperationDescriptor] = []
    for path, path_item in get_paths(spec).items():
        for method, operation in path_item.items():
            if method not in HTTP_METHODS:
                continue
            operations.append(build_operation(path, method, operation))
    return operations


def build_context(spec: dict[str, Any]) -> dict[str, Any]:
    """Build the full template context from the OpenAPI document."""
    registry = SchemaRegistry.from_schemas(get_schemas(spec))
    operations = build_operations(spec)
    info = spec.get("info") or {}

    logger.debug("Built %d operations and %d models", len(operations), len(registry))

    return {
        "registry": registry,
        "models": registry.models,
        "operations": operations,
        "operation_count": len(operations),
        "title": info.get("title", ""),
        "version": info.get("version", "unknown"),
    }
