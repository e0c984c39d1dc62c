"""Collapse array conventions in query parameter names.

Some servers describe array query parameters as several string parameters:

  tags[]                        -> tags: string[]
  filter[].name, filter[].age   -> filter: Array<{ name: string; age?: string }>

Only string parameters are rewritten; everything else passes through.
Output order: passthrough and "[]" parameters as they came, then one
synthesized parameter per "[]." prefix in first-seen order.
"""

from __future__ import annotations

from .schema import ArraySchema, ObjectSchema, PrimitiveSchema, is_string, string_array
from .schema_parser import ParameterDescriptor

ARRAY_SUFFIX = "[]"
OBJECT_ARRAY_MARKER = "[]."


def flatten_query_params(params: list[ParameterDescriptor]) -> list[ParameterDescriptor]:
    """Rewrite "name[]" and "name[].field" string parameters into array parameters."""
    flattened: list[ParameterDescriptor] = []
    objects: dict[str, ObjectSchema] = {}

    for param in params:
        if not is_string(param.schema):
            flattened.append(param)
            continue

        if param.name.endswith(ARRAY_SUFFIX):
            flattened.append(ParameterDescriptor(
                name=param.name[: -len(ARRAY_SUFFIX)],
                location=param.location,
                schema=string_array(param.schema.description),
                required=param.required,
                description=param.description,
            ))
        elif OBJECT_ARRAY_MARKER in param.name:
            # split at the first marker only: "a[].b[].c" -> a, "b[].c"
            prefix, _, prop = param.name.partition(OBJECT_ARRAY_MARKER)
            item = objects.setdefault(prefix, ObjectSchema())
            item.properties[prop] = PrimitiveSchema("string", description=param.description or None)
            if param.required:
                item.required.append(prop)
        else:
            flattened.append(param)

    for prefix, item in objects.items():
        flattened.append(ParameterDescriptor(
            name=prefix,
            location="query",
            schema=ArraySchema(items=item),
            required=True,
            description="",
        ))

    return flattened
