"""Convert paths, operation ids and schema names to TypeScript identifiers.

Pattern: split on { } _ / . - and join the pieces in camel case.
  - operation names       -> lowerCamel (first piece lowercased)
  - display / type names  -> UpperCamel
  - model names           -> UpperCamel + "Model"

Examples:
  mangle("user_profile/get", True)        -> userProfileGet
  mangle("Pet-Store.id")                  -> PetStoreId
  mangle("/pets/{petId}/get", True)       -> petsPetIdGet
  model_name("pet_category")              -> PetCategoryModel
"""

from __future__ import annotations

import re

_SEPARATORS = re.compile(r"[{}_/.\-]")

SCHEMA_REF_PREFIX = "#/components/schemas/"


def _upper_first(segment: str) -> str:
    return segment[0].upper() + segment[1:]


def _lower_first(segment: str) -> str:
    return segment[0].lower() + segment[1:]


def split_segments(value: str) -> list[str]:
    """Split a name on the separator set, dropping empty pieces."""
    return [s for s in _SEPARATORS.split(value) if s]


def mangle(value: str, first_lowercase: bool = False) -> str:
    """Build a camel-case identifier from a path, id or schema name.

    Raises ValueError when nothing but separators is left.
    """
    segments = split_segments(value)
    if not segments:
        raise ValueError(f"cannot build an identifier from {value!r}")

    head = _lower_first(segments[0]) if first_lowercase else _upper_first(segments[0])
    return head + "".join(_upper_first(s) for s in segments[1:])


def model_name(schema_name: str) -> str:
    """Type name emitted for a schema under components.schemas."""
    return mangle(schema_name) + "Model"


def reference_key(schema_name: str) -> str:
    """The $ref string that points at a named component schema."""
    return f"{SCHEMA_REF_PREFIX}{schema_name}"


def operation_name(method: str, path: str, operation_id: str | None = None) -> str:
    """Function name for an operation: its operationId, else path + method."""
    if operation_id:
        return mangle(operation_id, True)
    return mangle(f"{path}/{method}", True)
