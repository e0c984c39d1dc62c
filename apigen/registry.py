"""Named component schemas, keyed by their $ref string."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

from .naming import model_name, reference_key
from .schema import SchemaNode, parse_schema


@dataclass(frozen=True)
class ModelDescriptor:
    key: str
    name: str
    schema: SchemaNode


class SchemaRegistry:
    """Read-only map of reference key -> ModelDescriptor.

    Built once from components.schemas; models keep document order.
    """

    def __init__(self, models: list[ModelDescriptor] | None = None) -> None:
        self._by_key: dict[str, ModelDescriptor] = {m.key: m for m in models or []}

    @classmethod
    def from_schemas(cls, schemas: dict[str, Any]) -> SchemaRegistry:
        models = [
            ModelDescriptor(
                key=reference_key(name),
                name=model_name(name),
                schema=parse_schema(raw),
            )
            for name, raw in schemas.items()
        ]
        return cls(models)

    @property
    def models(self) -> list[ModelDescriptor]:
        return list(self._by_key.values())

    def lookup(self, key: str) -> ModelDescriptor | None:
        return self._by_key.get(key)

    def resolve_name(self, key: str) -> str | None:
        """Model name for a $ref key, or None when the key is unknown."""
        model = self._by_key.get(key)
        return model.name if model else None

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def __iter__(self) -> Iterator[ModelDescriptor]:
        return iter(self._by_key.values())

    def __len__(self) -> int:
        return len(self._by_key)
