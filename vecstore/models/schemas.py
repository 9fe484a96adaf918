from __future__ import annotations

import copy
from types import MappingProxyType
from typing import Any, Dict, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class Document(BaseModel):
    """
    Text plus metadata; ``score`` is filled in on query results only.

    ``metadata`` is a read-only view over a deep copy of the input: keys
    cannot be added, replaced or removed, and later changes to the caller's
    dict do not reach the document. Nested containers are plain copies.
    """

    model_config = ConfigDict(frozen=True)

    page_content: str = Field(..., description="Document text that gets embedded")
    metadata: Mapping[str, Any] = Field(
        default_factory=dict,
        validate_default=True,
        description="Arbitrary JSON-compatible metadata",
    )
    score: float = Field(default=0.0, description="Cosine distance to the query; smaller is closer")

    @field_validator("metadata", mode="after")
    @classmethod
    def _read_only_metadata(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(copy.deepcopy(dict(value)))

    @field_serializer("metadata")
    def _serialize_metadata(self, value: Mapping[str, Any]) -> Dict[str, Any]:
        return copy.deepcopy(dict(value))


__all__ = ["Document"]
