from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class TextPart(_WireModel):
    text: str


class InlineData(_WireModel):
    mime_type: Optional[str] = None  # e.g., "image/jpeg"
    data: str = Field(..., description="Base64-encoded bytes")


class InlineDataPart(_WireModel):
    inline_data: InlineData


Part = Union[TextPart, InlineDataPart]
