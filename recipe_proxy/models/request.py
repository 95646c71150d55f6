from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .parts import InlineData, InlineDataPart, Part, TextPart


class ImagePayload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    mime_type: Optional[str] = None
    data: Optional[str] = None


class RecipeRequest(BaseModel):
    """Body of ``POST /api/generateRecipe``."""

    model_config = ConfigDict(extra="ignore")

    prompt: Optional[str] = None
    image: Optional[ImagePayload] = None

    def to_parts(self) -> List[Part]:
        """Return the content parts in upstream order: text first, then image.

        Empty values are skipped, so the result may be an empty list.
        """

        parts: List[Part] = []
        if self.prompt:
            parts.append(TextPart(text=self.prompt))
        if self.image is not None and self.image.data:
            parts.append(
                InlineDataPart(inline_data=InlineData(mime_type=self.image.mime_type, data=self.image.data))
            )
        return parts
