from .errors import ErrorDetail, ErrorResponse
from .parts import InlineData, InlineDataPart, Part, TextPart
from .request import ImagePayload, RecipeRequest

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "InlineData",
    "InlineDataPart",
    "Part",
    "TextPart",
    "ImagePayload",
    "RecipeRequest",
]
