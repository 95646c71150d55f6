from __future__ import annotations

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """Error envelope returned for every non-2xx response: ``{"error": {"message": ...}}``."""

    error: ErrorDetail

    @classmethod
    def of(cls, message: str) -> "ErrorResponse":
        return cls(error=ErrorDetail(message=message))
