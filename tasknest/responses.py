"""
TASKNEST API - Response Envelope

All endpoints answer with {"success": true, "data": ...} or
{"success": false, "error": "..."}.
"""

from typing import Generic, TypeVar

from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field


DataT = TypeVar("DataT")


class ApiResponse(BaseModel, Generic[DataT]):
    """Successful response wrapper."""

    success: bool = True
    data: DataT


class ErrorResponse(BaseModel):
    """Failed response wrapper."""

    success: bool = False
    error: str = Field(description="Human readable error message")


class MessageData(BaseModel):
    message: str


class DeletedData(BaseModel):
    id: str


def error_response(
    status_code: int,
    message: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build a JSON error response in the standard envelope."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
        headers=headers,
    )
