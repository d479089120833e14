"""Unified API response wrapper.

All API endpoints return this format:
{
    "success": true,     // false on error
    "data": { ... },     // null on error
    "error": null        // message on error
}
"""

from typing import Any

from pydantic import BaseModel


class ApiResponse(BaseModel):
    success: bool = True
    data: Any = None
    error: str | None = None


def success_response(data: Any = None) -> ApiResponse:
    return ApiResponse(success=True, data=data, error=None)


def error_response(message: str) -> ApiResponse:
    return ApiResponse(success=False, data=None, error=message)
