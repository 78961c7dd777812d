"""
Response envelope shared by every endpoint:
{"success": bool, "message": str, "data": ..., "errors": [...]}
"""
import math
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class FieldError(BaseModel):
    field: Optional[str] = None
    message: str
    value: Any = None


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class MessageResponse(BaseModel):
    """Envelope without a payload (deletes, errors)."""
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    errors: Optional[List[FieldError]] = Field(None, description="Field-level validation errors")


def build_pagination(page: int, limit: int, total: int) -> Dict[str, int]:
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "total_pages": math.ceil(total / limit) if limit else 0,
    }


def error_body(message: str, errors: Optional[List[Dict[str, Any]]] = None, **extra) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    body.update(extra)
    return body
