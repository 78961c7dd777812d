"""
Status handling shared by the intake resources.
Each resource defines a closed str Enum of statuses; records start at
"pending" and only admins move them, to any status in the set.
"""
import enum
from typing import Optional, Type, TypeVar

from fastapi import HTTPException, status
from pydantic import BaseModel, Field, field_validator

E = TypeVar("E", bound=enum.Enum)

NOTES_MAX_LENGTH = 2000


class StatusUpdateRequest(BaseModel):
    status: str = Field(..., description="New status")
    notes: Optional[str] = Field(None, max_length=NOTES_MAX_LENGTH, description="Internal notes")

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        v = v.strip().lower()
        if not v:
            raise ValueError("Status is required")
        return v

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, v):
        if v is None:
            return None
        return v.strip() or None


def parse_status(status_enum: Type[E], value: str) -> E:
    """Resolve value to a member of status_enum or answer 400 Invalid status."""
    try:
        return status_enum(value)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": "Invalid status",
                "errors": [{
                    "field": "status",
                    "message": f"Status must be one of: {', '.join(s.value for s in status_enum)}",
                    "value": value,
                }],
            },
        )
