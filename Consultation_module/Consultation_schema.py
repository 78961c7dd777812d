"""
Pydantic schemas for the consultation form.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from Login_module.Utils.datetime_utils import to_ist_isoformat
from Validation_module.field_validators import (
    check_full_name,
    check_email,
    check_mobile,
    check_optional_address,
    check_optional_pincode,
    check_optional_slug,
    normalize_text,
)
from responses import Pagination
from .Consultation_model import DEFAULT_SOURCE


class ConsultationCreate(BaseModel):
    """Request body for a consultation. Only name, email and mobile are required."""

    full_name: str = Field(..., description="Full name")
    email: str = Field(..., description="Email address")
    mobile: str = Field(..., description="10-digit Indian mobile number")
    address: Optional[str] = Field(None, description="Address (optional)")
    pincode: Optional[str] = Field(None, description="6-digit pincode (optional)")
    state_slug: Optional[str] = Field(None, description="State page the form was sent from")
    source: str = Field(DEFAULT_SOURCE, description="Form placement, defaults to hero_section")

    @field_validator("full_name", mode="before")
    @classmethod
    def validate_full_name(cls, v):
        return check_full_name(v)

    @field_validator("email", mode="before")
    @classmethod
    def validate_email(cls, v):
        return check_email(v)

    @field_validator("mobile", mode="before")
    @classmethod
    def validate_mobile(cls, v):
        return check_mobile(v)

    @field_validator("address", mode="before")
    @classmethod
    def validate_address(cls, v):
        return check_optional_address(v)

    @field_validator("pincode", mode="before")
    @classmethod
    def validate_pincode(cls, v):
        return check_optional_pincode(v)

    @field_validator("state_slug", mode="before")
    @classmethod
    def validate_state_slug(cls, v):
        return check_optional_slug(v)

    @field_validator("source", mode="before")
    @classmethod
    def validate_source(cls, v):
        v = normalize_text(v)
        if v is None:
            return DEFAULT_SOURCE
        if len(v) > 50:
            raise ValueError("Source must be at most 50 characters")
        return v

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "full_name": "Rahul Sharma",
                "email": "rahul@example.com",
                "mobile": "9876543210",
                "state_slug": "delhi",
                "source": "hero_section",
            }
        }
    )


class ConsultationData(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    full_name: str
    email: str
    mobile: str
    address: Optional[str] = None
    pincode: Optional[str] = None
    state_slug: Optional[str] = None
    source: str
    status: str
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_serializer("created_at", "updated_at")
    def serialize_datetime(self, dt: Optional[datetime]):
        return to_ist_isoformat(dt)


class ConsultationPage(BaseModel):
    items: List[ConsultationData]
    pagination: Pagination


class ConsultationResponse(BaseModel):
    success: bool = True
    message: str
    data: ConsultationData


class ConsultationListResponse(BaseModel):
    success: bool = True
    message: str
    data: ConsultationPage
