"""
Pydantic schemas for RTI applications.
Only these validated models are accepted by RTIApplication_crud.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from Login_module.Utils.datetime_utils import to_ist_isoformat
from Validation_module.field_validators import (
    check_full_name,
    check_email,
    check_mobile,
    check_optional_pincode,
    check_optional_rti_query,
    check_optional_address,
    check_address,
    normalize_text,
)
from responses import Pagination


class RTIApplicationBase(BaseModel):
    service_id: int = Field(..., ge=1, description="Service ID")
    state_id: int = Field(..., ge=1, description="State ID")
    full_name: str = Field(..., description="Applicant full name")
    email: str = Field(..., description="Applicant email")
    mobile: str = Field(..., description="10-digit Indian mobile number")
    payment_id: Optional[str] = Field(None, max_length=255)
    order_id: Optional[str] = Field(None, max_length=255)

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

    @field_validator("payment_id", "order_id", mode="before")
    @classmethod
    def validate_payment_refs(cls, v):
        return normalize_text(v)


class RTIApplicationPublicCreate(RTIApplicationBase):
    """Public form submission; query, address and pincode may be filled in later."""
    rti_query: Optional[str] = Field(None, description="RTI query (10-5000 characters)")
    address: Optional[str] = Field(None, description="Postal address")
    pincode: Optional[str] = Field(None, description="6-digit pincode")

    @field_validator("rti_query", mode="before")
    @classmethod
    def validate_rti_query(cls, v):
        return check_optional_rti_query(v)

    @field_validator("address", mode="before")
    @classmethod
    def validate_address(cls, v):
        return check_optional_address(v)

    @field_validator("pincode", mode="before")
    @classmethod
    def validate_pincode(cls, v):
        return check_optional_pincode(v)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "service_id": 1,
                "state_id": 1,
                "full_name": "Asha Verma",
                "email": "asha@example.com",
                "mobile": "9876543210",
                "rti_query": "Please provide the status of my ration card application.",
                "address": "12, Lajpat Nagar, New Delhi",
                "pincode": "110024",
            }
        }
    )


class RTIApplicationCreate(RTIApplicationBase):
    """Submission by a signed-in user; the complete application is required."""
    rti_query: str = Field(..., description="RTI query (10-5000 characters)")
    address: str = Field(..., description="Postal address (10-500 characters)")
    pincode: str = Field(..., description="6-digit pincode")

    @field_validator("rti_query", mode="before")
    @classmethod
    def validate_rti_query(cls, v):
        value = check_optional_rti_query(v)
        if value is None:
            raise ValueError("RTI query is required")
        return value

    @field_validator("address", mode="before")
    @classmethod
    def validate_address(cls, v):
        return check_address(v)

    @field_validator("pincode", mode="before")
    @classmethod
    def validate_pincode(cls, v):
        value = check_optional_pincode(v)
        if value is None:
            raise ValueError("Pincode is required")
        return value


class RTIApplicationUpdate(BaseModel):
    """Partial update of applicant details; status is changed via the status endpoint."""
    full_name: Optional[str] = None
    email: Optional[str] = None
    mobile: Optional[str] = None
    rti_query: Optional[str] = None
    address: Optional[str] = None
    pincode: Optional[str] = None
    payment_id: Optional[str] = Field(None, max_length=255)
    order_id: Optional[str] = Field(None, max_length=255)

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

    @field_validator("rti_query", mode="before")
    @classmethod
    def validate_rti_query(cls, v):
        return check_optional_rti_query(v)

    @field_validator("address", mode="before")
    @classmethod
    def validate_address(cls, v):
        return check_optional_address(v)

    @field_validator("pincode", mode="before")
    @classmethod
    def validate_pincode(cls, v):
        return check_optional_pincode(v)

    @field_validator("payment_id", "order_id", mode="before")
    @classmethod
    def validate_payment_refs(cls, v):
        return normalize_text(v)


class RTIApplicationData(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: Optional[int] = None
    service_id: int
    state_id: int
    full_name: str
    email: str
    mobile: str
    address: Optional[str] = None
    pincode: Optional[str] = None
    rti_query: Optional[str] = None
    status: str
    notes: Optional[str] = None
    payment_id: Optional[str] = None
    order_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_serializer("created_at", "updated_at")
    def serialize_datetime(self, dt: Optional[datetime]):
        return to_ist_isoformat(dt)


class RTIApplicationPage(BaseModel):
    items: List[RTIApplicationData]
    pagination: Pagination


class RTIApplicationResponse(BaseModel):
    success: bool = True
    message: str
    data: RTIApplicationData


class RTIApplicationListResponse(BaseModel):
    success: bool = True
    message: str
    data: RTIApplicationPage
