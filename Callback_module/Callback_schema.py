from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from Login_module.Utils.datetime_utils import to_ist_isoformat
from Validation_module.field_validators import check_mobile, check_optional_slug
from responses import Pagination


class CallbackRequestCreate(BaseModel):
    phone: str = Field(..., description="10-digit Indian mobile number")
    state_slug: Optional[str] = Field(None, description="State page the request came from")

    @field_validator("phone", mode="before")
    @classmethod
    def validate_phone(cls, v):
        return check_mobile(v)

    @field_validator("state_slug", mode="before")
    @classmethod
    def validate_state_slug(cls, v):
        return check_optional_slug(v)

    model_config = ConfigDict(
        json_schema_extra={"example": {"phone": "9876543210", "state_slug": "delhi"}}
    )


class CallbackRequestData(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    phone: str
    state_slug: Optional[str] = None
    status: str
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_serializer("created_at", "updated_at")
    def serialize_datetime(self, dt: Optional[datetime]):
        return to_ist_isoformat(dt)


class CallbackRequestPage(BaseModel):
    items: List[CallbackRequestData]
    pagination: Pagination


class CallbackRequestResponse(BaseModel):
    success: bool = True
    message: str
    data: CallbackRequestData


class CallbackRequestListResponse(BaseModel):
    success: bool = True
    message: str
    data: CallbackRequestPage
