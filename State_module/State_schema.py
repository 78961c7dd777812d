import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


class StateFAQ(BaseModel):
    q: str = Field(..., min_length=1)
    a: str = Field(..., min_length=1)


class StateProcessStep(BaseModel):
    step: int = Field(..., ge=1)
    title: str = Field(..., min_length=1)
    description: str = ""


class StateBase(BaseModel):
    description: Optional[str] = None
    languages: Optional[List[str]] = None
    departments: Optional[List[str]] = None
    highlights: Optional[List[str]] = None
    faqs: Optional[List[StateFAQ]] = None
    process_steps: Optional[List[StateProcessStep]] = None
    hero: Optional[Dict[str, Any]] = None
    rti_portal_url: Optional[str] = Field(None, max_length=500)
    commission: Optional[str] = Field(None, max_length=255)
    fee: Optional[str] = Field(None, max_length=50)


class StateCreate(StateBase):
    slug: str = Field(..., min_length=1, max_length=100, description="URL slug, e.g. 'delhi'")
    name: str = Field(..., min_length=1, max_length=150)
    is_active: bool = True

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v):
        v = v.strip().lower()
        if not SLUG_RE.match(v):
            raise ValueError("Slug may contain lowercase letters, digits and hyphens only")
        return v

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v


class StateUpdate(StateBase):
    """All fields optional; only the ones sent are changed."""
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    is_active: Optional[bool] = None

    # Omitting a field leaves it unchanged; an explicit null is rejected
    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v):
        if v is None:
            raise ValueError("Name is required")
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("Name is required")
        return v

    @field_validator("is_active", mode="before")
    @classmethod
    def validate_is_active(cls, v):
        if v is None:
            raise ValueError("is_active must be true or false")
        return v


class StateData(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    slug: str
    name: str
    description: Optional[str] = None
    languages: Optional[List[str]] = None
    departments: Optional[List[str]] = None
    highlights: Optional[List[str]] = None
    faqs: Optional[List[Dict[str, Any]]] = None
    process_steps: Optional[List[Dict[str, Any]]] = None
    hero: Optional[Dict[str, Any]] = None
    rti_portal_url: Optional[str] = None
    commission: Optional[str] = None
    fee: Optional[str] = None
    is_active: bool


class StateResponse(BaseModel):
    success: bool = True
    message: str
    data: StateData


class StateListResponse(BaseModel):
    success: bool = True
    message: str
    data: List[StateData]
