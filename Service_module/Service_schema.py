from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class ServiceData(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    slug: str
    name: str
    description: Optional[str] = None
    price: Optional[float] = None
    is_active: bool


class ServiceResponse(BaseModel):
    success: bool = True
    message: str
    data: ServiceData


class ServiceListResponse(BaseModel):
    success: bool = True
    message: str
    data: List[ServiceData]
