"""Cart domain schemas - Pydantic models for cart items"""

from typing import Optional

from pydantic import BaseModel, Field


class ServiceItem(BaseModel):
    """Catalog service as returned by the backend; unknown fields are kept"""

    id: Optional[str] = Field(default=None, alias="_id")
    name: str
    description: Optional[str] = None
    basePrice: Optional[float] = None
    durationMinutes: Optional[int] = None
    heroImage: Optional[str] = None
    badge: Optional[str] = None
    rating: Optional[float] = None

    class Config:
        populate_by_name = True
        extra = "allow"


class CategoryRef(BaseModel):
    """Parent category of a cart item, informational only"""

    id: Optional[str] = Field(default=None, alias="_id")
    name: str

    class Config:
        populate_by_name = True
        extra = "ignore"


class CartItem(BaseModel):
    """One selected service pending checkout"""

    service: ServiceItem
    category: CategoryRef
    quantity: int = Field(default=1, ge=1)
    issueDescription: Optional[str] = None

    @property
    def service_id(self) -> Optional[str]:
        return self.service.id

    @property
    def line_total(self) -> float:
        # Unpriced services are quoted on inspection
        return (self.service.basePrice or 0) * self.quantity


class OrderServiceLine(BaseModel):
    """One entry of the services[] array of a multi-service order"""

    serviceItem: str
    serviceCategory: str
    quantity: int = Field(ge=1)
    issueDescription: str = ""
