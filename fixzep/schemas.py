"""Request payloads and response models for the customer API"""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.cart.schemas import OrderServiceLine
from .shared.validators import require, validate_email, validate_password, validate_phone


class RegisterPayload(BaseModel):
    name: str
    email: str
    phone: str
    password: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return require(v, "Name")

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(require(v, "Email"))

    @field_validator("phone")
    @classmethod
    def validate_phone_field(cls, v):
        return validate_phone(require(v, "Phone"))

    @field_validator("password")
    @classmethod
    def validate_password_field(cls, v):
        return validate_password(v)


class LoginPayload(BaseModel):
    """identifier is an email address or phone number"""

    identifier: str
    password: str

    @field_validator("identifier")
    @classmethod
    def validate_identifier(cls, v):
        return require(v, "Email or phone")

    @field_validator("password")
    @classmethod
    def validate_password_field(cls, v):
        return validate_password(v)


class AddressPayload(BaseModel):
    label: Optional[str] = None
    contactName: str
    phone: str
    line1: str
    line2: Optional[str] = None
    city: str
    state: str
    postalCode: str
    landmark: Optional[str] = None
    isDefault: Optional[bool] = None

    @field_validator("contactName", "phone", "line1", "city", "state", "postalCode")
    @classmethod
    def validate_required(cls, v, info):
        return require(v, info.field_name)


class AddressUpdate(BaseModel):
    label: Optional[str] = None
    contactName: Optional[str] = None
    phone: Optional[str] = None
    line1: Optional[str] = None
    line2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postalCode: Optional[str] = None
    landmark: Optional[str] = None
    isDefault: Optional[bool] = None


class CustomerAddress(BaseModel):
    id: str = Field(alias="_id")
    label: Optional[str] = None
    contactName: Optional[str] = None
    phone: Optional[str] = None
    line1: Optional[str] = None
    line2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postalCode: Optional[str] = None
    landmark: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    isDefault: Optional[bool] = None

    class Config:
        populate_by_name = True
        extra = "allow"


class TimeSlot(BaseModel):
    """One bookable window; start and end are ISO 8601 strings"""

    label: str
    start: str
    end: str
    capacity: Optional[int] = None
    templateId: Optional[str] = None


class TimeSlotDay(BaseModel):
    date: str
    slots: list[TimeSlot] = []


class SlotCheckPayload(BaseModel):
    serviceItem: str
    start: str
    end: str


class OrderPayload(BaseModel):
    """Single-service order, or a cart order carrying services[]"""

    serviceCategory: Optional[str] = None
    serviceItem: Optional[str] = None
    customerAddressId: str
    preferredStart: str
    preferredEnd: str
    preferredLabel: Optional[str] = None
    issueDescription: Optional[str] = None
    estimatedCost: Optional[float] = Field(default=None, ge=0)
    attachments: Optional[list[str]] = None
    services: Optional[list[OrderServiceLine]] = None

    @field_validator("customerAddressId", "preferredStart", "preferredEnd")
    @classmethod
    def validate_required(cls, v, info):
        return require(v, info.field_name)

    @model_validator(mode="after")
    def validate_target(self):
        if not self.services and not self.serviceItem:
            raise ValueError("Order needs a service item or a non-empty services list")
        return self


class PaymentInitPayload(BaseModel):
    orderId: str
    method: Literal["cash", "upi"]
    amount: float = Field(ge=0)


class PaymentConfirmPayload(BaseModel):
    paymentId: str
    transactionRef: str
