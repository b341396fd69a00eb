import logging
from typing import Any, Optional, Union

from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from ..api_client import ApiClient
from ..domain.cart.schemas import ServiceItem
from ..domain.session import AuthUser, SessionStore
from ..exceptions import ValidationError
from ..schemas import (
    AddressPayload,
    AddressUpdate,
    CustomerAddress,
    LoginPayload,
    OrderPayload,
    PaymentConfirmPayload,
    PaymentInitPayload,
    RegisterPayload,
    SlotCheckPayload,
    TimeSlotDay,
)
from ..shared.validators import require, validate_rating

logger = logging.getLogger(__name__)


def build_payload(model: type[BaseModel], data: Union[BaseModel, dict]) -> BaseModel:
    """Validate input before any request is made"""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except SchemaError as e:
        first = e.errors()[0]
        message = str(first.get("msg", "Invalid input")).removeprefix("Value error, ")
        field = ".".join(str(part) for part in first.get("loc", ()))
        if field and field not in message:
            message = f"{field}: {message}"
        raise ValidationError(message) from e


def _dump(payload: BaseModel) -> dict:
    return payload.model_dump(exclude_none=True)


class CustomerApi:
    """Customer endpoints of the Fixzep backend"""

    PREFIX = "/customer"

    def __init__(self, client: ApiClient, session: SessionStore):
        self.client = client
        self.session = session

    # Auth

    async def register(self, data: Union[RegisterPayload, dict]) -> AuthUser:
        payload = build_payload(RegisterPayload, data)
        logger.info(f"📝 Registering customer {payload.email}")
        result = await self.client.post(f"{self.PREFIX}/auth/register", json=_dump(payload))
        return self.session.login(result)

    async def login(self, data: Union[LoginPayload, dict]) -> AuthUser:
        payload = build_payload(LoginPayload, data)
        result = await self.client.post(f"{self.PREFIX}/auth/login", json=_dump(payload))
        return self.session.login(result)

    def logout(self) -> None:
        """Local only; the backend keeps no server-side session"""
        self.session.logout()

    async def forgot_password(self, identifier: str) -> dict[str, Any]:
        identifier = require(identifier, "Email or phone")
        return await self.client.post(f"{self.PREFIX}/auth/forgot-password", json={"identifier": identifier})

    # Profile

    async def get_profile(self) -> AuthUser:
        return AuthUser.model_validate(await self.client.get(f"{self.PREFIX}/profile"))

    async def update_profile(self, **fields: Any) -> AuthUser:
        result = await self.client.put(f"{self.PREFIX}/profile", json=fields)
        user = AuthUser.model_validate(result)
        self.session.update_user(**user.model_dump(exclude_none=True))
        return user

    # Addresses

    async def list_addresses(self) -> list[CustomerAddress]:
        result = await self.client.get(f"{self.PREFIX}/addresses")
        return [CustomerAddress.model_validate(a) for a in result or []]

    async def create_address(self, data: Union[AddressPayload, dict]) -> CustomerAddress:
        payload = build_payload(AddressPayload, data)
        result = await self.client.post(f"{self.PREFIX}/addresses", json=_dump(payload))
        return CustomerAddress.model_validate(result)

    async def update_address(self, address_id: str, data: Union[AddressUpdate, dict]) -> CustomerAddress:
        payload = build_payload(AddressUpdate, data)
        result = await self.client.put(f"{self.PREFIX}/addresses/{address_id}", json=_dump(payload))
        return CustomerAddress.model_validate(result)

    async def delete_address(self, address_id: str) -> Any:
        return await self.client.delete(f"{self.PREFIX}/addresses/{address_id}")

    async def mark_preferred(self, address_id: str) -> CustomerAddress:
        result = await self.client.post(f"{self.PREFIX}/addresses/{address_id}/preferred", json={})
        return CustomerAddress.model_validate(result)

    # Catalog

    async def list_services(self) -> list[dict[str, Any]]:
        """Categories, each with its services"""
        return await self.client.get(f"{self.PREFIX}/services") or []

    async def get_service_detail(self, service_id: str) -> ServiceItem:
        return ServiceItem.model_validate(await self.client.get(f"{self.PREFIX}/services/{service_id}"))

    async def search_services(self, keyword: str) -> list[ServiceItem]:
        result = await self.client.get(f"{self.PREFIX}/services/search", params={"keyword": keyword})
        return [ServiceItem.model_validate(s) for s in result or []]

    # Scheduling

    async def list_time_slots(self, start_date: Optional[str] = None) -> list[TimeSlotDay]:
        result = await self.client.get(f"{self.PREFIX}/time-slots", params={"startDate": start_date})
        return [TimeSlotDay.model_validate(day) for day in result or []]

    async def check_slot_availability(self, data: Union[SlotCheckPayload, dict]) -> dict[str, Any]:
        payload = build_payload(SlotCheckPayload, data)
        return await self.client.post(f"{self.PREFIX}/time-slots/check", json=_dump(payload))

    # Orders

    async def place_order(self, data: Union[OrderPayload, dict]) -> dict[str, Any]:
        payload = build_payload(OrderPayload, data)
        order = await self.client.post(f"{self.PREFIX}/orders", json=_dump(payload))
        logger.info(f"✅ Order placed: {order.get('_id') if isinstance(order, dict) else order}")
        return order

    async def list_orders(self, status: Optional[str] = None) -> list[dict[str, Any]]:
        return await self.client.get(f"{self.PREFIX}/orders", params={"status": status}) or []

    async def get_order(self, order_id: str) -> dict[str, Any]:
        return await self.client.get(f"{self.PREFIX}/orders/{order_id}")

    async def cancel_order(self, order_id: str, reason: Optional[str] = None) -> dict[str, Any]:
        if reason and len(reason) > 500:
            raise ValidationError("Cancellation reason must be at most 500 characters")
        return await self.client.post(f"{self.PREFIX}/orders/{order_id}/cancel", json={"reason": reason})

    async def rate_order(self, order_id: str, rating: int, comment: Optional[str] = None) -> Any:
        body = {"rating": validate_rating(rating)}
        if comment:
            body["comment"] = comment
        return await self.client.post(f"{self.PREFIX}/orders/{order_id}/rating", json=body)

    async def get_history(self) -> list[dict[str, Any]]:
        return await self.client.get(f"{self.PREFIX}/history") or []

    async def get_invoice(self, order_id: str) -> dict[str, Any]:
        return await self.client.get(f"{self.PREFIX}/orders/{order_id}/invoice")

    # Payments

    async def initialize_payment(self, data: Union[PaymentInitPayload, dict]) -> dict[str, Any]:
        payload = build_payload(PaymentInitPayload, data)
        return await self.client.post(f"{self.PREFIX}/payments", json=_dump(payload))

    async def confirm_payment(self, data: Union[PaymentConfirmPayload, dict]) -> dict[str, Any]:
        payload = build_payload(PaymentConfirmPayload, data)
        return await self.client.post(f"{self.PREFIX}/payments/confirm", json=_dump(payload))

    async def get_payment_status(self, payment_id: str) -> dict[str, Any]:
        return await self.client.get(f"{self.PREFIX}/payments/{payment_id}")
