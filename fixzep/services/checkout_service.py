"""
Checkout Service
Turns the cart into a single multi-service order
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

from ..domain.cart import CartStore
from ..domain.session import SessionStore
from ..exceptions import AuthenticationRequired, ValidationError
from ..schemas import CustomerAddress, OrderPayload, TimeSlot, TimeSlotDay
from .customer_api import CustomerApi, build_payload

logger = logging.getLogger(__name__)


@dataclass
class CheckoutData:
    addresses: list[CustomerAddress]
    slots: list[TimeSlotDay]
    default_address_id: Optional[str]


def pick_default_address(addresses: list[CustomerAddress]) -> Optional[str]:
    """The address flagged as default, else the first one"""
    if not addresses:
        return None
    for address in addresses:
        if address.isDefault:
            return address.id
    return addresses[0].id


class CheckoutService:
    """Service layer for cart checkout"""

    def __init__(self, cart: CartStore, session: SessionStore, api: CustomerApi):
        self.cart = cart
        self.session = session
        self.api = api

    def _require_session(self) -> None:
        if not self.session.is_authenticated():
            raise AuthenticationRequired("Please log in to continue to checkout")

    async def load_checkout_data(self) -> CheckoutData:
        """Fetch addresses and time slots together; empty lists are valid"""
        self._require_session()
        addresses, slots = await asyncio.gather(
            self.api.list_addresses(),
            self.api.list_time_slots(),
        )
        return CheckoutData(
            addresses=addresses,
            slots=slots,
            default_address_id=pick_default_address(addresses),
        )

    async def place_order(
        self,
        address_id: Optional[str],
        slot: Optional[Union[TimeSlot, dict]],
    ) -> dict[str, Any]:
        """Place one order for the whole cart; the cart is cleared only on success"""
        self._require_session()
        if self.cart.is_empty():
            raise ValidationError("Your cart is empty")
        if not address_id:
            raise ValidationError("Please select an address")
        if not slot:
            raise ValidationError("Please select a time slot")
        slot = build_payload(TimeSlot, slot)

        payload = OrderPayload(
            customerAddressId=address_id,
            preferredStart=slot.start,
            preferredEnd=slot.end,
            preferredLabel=slot.label,
            estimatedCost=self.cart.get_total_price(),
            services=self.cart.to_order_services(),
        )

        logger.info(f"🛒 Placing order with {len(payload.services)} services ({self.cart.get_item_count()} units)")
        order = await self.api.place_order(payload)
        self.cart.clear_cart()
        return order
