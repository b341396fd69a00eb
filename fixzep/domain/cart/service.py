"""Cart store - Pending multi-service selection before checkout"""

import logging
from typing import Optional, Union

from ...storage import KeyValueStore
from .repository import CartRepository
from .schemas import CartItem, CategoryRef, OrderServiceLine, ServiceItem

logger = logging.getLogger(__name__)


class CartStore:
    """
    Cart state container.

    Every mutation is written through to storage; aggregates are computed
    on read. No operation raises for an absent service id.
    """

    def __init__(self, storage: KeyValueStore, key: str):
        self.repo = CartRepository(storage, key)
        self._items: list[CartItem] = self.repo.load()

    @property
    def items(self) -> list[CartItem]:
        return list(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def get_item(self, service_id: str) -> Optional[CartItem]:
        for item in self._items:
            if item.service_id == service_id:
                return item
        return None

    def _commit(self, items: list[CartItem]) -> None:
        self._items = items
        self.repo.save(items)

    def add_item(
        self,
        service: Union[ServiceItem, dict],
        category: Union[CategoryRef, dict],
    ) -> CartItem:
        """Add a service, or bump its quantity by one if already in the cart"""
        service = ServiceItem.model_validate(service) if isinstance(service, dict) else service
        if isinstance(category, dict):
            category = CategoryRef.model_validate(category)

        updated = list(self._items)
        for index, item in enumerate(updated):
            if item.service_id == service.id:
                updated[index] = item.model_copy(update={"quantity": item.quantity + 1})
                self._commit(updated)
                logger.debug(f"🛒 Incremented {service.id} to {updated[index].quantity}")
                return updated[index]

        new_item = CartItem(service=service, category=category, quantity=1)
        updated.append(new_item)
        self._commit(updated)
        logger.debug(f"🛒 Added {service.id} to cart")
        return new_item

    def remove_item(self, service_id: str) -> None:
        self._commit([item for item in self._items if item.service_id != service_id])

    def update_quantity(self, service_id: str, quantity: int) -> None:
        """Set a quantity; zero or below removes the item"""
        if quantity <= 0:
            self.remove_item(service_id)
            return

        self._commit(
            [
                item.model_copy(update={"quantity": quantity}) if item.service_id == service_id else item
                for item in self._items
            ]
        )

    def update_issue_description(self, service_id: str, text: str) -> None:
        self._commit(
            [
                item.model_copy(update={"issueDescription": text}) if item.service_id == service_id else item
                for item in self._items
            ]
        )

    def clear_cart(self) -> None:
        self._commit([])
        logger.debug("🛒 Cart cleared")

    def get_item_count(self) -> int:
        """Sum of quantities, not the number of distinct services"""
        return sum(item.quantity for item in self._items)

    def get_total_price(self) -> float:
        return sum(item.line_total for item in self._items)

    def to_order_services(self) -> list[OrderServiceLine]:
        """Cart lines in the shape the multi-service order endpoint expects"""
        return [
            OrderServiceLine(
                serviceItem=item.service_id or "",
                serviceCategory=item.category.id or "",
                quantity=item.quantity,
                issueDescription=item.issueDescription or "",
            )
            for item in self._items
        ]
