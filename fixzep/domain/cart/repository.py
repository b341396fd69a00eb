"""Cart repository - Persistence of the cart item list"""

import logging

from pydantic import ValidationError as SchemaError

from ...storage import KeyValueStore
from .schemas import CartItem

logger = logging.getLogger(__name__)


class CartRepository:
    """Reads and writes the cart under a single namespace key"""

    def __init__(self, storage: KeyValueStore, key: str):
        self.storage = storage
        self.key = key

    def load(self) -> list[CartItem]:
        """Rehydrate stored items; unreadable data yields an empty cart"""
        stored = self.storage.get(self.key)
        if not stored:
            return []

        raw_items = stored.get("items") if isinstance(stored, dict) else None
        if not isinstance(raw_items, list):
            logger.warning(f"⚠️ Ignoring malformed cart data under '{self.key}'")
            return []

        try:
            items = [CartItem.model_validate(raw) for raw in raw_items]
        except SchemaError as e:
            logger.warning(f"⚠️ Discarding incompatible cart data under '{self.key}': {e}")
            return []

        logger.debug(f"✅ Rehydrated cart with {len(items)} items")
        return items

    def save(self, items: list[CartItem]) -> None:
        payload = {"items": [item.model_dump(mode="json", by_alias=True, exclude_none=True) for item in items]}
        if not self.storage.set(self.key, payload):
            logger.warning(f"⚠️ Cart could not be persisted under '{self.key}'")
