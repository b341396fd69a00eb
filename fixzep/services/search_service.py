import asyncio
import logging
from typing import Optional

from ..domain.cart.schemas import ServiceItem
from .customer_api import CustomerApi

logger = logging.getLogger(__name__)


class ServiceSearch:
    """
    Catalog search where a newer query cancels the one still in flight.

    Callers awaiting a superseded search get asyncio.CancelledError, so a
    stale result can never overwrite a fresher one.
    """

    def __init__(self, api: CustomerApi):
        self.api = api
        self._pending: Optional[asyncio.Task] = None

    async def search(self, keyword: str) -> list[ServiceItem]:
        keyword = (keyword or "").strip()
        self.cancel()
        if not keyword:
            return []

        task = asyncio.ensure_future(self.api.search_services(keyword))
        self._pending = task
        try:
            return await task
        finally:
            if self._pending is task:
                self._pending = None

    def cancel(self) -> None:
        if self._pending is not None and not self._pending.done():
            logger.debug("🔎 Cancelling superseded service search")
            self._pending.cancel()
        self._pending = None
