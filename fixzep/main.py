import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from . import config
from .api_client import ApiClient
from .domain.cart import CartStore
from .domain.session import SessionStore
from .services.checkout_service import CheckoutService
from .services.customer_api import CustomerApi
from .services.search_service import ServiceSearch
from .storage import KeyValueStore, create_store

logger = logging.getLogger(__name__)


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=level or config.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # Reduce verbosity of third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@dataclass
class ClientContext:
    """Wired set of stores and services sharing one storage and one session"""

    storage: KeyValueStore
    session: SessionStore
    cart: CartStore
    client: ApiClient
    api: CustomerApi
    checkout: CheckoutService
    search: ServiceSearch

    async def aclose(self) -> None:
        await self.client.aclose()


def create_context(
    storage: Optional[KeyValueStore] = None,
    base_url: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ClientContext:
    """Build stores from storage (rehydrating them) and the services on top"""
    storage = storage if storage is not None else create_store()
    session = SessionStore(storage, config.AUTH_STORAGE_KEY)
    cart = CartStore(storage, config.CART_STORAGE_KEY)
    client = ApiClient(session, base_url=base_url, transport=transport)
    api = CustomerApi(client, session)

    logger.info(
        f"🚀 Client ready (api={client.base_url}, authenticated={session.is_authenticated()}, "
        f"cart_items={cart.get_item_count()})"
    )
    return ClientContext(
        storage=storage,
        session=session,
        cart=cart,
        client=client,
        api=api,
        checkout=CheckoutService(cart, session, api),
        search=ServiceSearch(api),
    )
