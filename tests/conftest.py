import json

import httpx
import pytest
import pytest_asyncio

from fixzep.config import AUTH_STORAGE_KEY, CART_STORAGE_KEY
from fixzep.domain.cart import CartStore
from fixzep.domain.session import SessionStore
from fixzep.main import create_context
from fixzep.storage import MemoryStore

TAP_REPAIR = {"_id": "svc1", "name": "Tap repair", "basePrice": 139}
FAN_INSTALL = {"_id": "svc2", "name": "Ceiling fan installation", "basePrice": 249, "heroImage": "fan.jpg"}
INSPECTION = {"_id": "svc3", "name": "Leak inspection"}
PLUMBING = {"_id": "cat1", "name": "Plumbing"}
ELECTRICAL = {"_id": "cat2", "name": "Electrical"}

AUTH_RESPONSE = {
    "token": "tok-123",
    "user": {"_id": "u1", "name": "Asha", "email": "asha@example.com", "phone": "9876543210", "role": "customer"},
}


@pytest.fixture
def storage():
    return MemoryStore()


@pytest.fixture
def cart(storage):
    return CartStore(storage, CART_STORAGE_KEY)


@pytest.fixture
def session(storage):
    return SessionStore(storage, AUTH_STORAGE_KEY)


class FakeBackend:
    """Records requests and answers from a route table of (method, path) -> (status, body)"""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def on(self, method, path, status=200, body=None):
        self.routes[(method, path)] = (status, body)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={"success": False, "message": "Not found"})
        status, body = self.routes[key]
        if isinstance(body, Exception):
            raise body
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, content=json.dumps(body).encode(), headers={"Content-Type": "application/json"})

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def backend():
    return FakeBackend()


@pytest_asyncio.fixture
async def context(storage, backend):
    ctx = create_context(
        storage=storage,
        base_url="http://api.test/api",
        transport=httpx.MockTransport(backend),
    )
    yield ctx
    await ctx.aclose()
