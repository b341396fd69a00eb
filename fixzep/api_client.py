"""
Authenticated HTTP client for the Fixzep backend

Request pipeline:
- pre-request hook attaches the session token as a bearer credential
- post-response hook clears the session on 401
- failures are raised to the caller as ApiError, never retried or swallowed
- {data, message} envelopes are unwrapped to their data
"""
import logging
from typing import Any, Optional

import httpx

from . import config
from .domain.session import SessionStore
from .exceptions import ApiError, UnauthorizedError

logger = logging.getLogger(__name__)


def unwrap(payload: Any) -> Any:
    """Return the inner data of an enveloped body, or the body unchanged"""
    if isinstance(payload, dict) and "data" in payload:
        return payload["data"]
    return payload


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class ApiClient:
    """Thin request pipeline over httpx.AsyncClient"""

    def __init__(
        self,
        session: SessionStore,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.session = session
        self.base_url = config.normalize_base_url(base_url or config.API_BASE_URL)
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Content-Type": "application/json"},
            timeout=timeout if timeout is not None else config.HTTP_TIMEOUT,
            transport=transport,
            event_hooks={
                "request": [self._attach_token],
                "response": [self._handle_unauthorized],
            },
        )

    async def _attach_token(self, request: httpx.Request) -> None:
        token = self.session.token
        if token:
            request.headers["Authorization"] = f"Bearer {token}"

    async def _handle_unauthorized(self, response: httpx.Response) -> None:
        if response.status_code == 401:
            logger.warning(f"🔒 401 from {response.request.method} {response.request.url.path}, logging out")
            self.session.logout()

    async def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        """Send a request and return the unwrapped JSON payload"""
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        try:
            response = await self.client.request(method, path, json=json, params=params or None)
        except httpx.RequestError as e:
            logger.error(f"❌ {method} {path} failed: {e!r}")
            raise ApiError(f"Network error: {e}") from e

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            body = _decode_body(response)
            message = body.get("message") if isinstance(body, dict) else None
            message = message or f"HTTP {response.status_code}"
            logger.error(f"❌ {method} {path} returned {response.status_code}: {message}")
            error_cls = UnauthorizedError if response.status_code == 401 else ApiError
            raise error_cls(message, status_code=response.status_code, payload=body) from e

        return unwrap(_decode_body(response))

    async def get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Any = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
