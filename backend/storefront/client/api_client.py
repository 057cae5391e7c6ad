"""Storefront Client — async HTTP client for the storefront API, used by UI components.

Invariants:
    - Mutations return ApiResult (never raise on 4xx/5xx): the envelope is the contract
    - Transport failures and non-JSON bodies raise ClientRequestError
    - No retries: every failure is surfaced once

Design Decisions:
    - Wrapper over raw httpx.AsyncClient: components depend on domain calls,
      not URLs
    - Accepts an injected httpx client or transport: tests drive it with
      MockTransport or ASGITransport
"""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from storefront.core.errors import ClientRequestError

logger = logging.getLogger(__name__)

CATEGORIES_PATH = "/api/dashboard/categories"
MESSAGES_PATH = "/api/dashboard/messages"
SEARCH_PATH = "/api/public/products/search"


@dataclass
class ApiResult:
    """Decoded response envelope of a mutation."""
    ok: bool
    status_code: int
    message: str | None = None
    error: str | None = None
    data: Any = None


class StorefrontClient:
    """Domain-level calls against the storefront API."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        *,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url, timeout=timeout_seconds, transport=transport,
        )

    async def __aenter__(self) -> "StorefrontClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ─── Catalog ─────────────────────────────────────────────────

    async def search_products(self, term: str) -> list[dict]:
        """Products matching `term`; raises ClientRequestError on any failure."""
        response, body = await self._request(
            "GET", SEARCH_PATH, params={"query": term},
        )
        if response.is_error or not isinstance(body, list):
            raise ClientRequestError(
                f"Product search returned {response.status_code}",
            )
        return body

    async def list_categories(self) -> list[dict]:
        response, body = await self._request("GET", CATEGORIES_PATH)
        if response.is_error or not isinstance(body, list):
            raise ClientRequestError(
                f"Category listing returned {response.status_code}",
            )
        return body

    # ─── Mutations ───────────────────────────────────────────────

    async def create_category(
        self, name: str, code: str, image_url: str,
    ) -> ApiResult:
        response, body = await self._request(
            "POST", CATEGORIES_PATH,
            json={"name": name, "code": code, "imageUrl": image_url},
        )
        return self._envelope(response, body, "category")

    async def send_message(
        self, name: str, email: str, title: str, content: str,
    ) -> ApiResult:
        response, body = await self._request(
            "POST", MESSAGES_PATH,
            json={"name": name, "email": email, "title": title, "content": content},
        )
        return self._envelope(response, body, "contactMessage")

    # ─── Plumbing ────────────────────────────────────────────────

    async def _request(
        self, method: str, path: str, **kwargs: Any,
    ) -> tuple[httpx.Response, Any]:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ClientRequestError(f"{method} {path} failed: {e}") from e
        try:
            body = response.json()
        except ValueError as e:
            raise ClientRequestError(
                f"{method} {path} returned a non-JSON body "
                f"({response.status_code})",
            ) from e
        return response, body

    @staticmethod
    def _envelope(response: httpx.Response, body: Any, entity_key: str) -> ApiResult:
        if not isinstance(body, dict):
            raise ClientRequestError(
                f"Unexpected response shape ({response.status_code})",
            )
        return ApiResult(
            ok=response.is_success,
            status_code=response.status_code,
            message=body.get("message"),
            error=body.get("error"),
            data=body.get(entity_key),
        )
