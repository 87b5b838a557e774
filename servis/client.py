"""Async HTTP client for the payment endpoints.

Usage:
    async with PaymentClient("http://localhost:8000") as api:
        await api.login("tech@example.com", "secret")
        await api.create_payment(order_id, {"amount": 150000, "method": "CASH", "status": "PAID"})
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class PaymentAPIError(Exception):
    """Non-2xx response from the payment API."""

    def __init__(self, status_code: int, message: str, payload: dict | None = None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.payload = payload or {}


class PaymentClient:
    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)
        self.token = token

    async def __aenter__(self) -> "PaymentClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _request(self, method: str, path: str, json: dict | None = None) -> dict[str, Any]:
        r = await self._client.request(method, path, json=json, headers=self._headers())
        try:
            payload = r.json()
        except ValueError:
            payload = {}
        if r.is_error:
            message = payload.get("message") or r.reason_phrase
            logger.warning("%s %s failed: %s %s", method, path, r.status_code, message)
            raise PaymentAPIError(r.status_code, message, payload)
        return payload

    async def login(self, email: str, password: str) -> dict[str, Any]:
        """Authenticate and keep the returned session token for later calls."""
        payload = await self._request("POST", "/api/auth/login", {"email": email, "password": password})
        self.token = payload["data"]["token"]
        return payload

    async def get_payment(self, order_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/api/orders/{order_id}/payment")

    async def create_payment(self, order_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", f"/api/orders/{order_id}/payment", data)

    async def update_payment(self, payment_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return await self._request("PUT", f"/api/payments/{payment_id}", data)
