"""Async HTTP client for the mhimmo API."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any

import httpx

from mhimmo.exceptions import MhImmoError
from mhimmo.persistence.serialization import serialize_value


class ApiError(MhImmoError):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, detail: Any) -> None:
        super().__init__(f"HTTP {status_code}: {detail}")
        self.http_status = status_code
        self.detail = detail


class MhImmoClient:
    """Thin wrapper around ``httpx.AsyncClient``.

    One request per call, no retries. ``login`` stores the returned bearer
    token for later calls.

    Usage::

        async with MhImmoClient("http://localhost:8000") as client:
            await client.login("admin@mhimmo.com", "admin123")
            properties = await client.list_properties()
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)
        self.token = token

    async def __aenter__(self) -> MhImmoClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, json: dict | None = None) -> dict:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        payload = serialize_value(json) if json is not None else None
        r = await self._client.request(method, path, json=payload, headers=headers)
        if r.status_code >= 400:
            try:
                detail = r.json().get("error", r.text)
            except ValueError:
                detail = r.text
            raise ApiError(r.status_code, detail)
        return r.json()

    async def health(self) -> dict:
        return await self._request("GET", "/health")

    async def init(self) -> dict:
        return await self._request("GET", "/init")

    async def login(self, email: str, password: str) -> dict:
        """Authenticate and keep the bearer token; returns the user record."""
        data = await self._request("POST", "/login", {"email": email, "password": password})
        self.token = data["session"]["access_token"]
        return data["user"]

    async def create_user(self, email: str, password: str, name: str, role: str) -> dict:
        body = {"email": email, "password": password, "name": name, "role": role}
        return (await self._request("POST", "/users", body))["user"]

    async def list_users(self) -> list[dict]:
        return (await self._request("GET", "/users"))["users"]

    async def create_property(self, **fields: Any) -> dict:
        return (await self._request("POST", "/properties", fields))["property"]

    async def list_properties(self) -> list[dict]:
        return (await self._request("GET", "/properties"))["properties"]

    async def create_contract(
        self,
        tenant_id: str,
        property_id: str,
        start_date: date,
        rent: Decimal | float,
        deposit: Decimal | float,
        end_date: date | None = None,
    ) -> dict:
        body = {
            "tenant_id": tenant_id,
            "property_id": property_id,
            "start_date": start_date,
            "end_date": end_date,
            "rent": rent,
            "deposit": deposit,
        }
        return (await self._request("POST", "/contracts", body))["contract"]

    async def list_contracts(self) -> list[dict]:
        return (await self._request("GET", "/contracts"))["contracts"]

    async def send_message(self, recipient_id: str, content: str, type: str = "text") -> dict:
        body = {"recipient_id": recipient_id, "content": content, "type": type}
        return (await self._request("POST", "/messages", body))["message"]

    async def get_thread(self, user_id: str) -> list[dict]:
        return (await self._request("GET", f"/messages/{user_id}"))["messages"]
