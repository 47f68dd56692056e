"""Tests for the async API client against the in-process app."""

import asyncio
from datetime import date

import httpx
import pytest

from mhimmo.api import create_app
from mhimmo.bootstrap import bootstrap_store
from mhimmo.client import ApiError, MhImmoClient


def _client() -> MhImmoClient:
    transport = httpx.ASGITransport(app=create_app(store=bootstrap_store()))
    return MhImmoClient("http://testserver", transport=transport)


class TestMhImmoClient:
    """Tests for MhImmoClient."""

    def test_health(self) -> None:
        async def run() -> dict:
            async with _client() as client:
                return await client.health()

        assert asyncio.run(run())["status"] == "OK"

    def test_login_stores_token(self) -> None:
        async def run() -> tuple[dict, str | None]:
            async with _client() as client:
                user = await client.login("admin@mhimmo.com", "admin123")
                return user, client.token

        user, token = asyncio.run(run())

        assert user["id"] == "admin-1"
        assert token

    def test_property_and_contract_flow(self) -> None:
        async def run() -> list[dict]:
            async with _client() as client:
                await client.login("marie.dubois@mhimmo.com", "manager123")
                prop = await client.create_property(
                    address="5 Rue Sainte-Catherine",
                    city="Bordeaux",
                    postal_code="33000",
                    type="studio",
                    price=640,
                    deposit=1280,
                    surface=24,
                    rooms=1,
                )
                await client.create_contract("tenant-2", prop["id"], date(2024, 11, 1), 640, 1280)
                return await client.list_properties()

        properties = asyncio.run(run())

        created = properties[-1]
        assert created["city"] == "Bordeaux"
        assert created["status"] == "occupied"
        assert created["tenant_id"] == "tenant-2"

    def test_messages(self) -> None:
        async def run() -> list[dict]:
            async with _client() as client:
                await client.login("jean.dupont@email.com", "tenant123")
                await client.send_message("manager-1", "La chaudière fonctionne, merci")
                return await client.get_thread("manager-1")

        thread = asyncio.run(run())

        assert thread[-1]["content"] == "La chaudière fonctionne, merci"

    def test_error_raises_api_error(self) -> None:
        async def run() -> None:
            async with _client() as client:
                await client.login("admin@mhimmo.com", "wrong")

        with pytest.raises(ApiError) as exc_info:
            asyncio.run(run())

        assert exc_info.value.http_status == 401
        assert exc_info.value.detail["code"] == "unauthorized"

    def test_unauthenticated_call(self) -> None:
        async def run() -> None:
            async with _client() as client:
                await client.list_contracts()

        with pytest.raises(ApiError, match="HTTP 401"):
            asyncio.run(run())
