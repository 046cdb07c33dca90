"""
Тесты HTTP клиента сервиса промоакций (сессия aiohttp замокана)
"""

import asyncio
import json
import pytest
from unittest.mock import AsyncMock, MagicMock

import aiohttp

from boat_rental.clients.promo_api import UNAVAILABLE_STATUS, PromoApiClient
from boat_rental.config import PromoApiConfig


def make_session(status=200, payload=None, json_error=None):
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=payload, side_effect=json_error)

    session = MagicMock()
    session.closed = False
    session.close = AsyncMock()
    session.post.return_value.__aenter__ = AsyncMock(return_value=response)
    session.post.return_value.__aexit__ = AsyncMock(return_value=False)
    return session


@pytest.mark.asyncio(loop_scope="function")
class TestPromoApiClient:
    """Тесты запросов к сервису проверки кодов."""

    async def test_gift_card_request(self):
        session = make_session(payload={"valid": True, "remainingBalance": 80})
        client = PromoApiClient(base_url="https://promo.example/", session=session)

        response = await client.check_gift_card("GIFT80")

        assert response.ok
        assert response.payload["remainingBalance"] == 80
        url = session.post.call_args.args[0]
        assert url == f"https://promo.example{PromoApiConfig.GIFT_CARD_PATH}"
        assert session.post.call_args.kwargs["json"] == {"code": "GIFT80"}

    async def test_discount_request(self):
        session = make_session(status=404, payload={"valid": False, "error": "not found"})
        client = PromoApiClient(base_url="https://promo.example", session=session)

        response = await client.check_discount_code("NOPE")

        assert response.status == 404
        assert not response.ok
        assert response.message == "not found"
        assert session.post.call_args.args[0].endswith(PromoApiConfig.DISCOUNT_PATH)

    async def test_connection_error(self):
        """Сетевая ошибка - код не найден, исключение не пробрасывается."""
        session = make_session()
        session.post.side_effect = aiohttp.ClientConnectionError("refused")
        client = PromoApiClient(base_url="https://promo.example", session=session)

        response = await client.check_gift_card("GIFT")

        assert response.status == UNAVAILABLE_STATUS
        assert not response.ok

    async def test_timeout(self):
        session = make_session()
        session.post.side_effect = asyncio.TimeoutError()
        client = PromoApiClient(base_url="https://promo.example", session=session)

        response = await client.check_discount_code("SLOW")

        assert response.status == UNAVAILABLE_STATUS

    async def test_non_json_body(self):
        session = make_session(json_error=json.JSONDecodeError("Expecting value", "<html>", 0))
        client = PromoApiClient(base_url="https://promo.example", session=session)

        response = await client.check_gift_card("GIFT")

        assert response.status == 200
        assert response.payload == {}

    async def test_non_dict_body(self):
        session = make_session(payload=["valid"])
        client = PromoApiClient(base_url="https://promo.example", session=session)

        response = await client.check_gift_card("GIFT")

        assert response.payload == {}

    async def test_external_session_not_closed(self):
        session = make_session()

        async with PromoApiClient(base_url="https://promo.example", session=session):
            pass

        session.close.assert_not_awaited()


class TestPromoApiClientConfig:
    """Тесты настройки клиента."""

    def test_missing_base_url(self, monkeypatch):
        monkeypatch.setattr(PromoApiConfig, "BASE_URL", None)

        with pytest.raises(ValueError):
            PromoApiClient()

    def test_base_url_from_config(self, monkeypatch):
        monkeypatch.setattr(PromoApiConfig, "BASE_URL", "https://promo.example/api/")

        client = PromoApiClient(session=make_session())

        assert client.base_url == "https://promo.example/api"
