"""
HTTP клиент внешнего сервиса проверки подарочных карт и кодов скидки
"""

import asyncio
from typing import Any, Dict, Optional

import aiohttp

from boat_rental.config import PromoApiConfig
from boat_rental.schemas.promotion import GatewayResponse
from boat_rental.utils.logging_config import get_logger

logger = get_logger(__name__)

# Ответ при сетевой ошибке: код считается не найденным в этом пространстве
UNAVAILABLE_STATUS = 503


class PromoApiClient:
    """Проверка кодов через POST {code} на сервис промоакций"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        self.base_url = (base_url or PromoApiConfig.BASE_URL or "").rstrip("/")
        if not self.base_url:
            raise ValueError("Не задан адрес сервиса промоакций (PROMO_API_BASE_URL)")

        self.timeout = aiohttp.ClientTimeout(total=timeout or PromoApiConfig.TIMEOUT)
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> 'PromoApiClient':
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
            logger.debug("Сессия HTTP клиента закрыта")

    async def check_gift_card(self, code: str) -> GatewayResponse:
        return await self._post(PromoApiConfig.GIFT_CARD_PATH, code)

    async def check_discount_code(self, code: str) -> GatewayResponse:
        return await self._post(PromoApiConfig.DISCOUNT_PATH, code)

    async def _post(self, path: str, code: str) -> GatewayResponse:
        url = f"{self.base_url}{path}"
        logger.debug(f"POST {url} | код: {code}")

        try:
            session = self._get_session()
            async with session.post(url, json={"code": code}, timeout=self.timeout) as response:
                payload = await self._read_payload(response)
                logger.info(f"POST {path} | код: {code} | статус: {response.status}")
                return GatewayResponse(status=response.status, payload=payload)

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Сервис промоакций недоступен ({url}): {e!r}")
            return GatewayResponse(status=UNAVAILABLE_STATUS, payload={"error": str(e)})

    @staticmethod
    async def _read_payload(response: aiohttp.ClientResponse) -> Dict[str, Any]:
        """Тело ответа как словарь; не-JSON ответ дает пустой словарь"""
        try:
            data = await response.json(content_type=None)
        except ValueError:
            logger.warning(f"Ответ сервиса промоакций не является JSON (статус {response.status})")
            return {}

        return data if isinstance(data, dict) else {}
