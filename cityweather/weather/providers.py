"""날씨 제공자 어댑터입니다. / Weather provider adapters."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict

import httpx

from ..config import ProviderSettings

LOGGER = logging.getLogger("weather.providers")


class WeatherProviderError(Exception):
    """날씨 제공자 오류입니다. / Weather provider error."""


class UpstreamHTTPError(WeatherProviderError):
    """비정상 HTTP 상태 오류입니다. / Non-success upstream HTTP status."""

    def __init__(self, status_code: int, message: str | None = None) -> None:
        self.status_code = status_code
        super().__init__(message or f"Upstream responded with HTTP {status_code}")


class WeatherProvider(ABC):
    """날씨 제공자 인터페이스입니다. / Weather provider interface."""

    def __init__(self, settings: ProviderSettings) -> None:
        self.settings = settings

    @property
    def name(self) -> str:
        """제공자 이름을 돌려줍니다. / Return provider name."""

        return self.settings.name

    async def fetch_weather(self, query: str) -> Dict[str, Any]:
        """도시 날씨를 조회합니다. / Fetch weather for a city query."""

        try:
            payload = await self._fetch_remote(query)
        except UpstreamHTTPError as exc:
            LOGGER.warning(
                "provider_status",
                extra={
                    "provider": self.name,
                    "query": query,
                    "status_code": exc.status_code,
                },
            )
            raise
        except httpx.HTTPError as exc:
            LOGGER.warning(
                "provider_error",
                extra={"provider": self.name, "query": query, "error": str(exc)},
            )
            raise WeatherProviderError(str(exc) or type(exc).__name__) from exc
        return payload

    @abstractmethod
    async def _fetch_remote(self, query: str) -> Dict[str, Any]:
        """원격 데이터를 가져옵니다. / Fetch remote data."""


class BaseHttpProvider(WeatherProvider):
    """HTTP 기반 제공자입니다. / HTTP based provider."""

    path: str = "/weather"

    async def _fetch_remote(self, query: str) -> Dict[str, Any]:
        """HTTP 호출을 실행합니다. / Execute HTTP call."""

        timeout = httpx.Timeout(self.settings.timeout_seconds)
        async with httpx.AsyncClient(
            base_url=self.settings.base_url,
            timeout=timeout,
        ) as client:
            response = await client.get(
                self.path,
                params=self.build_params(query),
                headers={"accept": "application/json"},
            )
        if not response.is_success:
            raise UpstreamHTTPError(response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            raise WeatherProviderError("Upstream returned a non-JSON body") from exc

    @abstractmethod
    def build_params(self, query: str) -> Dict[str, Any]:
        """요청 파라미터를 구성합니다. / Build request parameters."""


class OpenWeatherMapAdapter(BaseHttpProvider):
    """OpenWeatherMap 현재 날씨 어댑터입니다. / OpenWeatherMap current weather adapter."""

    path = "/data/2.5/weather"

    def __init__(self, settings: ProviderSettings) -> None:
        super().__init__(settings)
        if not settings.api_key:
            LOGGER.warning("provider_missing_api_key", extra={"provider": self.name})

    def build_params(self, query: str) -> Dict[str, Any]:
        return {
            "q": query,
            "appid": self.settings.api_key or "",
            "units": self.settings.units,
        }


class RelayAdapter(BaseHttpProvider):
    """릴레이 서버 경유 어댑터입니다. / Adapter going through the relay server."""

    path = "/weather"

    def build_params(self, query: str) -> Dict[str, Any]:
        return {"city": query}


ADAPTER_REGISTRY: Dict[str, type[WeatherProvider]] = {
    "openweathermap": OpenWeatherMapAdapter,
    "relay": RelayAdapter,
}


def create_provider(settings: ProviderSettings) -> WeatherProvider:
    """설정으로 제공자를 만듭니다. / Build provider from settings."""

    try:
        adapter_cls = ADAPTER_REGISTRY[settings.adapter]
    except KeyError as exc:
        raise ValueError(f"Unknown adapter: {settings.adapter}") from exc
    return adapter_cls(settings)
