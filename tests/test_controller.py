"""조회 컨트롤러 테스트입니다. / Lookup controller tests."""

from __future__ import annotations

from typing import Any, Dict, List

import httpx
import pytest

from cityweather.lookup.controller import (
    LookupController,
    LookupFailure,
    LookupResult,
    LookupState,
)
from cityweather.weather.normalize import normalize
from cityweather.weather.providers import UpstreamHTTPError, WeatherProviderError

TOKYO_PAYLOAD = {
    "name": "Tokyo",
    "main": {"temp": 24.5, "feels_like": 25.49, "humidity": 71},
    "wind": {"speed": 4.12},
    "weather": [{"main": "Clouds", "description": "broken clouds"}],
}


class FakeFetch:
    """호출 횟수를 세는 가짜 수집기입니다. / Call-counting fake collaborator."""

    def __init__(self, payload: Any = None, error: Exception | None = None) -> None:
        self.payload = payload
        self.error = error
        self.calls: List[str] = []

    async def __call__(self, query: str) -> Dict[str, Any]:
        self.calls.append(query)
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.mark.asyncio
@pytest.mark.parametrize("query", ["", "   ", "\t\n"])
async def test_empty_query_skips_fetch(query: str) -> None:
    """빈 입력은 네트워크를 호출하지 않습니다. / Blank input never fetches."""

    fetch = FakeFetch(payload=TOKYO_PAYLOAD)
    controller = LookupController(fetch)
    result = await controller.lookup(query)
    assert result.state == LookupState.FAILED
    assert result.failure == LookupFailure.EMPTY_QUERY
    assert result.record is None
    assert fetch.calls == []
    assert controller.state == LookupState.FAILED


@pytest.mark.asyncio
async def test_http_error_maps_to_not_found() -> None:
    fetch = FakeFetch(error=UpstreamHTTPError(404))
    result = await LookupController(fetch).lookup("Atlantis")
    assert result.failure == LookupFailure.NOT_FOUND
    assert fetch.calls == ["Atlantis"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        WeatherProviderError("connect timeout"),
        httpx.ConnectError("dns failure"),
        ConnectionError("reset"),
    ],
)
async def test_transport_errors_map_to_network_error(error: Exception) -> None:
    """전송 오류를 분류합니다. / Transport faults become network errors."""

    result = await LookupController(FakeFetch(error=error)).lookup("Oslo")
    assert result.failure == LookupFailure.NETWORK_ERROR
    assert result.detail


@pytest.mark.asyncio
async def test_malformed_payload_is_reported() -> None:
    payload = dict(TOKYO_PAYLOAD, weather=[])
    result = await LookupController(FakeFetch(payload=payload)).lookup("Tokyo")
    assert result.failure == LookupFailure.MALFORMED_PAYLOAD
    assert result.record is None


@pytest.mark.asyncio
async def test_oversized_number_is_malformed() -> None:
    """거대한 정수는 실패로 분류됩니다. / Huge integers resolve to a failure."""

    payload = dict(TOKYO_PAYLOAD, main={"temp": 10**400, "feels_like": 1, "humidity": 2})
    controller = LookupController(FakeFetch(payload=payload))
    result = await controller.lookup("Tokyo")
    assert result.failure == LookupFailure.MALFORMED_PAYLOAD
    assert controller.state == LookupState.FAILED


@pytest.mark.asyncio
async def test_success_trims_query_and_normalizes() -> None:
    """성공 경로를 검증합니다. / Validate the success path."""

    fetch = FakeFetch(payload=TOKYO_PAYLOAD)
    controller = LookupController(fetch)
    result = await controller.lookup("  Tokyo ")
    assert result.ok
    assert result.query == "Tokyo"
    assert fetch.calls == ["Tokyo"]
    assert result.record == normalize(TOKYO_PAYLOAD)
    assert result.record.temperature_c == 25
    assert result.record.wind_speed_kmh == 15
    assert controller.state == LookupState.SUCCESS


@pytest.mark.asyncio
async def test_repeated_lookup_is_idempotent() -> None:
    fetch = FakeFetch(payload=TOKYO_PAYLOAD)
    controller = LookupController(fetch)
    first = await controller.lookup("Tokyo")
    second = await controller.lookup("Tokyo")
    assert first.record == second.record
    assert len(fetch.calls) == 2


@pytest.mark.asyncio
async def test_new_lookup_restarts_after_failure() -> None:
    """실패 후 새 조회가 가능합니다. / A failure does not block the next call."""

    fetch = FakeFetch(error=UpstreamHTTPError(404))
    controller = LookupController(fetch)
    await controller.lookup("Tokyo")
    fetch.error = None
    fetch.payload = TOKYO_PAYLOAD
    result = await controller.lookup("Tokyo")
    assert result.ok


def test_result_rejects_inconsistent_outcome() -> None:
    with pytest.raises(ValueError):
        LookupResult(query="x", state=LookupState.SUCCESS)
    with pytest.raises(ValueError):
        LookupResult(query="x", state=LookupState.LOADING)
