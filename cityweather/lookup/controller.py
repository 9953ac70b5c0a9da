"""단일 조회 사이클 컨트롤러입니다. / Single lookup cycle controller.

The controller validates a city query, awaits an injected fetch callable once,
normalizes the payload and resolves to a :class:`LookupResult`. Every failure
is recovered here; nothing escapes as an unhandled exception.

Overlapping ``lookup`` calls on one controller are not cancelled or ordered.
Callers that only want the latest answer must discard stale results themselves.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Mapping, Optional

from pydantic import model_validator

from ..base import WeatherBaseModel
from ..weather.models import WeatherRecord
from ..weather.normalize import MalformedPayloadError, normalize
from ..weather.providers import UpstreamHTTPError

LOGGER = logging.getLogger("lookup.controller")

FetchWeather = Callable[[str], Awaitable[Mapping[str, Any]]]


class LookupState(str, Enum):
    """조회 상태입니다. / Lookup state."""

    IDLE = "idle"
    VALIDATING = "validating"
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"


class LookupFailure(str, Enum):
    """조회 실패 분류입니다. / Lookup failure classification."""

    EMPTY_QUERY = "empty_query"
    NOT_FOUND = "not_found"
    MALFORMED_PAYLOAD = "malformed_payload"
    NETWORK_ERROR = "network_error"


class LookupResult(WeatherBaseModel):
    """조회 결과입니다. / Outcome of one lookup."""

    query: str
    state: LookupState
    record: Optional[WeatherRecord] = None
    failure: Optional[LookupFailure] = None
    detail: Optional[str] = None

    @model_validator(mode="after")
    def _check_outcome(self) -> "LookupResult":
        if self.state == LookupState.SUCCESS:
            if self.record is None or self.failure is not None:
                raise ValueError("Successful result requires a record only")
        elif self.state == LookupState.FAILED:
            if self.failure is None or self.record is not None:
                raise ValueError("Failed result requires a failure only")
        else:
            raise ValueError(f"Result state must be terminal, got {self.state}")
        return self

    @property
    def ok(self) -> bool:
        """성공 여부입니다. / Whether the lookup succeeded."""

        return self.state == LookupState.SUCCESS


class LookupController:
    """조회 오케스트레이터입니다. / Lookup orchestrator."""

    def __init__(self, fetch_weather: FetchWeather) -> None:
        self._fetch_weather = fetch_weather
        self.state = LookupState.IDLE

    async def lookup(self, city_query: str) -> LookupResult:
        """도시 날씨를 조회합니다. / Look up weather for a city."""

        self._transition(LookupState.IDLE)
        self._transition(LookupState.VALIDATING)
        query = (city_query or "").strip()
        if not query:
            return self._fail(query, LookupFailure.EMPTY_QUERY, "City query is empty")

        self._transition(LookupState.LOADING)
        try:
            payload = await self._fetch_weather(query)
        except UpstreamHTTPError as exc:
            return self._fail(query, LookupFailure.NOT_FOUND, str(exc))
        except Exception as exc:  # collaborator faults of any kind
            return self._fail(
                query,
                LookupFailure.NETWORK_ERROR,
                f"{type(exc).__name__}: {exc}",
            )

        try:
            record = normalize(payload)
        except MalformedPayloadError as exc:
            return self._fail(query, LookupFailure.MALFORMED_PAYLOAD, str(exc))

        self._transition(LookupState.SUCCESS)
        return LookupResult(query=query, state=LookupState.SUCCESS, record=record)

    def _fail(
        self, query: str, failure: LookupFailure, detail: str
    ) -> LookupResult:
        LOGGER.info(
            "lookup_failed",
            extra={"query": query, "failure": failure.value, "error": detail},
        )
        self._transition(LookupState.FAILED)
        return LookupResult(
            query=query,
            state=LookupState.FAILED,
            failure=failure,
            detail=detail,
        )

    def _transition(self, state: LookupState) -> None:
        LOGGER.debug("lookup_state", extra={"state": state.value})
        self.state = state
