"""제공자 페이로드 정규화입니다. / Provider payload normalization."""

from __future__ import annotations

import logging
import math
from decimal import ROUND_HALF_DOWN, ROUND_HALF_UP, Decimal
from typing import Any, Dict

from pydantic import ValidationError

from .models import RawWeatherPayload, WeatherCategory, WeatherRecord

LOGGER = logging.getLogger("weather.normalize")

MS_TO_KMH = 3.6

CATEGORY_TABLE: Dict[str, WeatherCategory] = {
    "Clear": WeatherCategory.SUNNY,
    "Rain": WeatherCategory.RAINY,
    "Drizzle": WeatherCategory.RAINY,
    "Thunderstorm": WeatherCategory.RAINY,
    "Squall": WeatherCategory.RAINY,
    "Tornado": WeatherCategory.RAINY,
    "Clouds": WeatherCategory.CLOUDY,
    "Mist": WeatherCategory.CLOUDY,
    "Smoke": WeatherCategory.CLOUDY,
    "Haze": WeatherCategory.CLOUDY,
    "Dust": WeatherCategory.CLOUDY,
    "Fog": WeatherCategory.CLOUDY,
    "Sand": WeatherCategory.CLOUDY,
    "Ash": WeatherCategory.CLOUDY,
    "Snow": WeatherCategory.SNOW,
}


class MalformedPayloadError(ValueError):
    """해석할 수 없는 페이로드 오류입니다. / Payload cannot be normalized."""


def classify(provider_label: Any) -> WeatherCategory:
    """제공자 라벨을 분류합니다. / Classify a provider label.

    Unknown labels, including the empty string, fall back to ``SUNNY``.
    """

    if not isinstance(provider_label, str):
        return WeatherCategory.SUNNY
    return CATEGORY_TABLE.get(provider_label, WeatherCategory.SUNNY)


def _as_float(value: float | int) -> float:
    """유한 실수로 변환합니다. / Convert to a finite float."""

    try:
        number = float(value)
    except OverflowError as exc:
        raise MalformedPayloadError("Numeric value out of range") from exc
    if not math.isfinite(number):
        raise MalformedPayloadError(f"Non-finite numeric value: {number!r}")
    return number


def round_half_up(value: float | int) -> int:
    """0.5를 올림하여 반올림합니다. / Round with halves toward +infinity.

    Rounds the exact binary value, so ``0.49999999999999994`` gives 0.
    """

    exact = Decimal(_as_float(value))
    rounding = ROUND_HALF_UP if exact >= 0 else ROUND_HALF_DOWN
    return int(exact.to_integral_value(rounding=rounding))


def normalize(payload: Any) -> WeatherRecord:
    """원시 페이로드를 레코드로 변환합니다. / Convert raw payload to record."""

    try:
        raw = RawWeatherPayload.model_validate(payload)
    except ValidationError as exc:
        LOGGER.debug("payload_rejected", extra={"error": str(exc)})
        raise MalformedPayloadError(
            f"Malformed weather payload: {exc.error_count()} error(s)"
        ) from exc
    condition = raw.weather[0]
    return WeatherRecord(
        city=raw.name,
        temperature_c=round_half_up(raw.main.temp),
        feels_like_c=round_half_up(raw.main.feels_like),
        humidity_pct=round_half_up(raw.main.humidity),
        wind_speed_kmh=round_half_up(_as_float(raw.wind.speed) * MS_TO_KMH),
        category=classify(condition.main),
        description=condition.description,
    )
