"""날씨 페이로드와 정규화 모델입니다. / Raw payload and normalized weather models."""

from __future__ import annotations

from enum import Enum
from typing import List, Union

from pydantic import Field, StrictFloat, StrictInt, StrictStr

from ..base import WeatherBaseModel

Number = Union[StrictInt, StrictFloat]


class WeatherCategory(str, Enum):
    """앱 내부 날씨 분류입니다. / Internal weather classification."""

    SUNNY = "sunny"
    RAINY = "rainy"
    CLOUDY = "cloudy"
    SNOW = "snow"


class MainBlock(WeatherBaseModel):
    """기온 및 습도 블록입니다. / Temperature and humidity block."""

    temp: Number
    feels_like: Number
    humidity: Number


class WindBlock(WeatherBaseModel):
    """바람 블록입니다 (m/s). / Wind block in metres per second."""

    speed: Number


class ConditionEntry(WeatherBaseModel):
    """제공자 날씨 항목입니다. / Provider weather condition entry."""

    main: StrictStr
    description: StrictStr


class RawWeatherPayload(WeatherBaseModel):
    """상위 제공자 응답 형태입니다. / Upstream provider response shape.

    Only the keys the widget reads are declared; everything else the provider
    sends (``coord``, ``sys``, ``dt`` ...) is ignored.
    """

    name: StrictStr
    main: MainBlock
    wind: WindBlock
    weather: List[ConditionEntry] = Field(min_length=1)


class WeatherRecord(WeatherBaseModel):
    """정규화된 날씨 레코드입니다. / Normalized weather record."""

    city: str
    temperature_c: int
    feels_like_c: int
    humidity_pct: int
    wind_speed_kmh: int
    category: WeatherCategory
    description: str
