"""화면 상태 렌더러입니다. / Presentational state renderer."""

from __future__ import annotations

from typing import Dict, List, Optional

from ..base import WeatherBaseModel
from ..lookup.controller import LookupFailure, LookupResult, LookupState
from ..weather.models import WeatherCategory

EMPTY_QUERY_MESSAGE = "Please enter a city name!"
NOT_FOUND_MESSAGE = "City not found. Please try again!"


class CategoryTheme(WeatherBaseModel):
    """분류별 표시 자산입니다. / Display assets for a category."""

    icon: str
    background: str
    animation: str


THEMES: Dict[str, CategoryTheme] = {
    WeatherCategory.SUNNY.value: CategoryTheme(
        icon="☀️",
        background="linear-gradient(135deg, #ffeaa7 0%, #fab1a0 100%)",
        animation="sun",
    ),
    WeatherCategory.RAINY.value: CategoryTheme(
        icon="🌧️",
        background="linear-gradient(135deg, #74b9ff 0%, #0984e3 100%)",
        animation="rain",
    ),
    WeatherCategory.CLOUDY.value: CategoryTheme(
        icon="☁️",
        background="linear-gradient(135deg, #ddd6fe 0%, #8b5cf6 100%)",
        animation="clouds",
    ),
    WeatherCategory.SNOW.value: CategoryTheme(
        icon="❄️",
        background="linear-gradient(135deg, #e3f2fd 0%, #90caf9 100%)",
        animation="snow",
    ),
}


def theme_for(category: WeatherCategory | str) -> CategoryTheme:
    """분류에 맞는 테마입니다. / Theme for a category, sunny by default."""

    key = category.value if isinstance(category, WeatherCategory) else category
    return THEMES.get(key, THEMES[WeatherCategory.SUNNY.value])


class WeatherView(WeatherBaseModel):
    """렌더링된 화면 모델입니다. / Rendered view model.

    ``panel`` is one of ``idle``, ``loading``, ``result`` or ``error``; only
    the fields relevant to that panel are populated.
    """

    panel: str
    message: Optional[str] = None
    city: Optional[str] = None
    temperature: Optional[str] = None
    icon: Optional[str] = None
    description: Optional[str] = None
    feels_like: Optional[str] = None
    humidity: Optional[str] = None
    wind_speed: Optional[str] = None
    background: str = THEMES[WeatherCategory.SUNNY.value].background
    animation: Optional[str] = None


def render(state: LookupState, result: LookupResult | None = None) -> WeatherView:
    """상태를 화면 모델로 변환합니다. / Map a lookup state to a view."""

    if state in (LookupState.IDLE, LookupState.VALIDATING):
        return WeatherView(panel="idle")
    if state == LookupState.LOADING:
        return WeatherView(panel="loading")
    if result is None:
        raise ValueError(f"State {state} requires a lookup result")
    if result.ok and result.record is not None:
        record = result.record
        theme = theme_for(record.category)
        return WeatherView(
            panel="result",
            city=record.city,
            temperature=f"{record.temperature_c}°C",
            icon=theme.icon,
            description=record.description,
            feels_like=f"{record.feels_like_c}°C",
            humidity=f"{record.humidity_pct}%",
            wind_speed=f"{record.wind_speed_kmh} km/h",
            background=theme.background,
            animation=theme.animation,
        )
    message = (
        EMPTY_QUERY_MESSAGE
        if result.failure == LookupFailure.EMPTY_QUERY
        else NOT_FOUND_MESSAGE
    )
    return WeatherView(panel="error", message=message)


def format_view(view: WeatherView) -> str:
    """터미널 출력 문자열입니다. / Plain text rendering for terminals."""

    if view.panel == "idle":
        return "Enter a city name to check the weather."
    if view.panel == "loading":
        return "Loading..."
    if view.panel == "error":
        return view.message or NOT_FOUND_MESSAGE
    lines: List[str] = [
        f"{view.icon} {view.city}",
        f"{view.temperature} | {view.description}",
        f"Feels like: {view.feels_like}",
        f"Humidity: {view.humidity}",
        f"Wind: {view.wind_speed}",
    ]
    return "\n".join(lines)
