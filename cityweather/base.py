"""날씨 조회 기반 모델 정의입니다. / Base definitions for weather lookup models."""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class WeatherBaseModel(BaseModel):
    """불변 공통 베이스 모델입니다. / Common immutable base model."""

    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True,
        populate_by_name=True,
        use_enum_values=True,
        validate_assignment=True,
    )
