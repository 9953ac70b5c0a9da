"""환경 및 설정 로더입니다. / Environment and configuration loader."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Iterable, List

import yaml
from pydantic import Field, SecretStr, ValidationError

from .base import WeatherBaseModel

DEFAULT_CONFIG_PATH = Path("config.yaml")
SHARED_SECRET_ENV = "WEATHER_API_KEY"
DEFAULT_PROVIDER: Dict[str, Any] = {
    "name": "openweathermap",
    "adapter": "openweathermap",
    "base_url": "https://api.openweathermap.org",
    "secret_suffix": "OPENWEATHERMAP",
}


class ProviderSettings(WeatherBaseModel):
    """개별 제공자 설정입니다. / Individual provider settings."""

    name: str
    base_url: str
    adapter: str
    timeout_seconds: float = Field(default=5.0, gt=0)
    units: str = Field(default="metric")
    api_key: str | None = Field(default=None, repr=False)
    secret_suffix: str | None = Field(default=None, exclude=True)


def _default_providers() -> List[ProviderSettings]:
    return [ProviderSettings(**DEFAULT_PROVIDER)]


class RelaySettings(WeatherBaseModel):
    """릴레이 서버 설정입니다. / Relay server settings."""

    host: str = "127.0.0.1"
    port: int = Field(default=3000, ge=1, le=65535)
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    upstream_provider: str = "openweathermap"


class ProviderSecret(WeatherBaseModel):
    """제공자 시크릿 래퍼입니다. / Provider secret wrapper."""

    api_key: SecretStr | None = None


class AppConfig(WeatherBaseModel):
    """애플리케이션 전체 설정입니다. / Application wide configuration."""

    providers: List[ProviderSettings] = Field(default_factory=_default_providers)
    lookup_provider: str = "openweathermap"
    relay: RelaySettings = Field(default_factory=RelaySettings)

    def provider_by_name(self, name: str) -> ProviderSettings:
        """이름으로 제공자를 찾습니다. / Find provider by name."""

        for provider in self.providers:
            if provider.name == name:
                return provider
        raise KeyError(f"Unknown provider: {name}")


def load_yaml_config(path: Path) -> Dict[str, Any]:
    """YAML 설정을 읽습니다. / Load YAML configuration."""

    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError("Config root must be a mapping")
    return data


def load_secrets_from_env(suffixes: Iterable[str]) -> Dict[str, ProviderSecret]:
    """환경 변수에서 시크릿을 적재합니다. / Load secrets from environment."""

    shared = os.getenv(SHARED_SECRET_ENV)
    mapping: Dict[str, ProviderSecret] = {}
    for suffix in suffixes:
        raw_value = os.getenv(f"{SHARED_SECRET_ENV}_{suffix}") or shared
        secret = SecretStr(raw_value) if raw_value else None
        mapping[suffix] = ProviderSecret(api_key=secret)
    return mapping


def merge_config(
    raw: Dict[str, Any], secrets: Dict[str, ProviderSecret]
) -> Dict[str, Any]:
    """환경과 파일 설정을 병합합니다. / Merge file config with secrets."""

    for provider in raw.get("providers") or []:
        if not isinstance(provider, dict):
            continue
        suffix = provider.get("secret_suffix")
        if suffix and suffix in secrets and not provider.get("api_key"):
            secret_value = secrets[suffix].api_key
            if secret_value:
                provider["api_key"] = secret_value.get_secret_value()
    return raw


def load_app_config(path: Path | None = None) -> AppConfig:
    """최종 앱 설정을 반환합니다. / Return final app configuration."""

    config_path = path or DEFAULT_CONFIG_PATH
    raw = load_yaml_config(config_path)
    raw.setdefault("providers", [dict(DEFAULT_PROVIDER)])
    suffixes = [
        provider["secret_suffix"]
        for provider in raw.get("providers") or []
        if isinstance(provider, dict) and provider.get("secret_suffix")
    ]
    merged = merge_config(raw, load_secrets_from_env(suffixes))
    try:
        return AppConfig.model_validate(merged)
    except ValidationError as exc:
        raise ValueError(f"Invalid configuration: {exc}") from exc
