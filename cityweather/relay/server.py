"""날씨 릴레이 서버입니다. / Weather relay server.

Forwards ``GET /weather?city=<name>`` to the configured upstream provider and
returns its JSON untouched. The relay never normalizes the payload.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..config import AppConfig
from ..weather.providers import (
    UpstreamHTTPError,
    WeatherProvider,
    WeatherProviderError,
    create_provider,
)

LOGGER = logging.getLogger("relay.server")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app(
    config: AppConfig | None = None,
    provider: WeatherProvider | None = None,
) -> FastAPI:
    """릴레이 앱을 생성합니다. / Create the relay application."""

    config = config or AppConfig()
    if provider is None:
        provider = create_provider(
            config.provider_by_name(config.relay.upstream_provider)
        )
    upstream = provider

    app = FastAPI(title="City Weather Relay")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.relay.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.get("/weather")
    async def relay_weather(city: Optional[str] = Query(None)) -> JSONResponse:
        """도시 날씨를 중계합니다. / Relay weather for a city."""

        if not city:
            return _error(400, "City is required")
        try:
            payload = await upstream.fetch_weather(city)
        except UpstreamHTTPError:
            return _error(404, "City not found")
        except WeatherProviderError as exc:
            LOGGER.error(
                "relay_upstream_error",
                extra={"provider": upstream.name, "error": str(exc)},
            )
            return _error(500, "Server error")
        try:
            return JSONResponse(content=payload)
        except (TypeError, ValueError):
            # NaN/Infinity parse upstream but cannot be re-encoded as strict JSON
            LOGGER.exception("relay_encode_error", extra={"provider": upstream.name})
            return _error(500, "Server error")

    return app


def run_server(config: AppConfig, host: str | None = None, port: int | None = None) -> None:
    """uvicorn으로 서버를 실행합니다. / Run the relay with uvicorn."""

    import uvicorn

    app = create_app(config)
    bind_host = host or config.relay.host
    bind_port = port or config.relay.port
    LOGGER.info("relay_starting", extra={"host": bind_host, "port": bind_port})
    uvicorn.run(app, host=bind_host, port=bind_port)
