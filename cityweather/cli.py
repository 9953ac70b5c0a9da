"""운영자용 CLI입니다. / Operator-facing CLI."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer

from .config import DEFAULT_CONFIG_PATH, AppConfig, load_app_config
from .display.render import format_view, render
from .lookup.controller import LookupController, LookupResult
from .relay.server import run_server
from .weather.providers import create_provider

app = typer.Typer(help="City weather lookup and relay")


def _load(config_path: Path, verbose: bool) -> AppConfig:
    """설정과 로깅을 준비합니다. / Prepare configuration and logging."""

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
        )
    try:
        return load_app_config(config_path)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=2) from exc


@app.command("lookup")
def lookup(
    city: str = typer.Argument(..., help="City name"),
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", help="YAML config"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """도시 날씨를 조회합니다. / Look up the weather for a city."""

    config = _load(config_path, verbose)
    provider = create_provider(config.provider_by_name(config.lookup_provider))
    controller = LookupController(provider.fetch_weather)

    async def _run() -> LookupResult:
        return await controller.lookup(city)

    result = asyncio.run(_run())
    typer.echo(format_view(render(controller.state, result)))
    if not result.ok:
        raise typer.Exit(code=1)


@app.command("serve")
def serve(
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", help="YAML config"),
    host: Optional[str] = typer.Option(None, help="Bind host"),
    port: Optional[int] = typer.Option(None, help="Bind port"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """릴레이 서버를 실행합니다. / Run the relay server."""

    config = _load(config_path, verbose)
    run_server(config, host=host, port=port)


def main() -> None:
    """CLI 엔트리 포인트입니다. / CLI entry point."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI guard
    main()
