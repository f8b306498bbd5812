"""Typer entry point for the authoring walkthrough."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import anyio
import typer

from luis_authoring.apps.cli.walkthrough import run_walkthrough
from luis_authoring.services.authoring import Luis
from luis_authoring.services.config import LuisConfig, LuisConfigError, load_config

_log = logging.getLogger("luis_authoring.cli")

app = typer.Typer(help="Create, train and publish a sample LUIS app, then delete it.", add_completion=False)


def _build_luis(cfg: LuisConfig) -> Luis:
    return Luis.from_config(cfg)


async def _run(cfg: LuisConfig) -> None:
    async with _build_luis(cfg) as luis:
        await run_walkthrough(luis, cfg, echo=typer.echo)


@app.command()
def main(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML file with AuthoringUrl/AuthoringKey/EndpointKey"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log HTTP calls and poll iterations"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        cfg = load_config(config)
    except LuisConfigError as err:
        typer.secho(str(err), fg=typer.colors.RED)
        raise typer.Exit(1)

    try:
        anyio.run(_run, cfg)
    except Exception as exc:
        _log.exception("walkthrough aborted")
        typer.secho(f"Walkthrough aborted: {exc}", fg=typer.colors.RED)
    typer.echo("We are done!")


if __name__ == "__main__":  # pragma: no cover
    app()
