from __future__ import annotations

import json
import logging
from typing import Any, List, Optional

import typer

from ..core.errors import ConfigurantError
from ..core.session import Session
from ..core.source import default_registry
from ..core.types import DEFAULT_OPTIONS
from ..sources.argv import ArgvSource

app = typer.Typer(help="Configurant CLI")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")):
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _session(extra_args: List[str]) -> Session:
    registry = default_registry()
    # argv source reads what the CLI did not consume
    registry.register("argv", ArgvSource(extra_args))
    return Session(registry)


def _lookup(config: Any, key: str) -> Any:
    node = config
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            raise KeyError(key)
        node = node[part]
    return node


@app.command(context_settings={"allow_extra_args": True, "ignore_unknown_options": True})
def show(
    ctx: typer.Context,
    path: str = typer.Option(DEFAULT_OPTIONS.path, "--path"),
    env: Optional[str] = typer.Option(None, "--env"),
    namespace: bool = typer.Option(False, "--namespace"),
    source: Optional[List[str]] = typer.Option(None, "--source", "-s"),
    key: Optional[str] = typer.Option(None, "--key", help="Dotted key to print"),
):
    session = _session(list(ctx.args))
    sources = source or list(DEFAULT_OPTIONS.sources)
    try:
        config = session.compose(path=path, env=env, namespace=namespace, sources=sources)
    except ConfigurantError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if key is None:
        typer.echo(json.dumps(config, indent=2, default=str))
        return
    try:
        value = _lookup(config, key)
    except KeyError:
        typer.echo(f"Error: key {key} not found", err=True)
        raise typer.Exit(code=1)
    typer.echo(json.dumps(value, indent=2, default=str))


@app.command()
def sources():
    typer.echo(json.dumps(default_registry().names(), indent=2))


if __name__ == "__main__":
    app()
