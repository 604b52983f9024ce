"""router-bridge CLI.

Usage:
    router-bridge invoke greet '"world"' 3         # JSON arguments
    router-bridge invoke echo --raw payload.bin    # single binary argument
    router-bridge --base-url http://127.0.0.1:4096 invoke add 3 5
    router-bridge serve myapp.commands:router      # serve a Router
    router-bridge serve myapp.commands:router --port 8080

Settings default to ROUTER_BRIDGE_* environment variables.
"""

from __future__ import annotations

import asyncio
import dataclasses
import importlib
import json
import logging
import sys
from typing import Any

import click
import httpx

from .client import RouterClient
from .config import URL_STYLES, BridgeConfig


def parse_arg(text: str) -> Any:
    """Parse a CLI argument as JSON, falling back to the plain string."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def load_router(target: str) -> Any:
    """Load a Router from a ``module:attribute`` reference.

    The attribute may be a Router or a zero-argument factory returning one.
    """
    from .host import Router

    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise click.BadParameter(f"Expected module:attribute, got {target!r}")

    module = importlib.import_module(module_name)
    try:
        obj = getattr(module, attr)
    except AttributeError as e:
        raise click.BadParameter(f"Module {module_name!r} has no attribute {attr!r}") from e

    if not isinstance(obj, Router) and callable(obj):
        obj = obj()
    if not isinstance(obj, Router):
        raise click.BadParameter(f"{target} is not a Router")
    return obj


@click.group()
@click.option("--base-url", default=None, help="Serve commands from this URL")
@click.option("--channel", default=None, help="Channel identifier for URL resolution")
@click.option("--url-style", type=click.Choice(URL_STYLES), default=None, help="Endpoint URL style")
@click.option("--timeout", type=float, default=None, help="Request timeout in seconds")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(
    ctx: click.Context,
    base_url: str | None,
    channel: str | None,
    url_style: str | None,
    timeout: float | None,
    verbose: bool,
) -> None:
    """router-bridge - invoke and serve named commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    overrides: dict[str, Any] = {}
    if base_url:
        overrides["base_url"] = base_url
    if channel:
        overrides["channel"] = channel
    if url_style:
        overrides["url_style"] = url_style
    if timeout is not None:
        overrides["timeout"] = timeout

    try:
        config = dataclasses.replace(BridgeConfig.from_env(), **overrides)
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    ctx.obj = config


@main.command("invoke")
@click.argument("command")
@click.argument("args", nargs=-1)
@click.option(
    "--raw",
    "raw_file",
    type=click.File("rb"),
    help="Send this file's bytes as the single binary argument",
)
@click.option(
    "-o",
    "--output",
    type=click.File("wb"),
    help="Write a binary result to this file instead of stdout",
)
@click.pass_obj
def invoke_cmd(
    config: BridgeConfig,
    command: str,
    args: tuple[str, ...],
    raw_file: Any,
    output: Any,
) -> None:
    """Invoke COMMAND with ARGS and print the result."""
    if raw_file is not None and args:
        raise click.UsageError("--raw cannot be combined with positional ARGS")

    call_args = (raw_file.read(),) if raw_file is not None else tuple(parse_arg(a) for a in args)

    async def run() -> Any:
        async with RouterClient(config=config) as client:
            return await client.invoke(command, *call_args)

    try:
        result = asyncio.run(run())
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        click.echo(f"{command} failed with status {status}: {e.response.text}", err=True)
        sys.exit(1)
    except httpx.TransportError as e:
        click.echo(f"Cannot reach {command}: {e}", err=True)
        sys.exit(1)

    if isinstance(result, bytes):
        if output is not None:
            output.write(result)
        else:
            click.get_binary_stream("stdout").write(result)
    elif isinstance(result, str):
        click.echo(result)
    else:
        click.echo(json.dumps(result, indent=2, ensure_ascii=False))


@main.command("serve")
@click.argument("target")
@click.option("--host", default="127.0.0.1", help="Host to bind to")
@click.option("--port", default=4096, help="Port to bind to")
def serve_cmd(target: str, host: str, port: int) -> None:
    """Serve the Router named by TARGET (module:attribute)."""
    import uvicorn

    from .host import create_app

    router = load_router(target)
    click.echo(f"Serving {len(router.commands)} command(s) on http://{host}:{port}", err=True)
    uvicorn.run(create_app(router), host=host, port=port)


if __name__ == "__main__":
    main()
