"""CLI entrypoint for read-only market queries."""

from __future__ import annotations

import asyncio
import json
import os
from pathlib import Path
from typing import Annotated

import typer

from .exceptions import WarpgateError
from .formatter import format_listings, format_pool_state, format_preview, format_token_info
from .logger import setup_logging
from .sdk import TokenSDK
from .settings import SDKSettings

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    pretty_exceptions_enable=True,
    pretty_exceptions_short=True,
    pretty_exceptions_show_locals=False,
    rich_markup_mode="rich",
    help="Query the Warpgate bonding-curve market.",
)


def _sdk(ctx: typer.Context) -> TokenSDK:
    return TokenSDK(ctx.obj)


def _run(coro):
    try:
        return asyncio.run(coro)
    except WarpgateError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from e


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to a TOML config file (can include a [warpgate] table).",
        ),
    ] = None,
    api_base_url: Annotated[
        str | None, typer.Option("--api-url", help="Backend API base URL.")
    ] = None,
    fullnode_url: Annotated[
        str | None, typer.Option("--fullnode-url", help="Movement fullnode URL.")
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Override logging verbosity (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL).",
        ),
    ] = None,
    show_config: Annotated[
        bool,
        typer.Option(
            "--show-config",
            help="Print effective config (with secrets redacted) and exit.",
        ),
    ] = False,
):
    """Load settings shared by every command."""
    if config_path:
        os.environ["WARPGATE_CONFIG"] = str(config_path)

    init_kwargs: dict[str, str] = {}
    if api_base_url is not None:
        init_kwargs["api_base_url"] = api_base_url
    if fullnode_url is not None:
        init_kwargs["fullnode_url"] = fullnode_url
    if log_level is not None:
        init_kwargs["log_level"] = log_level.upper()

    settings = SDKSettings(**init_kwargs)
    setup_logging(settings.log_level)

    if show_config:
        typer.echo(json.dumps(settings.as_safe_dict(), indent=2, default=str))
        raise typer.Exit(code=0)

    ctx.obj = settings


@app.command("preview-buy")
def preview_buy(
    ctx: typer.Context,
    token_identifier: Annotated[str, typer.Argument(help="address::module::struct")],
    amount: Annotated[float, typer.Argument(help="APT to spend.")],
    slippage: Annotated[float, typer.Option(help="Slippage tolerance (%).")] = 0.0,
):
    """Preview buying a token with APT."""
    preview = _run(_sdk(ctx).preview_buy(token_identifier, amount, slippage))
    format_preview(preview)


@app.command("preview-sell")
def preview_sell(
    ctx: typer.Context,
    token_identifier: Annotated[str, typer.Argument(help="address::module::struct")],
    amount: Annotated[float, typer.Argument(help="Tokens to sell.")],
    slippage: Annotated[float, typer.Option(help="Slippage tolerance (%).")] = 0.0,
):
    """Preview selling a token for APT."""
    preview = _run(_sdk(ctx).preview_sell(token_identifier, amount, slippage))
    format_preview(preview)


@app.command("pool-state")
def pool_state(
    ctx: typer.Context,
    token_identifier: Annotated[str, typer.Argument(help="address::module::struct")],
):
    """Show the bonding curve reserves of a token."""
    pool = _run(_sdk(ctx).fetch_pool_state(token_identifier))
    format_pool_state(token_identifier, pool)


@app.command("token-info")
def token_info(
    ctx: typer.Context,
    token_identifier: Annotated[str, typer.Argument(help="address::module::struct")],
):
    """Show token metadata."""
    info = _run(_sdk(ctx).get_token_info(token_identifier))
    format_token_info(info)


@app.command("listings")
def listings(
    ctx: typer.Context,
    limit: Annotated[int, typer.Option(help="Tokens per page.")] = 50,
    offset: Annotated[int, typer.Option(help="Offset of the first token.")] = 0,
):
    """List tokens on the launchpad."""
    results = _run(_sdk(ctx).get_token_listings(limit, offset))
    format_listings(results)


def run() -> None:
    """Entrypoint used by the console script."""
    app()


if __name__ == "__main__":
    run()
