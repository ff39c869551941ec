"""Rich console rendering for CLI output."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .api.models import TokenListing
from .domain import PoolState, TokenInfo, TradePreview
from .units import from_chain_units


def _truncate_address(address: str) -> str:
    if len(address) <= 16:
        return address
    return f"{address[:10]}...{address[-4:]}"


def _key_value_table(value_style: str = "cyan") -> Table:
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Key", style="dim")
    table.add_column("Value", style=value_style)
    return table


def format_preview(preview: TradePreview, console: Console | None = None) -> None:
    console = console or Console()
    table = _key_value_table("green")
    table.add_row("You pay", f"{preview.input_amount} {preview.input_token}")
    table.add_row("You receive", f"{preview.output_amount:.8f} {preview.output_token}")
    table.add_row("Price impact", f"{preview.price_impact}%")
    table.add_row("Slippage", f"{preview.slippage}%")
    console.print(Panel(table, title="[bold]Trade Preview[/]", border_style="green"))


def format_pool_state(
    token_identifier: str, pool: PoolState, console: Console | None = None
) -> None:
    console = console or Console()
    table = _key_value_table()
    table.add_row("Token", token_identifier)
    table.add_row("Token reserve", f"{from_chain_units(pool.reserve_x):,.8f}")
    table.add_row("APT reserve", f"{from_chain_units(pool.reserve_y):,.8f}")
    console.print(Panel(table, title="[bold]Pool State[/]", border_style="blue"))


def format_token_info(info: TokenInfo, console: Console | None = None) -> None:
    console = console or Console()
    table = _key_value_table()
    table.add_row("Name", info.name)
    table.add_row("Symbol", info.symbol)
    table.add_row("Decimals", str(info.decimals))
    table.add_row("Creator", info.creator_name or _truncate_address(info.creator))
    table.add_row("Identifier", info.token_identifier)
    if info.description:
        table.add_row("Description", info.description)
    console.print(Panel(table, title="[bold]Token Info[/]", border_style="blue"))


def format_listings(listings: list[TokenListing], console: Console | None = None) -> None:
    console = console or Console()
    table = Table(title="Token Listings", show_lines=False)
    table.add_column("Symbol", style="bold")
    table.add_column("Name")
    table.add_column("Creator", style="dim")
    table.add_column("Status")
    table.add_column("Mint", style="cyan")
    for listing in listings:
        table.add_row(
            listing.ticker_symbol,
            listing.name,
            listing.creator_name or _truncate_address(listing.creator),
            listing.status,
            _truncate_address(listing.mint_addr),
        )
    console.print(table)
