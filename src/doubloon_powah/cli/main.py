"""CLI for doubloon-powah."""

import json
import logging
from collections.abc import Callable
from decimal import Decimal
from enum import StrEnum
from pathlib import Path

import typer
from eth_utils import is_address, to_checksum_address
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table
from rich.traceback import install

from doubloon_powah.core.errors import PowahError
from doubloon_powah.core.models import VotingPowerBreakdown
from doubloon_powah.core.registry import SourceRegistry
from doubloon_powah.data import DeploymentConfig, get_deployment, resolve_config_path, save_deployment
from doubloon_powah.rpc import ApeRPCProvider
from doubloon_powah.sources import (
    ChainVestingGrant,
    MasterChefStaking,
    StakingRewardsFarm,
    apply_registry,
    build_aggregator,
    build_registry,
)

# Install rich traceback handler
install(show_locals=True)

app = typer.Typer(
    name="doubloon-powah",
    help="Compute DBL voting power from wallets, farms, vesting grants and liquidity pools",
    add_completion=False,
)

console = Console()

NETWORK_OPTION = typer.Option("ethereum", "--network", "-n", help="Deployment network")
CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="Deployment YAML (defaults to $DOUBLOON_POWAH_CONFIG)",
)
DEBUG_OPTION = typer.Option(False, "--debug", "-d", help="Enable debug output")
CALLER_OPTION = typer.Option(..., "--caller", help="Address performing the administrative action")


class OutputFormat(StrEnum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=debug)],
        force=True,
    )


def _address(value: str) -> str:
    if not is_address(value):
        msg = f"not an address: {value}"
        raise typer.BadParameter(msg)
    return to_checksum_address(value)


def _fail(error: Exception, debug: bool) -> typer.Exit:
    console.print(f"[bold red]Error:[/bold red] {error}")
    if debug:
        # Rich traceback will render it
        raise error
    return typer.Exit(code=1)


def _connect(config: DeploymentConfig) -> ApeRPCProvider:
    """
    Connect to the deployment's network.

    Raises
    ------
    typer.Exit
        If connection fails

    """
    rpc_provider = ApeRPCProvider(config.ecosystem, config.network, config.provider)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task(f"Connecting to {rpc_provider.network_choice}...", total=None)
        try:
            rpc_provider.connect()
        except RuntimeError as e:
            console.print(f"[bold red]{e}[/bold red]")
            console.print("[yellow]Check the Ape provider plugin and its API key environment variable[/yellow]")
            raise typer.Exit(code=1) from e
    return rpc_provider


@app.command()
def balance(
    address: str = typer.Argument(..., help="Address to query"),
    network: str = NETWORK_OPTION,
    config_path: Path | None = CONFIG_OPTION,
    block: int | None = typer.Option(None, "--block", "-b", help="Block number to read at (default: head)"),
    format: OutputFormat = typer.Option(OutputFormat.TABLE, "--format", "-f", help="Output format"),
    debug: bool = DEBUG_OPTION,
) -> None:
    """
    Show the voting power of an address, split by source.

    Examples:

        doubloon-powah balance 0xABC...

        doubloon-powah balance 0xABC... --block 19000000 --format json
    """
    _setup_logging(debug)
    account = _address(address)

    try:
        config = get_deployment(network, config_path)
    except (KeyError, ValidationError) as e:
        raise _fail(e, debug) from e

    rpc_provider = _connect(config)
    try:
        block_id = block if block is not None else rpc_provider.block_number()
        aggregator = build_aggregator(config, rpc_provider, block_id)
        breakdown = aggregator.breakdown(account)
    except (PowahError, RuntimeError) as e:
        raise _fail(e, debug) from e
    finally:
        rpc_provider.disconnect()

    if format == OutputFormat.JSON:
        console.print(json.dumps({"block": block_id, **breakdown.model_dump(mode="json")}, indent=2))
    else:
        _output_breakdown(breakdown, block_id)


@app.command()
def metadata(
    network: str = NETWORK_OPTION,
    config_path: Path | None = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Show the voting power token's name, symbol, decimals and total supply."""
    _setup_logging(debug)
    try:
        config = get_deployment(network, config_path)
    except (KeyError, ValidationError) as e:
        raise _fail(e, debug) from e

    rpc_provider = _connect(config)
    try:
        token_metadata = build_aggregator(config, rpc_provider).metadata()
    except (PowahError, RuntimeError) as e:
        raise _fail(e, debug) from e
    finally:
        rpc_provider.disconnect()

    table = Table(show_header=False, box=None)
    table.add_column("Field", style="bold")
    table.add_column("Value", style="cyan")
    table.add_row("Name", token_metadata.name)
    table.add_row("Symbol", token_metadata.symbol)
    table.add_row("Decimals", str(token_metadata.decimals))
    table.add_row("Total supply", _format_amount(token_metadata.total_supply, token_metadata.decimals))
    console.print(table)


@app.command()
def sources(
    network: str = NETWORK_OPTION,
    config_path: Path | None = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """List the farms, vesting grants and staking contract counted toward voting power."""
    _setup_logging(debug)
    try:
        snapshot = build_registry(get_deployment(network, config_path)).describe()
    except (KeyError, ValidationError) as e:
        raise _fail(e, debug) from e

    table = Table(title=f"Voting power sources ({network})", show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Kind", style="cyan")
    table.add_column("Address", style="green")

    for i, farm in enumerate(snapshot.farms):
        table.add_row(str(i), "farm", farm)
    for i, grant in enumerate(snapshot.vesting):
        table.add_row(str(i), "vesting", grant)
    if snapshot.staking_protocol:
        table.add_row("-", f"staking (pool {snapshot.staking_pool_id})", snapshot.staking_protocol)

    console.print(table)
    console.print(f"Owner: [bold]{snapshot.owner}[/bold]")


@app.command("add-farms")
def add_farms(
    farms: list[str] = typer.Argument(..., help="Farm addresses to append"),
    caller: str = CALLER_OPTION,
    network: str = NETWORK_OPTION,
    config_path: Path | None = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Append farms to the registry (owner only)."""
    _setup_logging(debug)
    sender = _address(caller)
    handles = [StakingRewardsFarm(_address(farm)) for farm in farms]
    _administer(network, config_path, debug, lambda registry: registry.append_farms(sender, handles))


@app.command("add-vesting")
def add_vesting(
    grants: list[str] = typer.Argument(..., help="Vesting grant addresses to append"),
    caller: str = CALLER_OPTION,
    network: str = NETWORK_OPTION,
    config_path: Path | None = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Append vesting grants to the registry (owner only)."""
    _setup_logging(debug)
    sender = _address(caller)
    handles = [ChainVestingGrant(_address(grant)) for grant in grants]
    _administer(network, config_path, debug, lambda registry: registry.append_vesting(sender, handles))


@app.command("set-staking")
def set_staking(
    protocol: str = typer.Argument(..., help="Staking contract address"),
    pool_id: int = typer.Argument(..., min=0, help="Pool id of the DBL LP inside the staking contract"),
    caller: str = CALLER_OPTION,
    network: str = NETWORK_OPTION,
    config_path: Path | None = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Replace the external staking contract and pool id (owner only)."""
    _setup_logging(debug)
    sender = _address(caller)
    handle = MasterChefStaking(_address(protocol))
    _administer(network, config_path, debug, lambda registry: registry.set_staking_protocol(sender, handle, pool_id))


@app.command("transfer-ownership")
def transfer_ownership(
    new_owner: str = typer.Argument(..., help="New registry owner"),
    caller: str = CALLER_OPTION,
    network: str = NETWORK_OPTION,
    config_path: Path | None = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Hand registry ownership to another address (owner only)."""
    _setup_logging(debug)
    sender = _address(caller)
    successor = _address(new_owner)
    _administer(network, config_path, debug, lambda registry: registry.transfer_ownership(sender, successor))


def _administer(
    network: str,
    config_path: Path | None,
    debug: bool,
    action: Callable[[SourceRegistry], None],
) -> None:
    """
    Apply a registry mutation and persist the result.

    The registry enforces ownership; on failure the deployment file is not written.

    """
    path = resolve_config_path(config_path)
    if path is None:
        console.print("[bold red]Error:[/bold red] a deployment file is required (--config or $DOUBLOON_POWAH_CONFIG)")
        raise typer.Exit(code=1)

    try:
        config = get_deployment(network, path)
        registry = build_registry(config)
        action(registry)
    except (KeyError, ValidationError, PowahError) as e:
        raise _fail(e, debug) from e

    save_deployment(path, network, apply_registry(config, registry))
    console.print(f"[green]✓ Registry updated in {path}[/green]")


def _format_amount(raw: int, decimals: int = 18) -> str:
    return f"{Decimal(raw) / Decimal(10**decimals):,.4f}"


def _output_breakdown(breakdown: VotingPowerBreakdown, block_id: int) -> None:
    """Output voting power as rich table."""
    table = Table(
        title=f"Voting power of {breakdown.account[:10]}...{breakdown.account[-8:]} at block {block_id}",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Source", style="cyan")
    table.add_column("DBL", style="white", justify="right")
    table.add_column("Raw", style="dim", justify="right")

    rows = [
        ("Wallet", breakdown.direct),
        ("Farm rewards", breakdown.farms),
        ("Vesting", breakdown.vesting),
        ("Uniswap LP", breakdown.venue_a),
        ("SushiSwap LP", breakdown.venue_b),
        ("Staked SushiSwap LP", breakdown.staked),
    ]
    for label, amount in rows:
        table.add_row(label, _format_amount(amount), str(amount))

    table.add_section()
    total = _format_amount(breakdown.total)
    table.add_row("[bold]Total[/bold]", f"[bold green]{total}[/bold green]", str(breakdown.total))

    console.print("\n")
    console.print(table)
    console.print("\n")


if __name__ == "__main__":
    app()
