"""
Syscoin Client CLI

Command-line interface for Syscoin blob and wallet operations.

Commands:
  balance           - Show wallet balance
  create-blob       - Create a blob on-chain
  fetch-blob        - Fetch blob bytes from PoDA
  receipt           - Show blob metadata recorded by the node
  new-address       - Generate a labelled address
  address-by-label  - Look up addresses by label
  block-number      - Show chain height
  wallet            - Create or load a wallet
  demo              - Wallet, balance, create and fetch in one go
  info              - Show connection settings
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .client import SyscoinClient
from .config import CONFIG_ENV, DEFAULT_PODA_URL, DEFAULT_RPC_URL, ClientSettings, load_env
from .errors import SyscoinClientError
from .log import configure_logging
from .rpc.transport import DEFAULT_TIMEOUT


# ============ Helpers ============


def _connect(ctx: click.Context) -> SyscoinClient:
    settings: ClientSettings = ctx.obj
    try:
        return settings.connect()
    except SyscoinClientError as exc:
        _fail(exc)


def _fail(exc: SyscoinClientError) -> None:
    click.secho(f"ERROR: {exc}", fg="red", err=True)
    sys.exit(exc.exit_code)


def _read_payload(hex_data: Optional[str], text: Optional[str], file: Optional[Path]) -> bytes:
    given = [value for value in (hex_data, text, file) if value is not None]
    if len(given) != 1:
        raise click.UsageError("Give exactly one of --hex, --text or --file.")
    if hex_data is not None:
        try:
            return bytes.fromhex(hex_data.removeprefix("0x"))
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint="--hex") from exc
    if text is not None:
        return text.encode("utf-8")
    return file.read_bytes()


# ============ Main CLI Group ============


@click.group()
@click.version_option(version=__version__, prog_name="syscoin-client")
@click.option(
    "--rpc-url",
    envvar="SYSCOIN_RPC_URL",
    default=DEFAULT_RPC_URL,
    show_default=True,
    help="Node RPC URL",
)
@click.option("--rpc-user", envvar="SYSCOIN_RPC_USER", default="", help="Node RPC user")
@click.option("--rpc-password", envvar="SYSCOIN_RPC_PASSWORD", default="", help="Node RPC password")
@click.option(
    "--poda-url",
    envvar="SYSCOIN_PODA_URL",
    default=DEFAULT_PODA_URL,
    show_default=True,
    help="PoDA base URL",
)
@click.option(
    "--timeout",
    envvar="SYSCOIN_RPC_TIMEOUT",
    default=DEFAULT_TIMEOUT,
    type=float,
    show_default=True,
    help="Request timeout in seconds",
)
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log level",
)
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON")
@click.pass_context
def cli(
    ctx: click.Context,
    rpc_url: str,
    rpc_user: str,
    rpc_password: str,
    poda_url: str,
    timeout: float,
    log_level: str,
    json_logs: bool,
) -> None:
    """Syscoin blob and wallet client."""
    configure_logging(log_level, json=json_logs)
    ctx.obj = ClientSettings(
        rpc_url=rpc_url,
        rpc_user=rpc_user,
        rpc_password=rpc_password,
        poda_url=poda_url,
        timeout=timeout,
    )


# ============ Blobs ============


@cli.command("create-blob")
@click.option("--hex", "hex_data", help="Blob bytes as hex")
@click.option("--text", help="Blob bytes as UTF-8 text")
@click.option(
    "--file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read blob bytes from a file",
)
@click.pass_context
def create_blob(
    ctx: click.Context,
    hex_data: Optional[str],
    text: Optional[str],
    file: Optional[Path],
) -> None:
    """Create a blob on-chain and print its version hash."""
    data = _read_payload(hex_data, text, file)
    client = _connect(ctx)
    try:
        version_hash = client.create_blob(data)
    except SyscoinClientError as exc:
        _fail(exc)
    click.echo(version_hash)


@cli.command("fetch-blob")
@click.argument("version_hash")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write raw bytes here instead of printing hex",
)
@click.pass_context
def fetch_blob(ctx: click.Context, version_hash: str, output: Optional[Path]) -> None:
    """Fetch blob bytes from PoDA."""
    client = _connect(ctx)
    try:
        data = client.get_blob_from_cloud(version_hash)
    except SyscoinClientError as exc:
        _fail(exc)
    if output:
        output.write_bytes(data)
        click.echo(f"Wrote {len(data)} bytes to {output}")
    else:
        click.echo(data.hex())


@cli.command()
@click.argument("version_hash")
@click.pass_context
def receipt(ctx: click.Context, version_hash: str) -> None:
    """Show blob metadata recorded by the node."""
    client = _connect(ctx)
    try:
        record = client.transaction_receipt(version_hash)
    except SyscoinClientError as exc:
        _fail(exc)
    if record is None:
        click.echo("No record found.")
        sys.exit(1)
    click.echo(json.dumps(record, indent=2, sort_keys=True, default=str))


# ============ Wallet ============


@cli.command()
@click.pass_context
def balance(ctx: click.Context) -> None:
    """Show wallet balance."""
    client = _connect(ctx)
    try:
        amount = client.get_balance()
    except SyscoinClientError as exc:
        _fail(exc)
    click.echo(f"Balance: {amount}")


@cli.command("new-address")
@click.argument("label")
@click.pass_context
def new_address(ctx: click.Context, label: str) -> None:
    """Generate a new address tagged with LABEL."""
    client = _connect(ctx)
    try:
        address = client.get_new_address(label)
    except SyscoinClientError as exc:
        _fail(exc)
    click.echo(address)


@cli.command("address-by-label")
@click.argument("label")
@click.option("--all", "show_all", is_flag=True, help="List every address with the label")
@click.pass_context
def address_by_label(ctx: click.Context, label: str, show_all: bool) -> None:
    """Look up addresses tagged with LABEL."""
    client = _connect(ctx)
    try:
        if show_all:
            addresses = client.fetch_addresses_by_label(label)
        else:
            addresses = [client.fetch_address_by_label(label)]
    except SyscoinClientError as exc:
        _fail(exc)
    for address in addresses:
        click.echo(address)


@cli.command("block-number")
@click.pass_context
def block_number(ctx: click.Context) -> None:
    """Show current chain height."""
    client = _connect(ctx)
    try:
        height = client.block_number()
    except SyscoinClientError as exc:
        _fail(exc)
    click.echo(str(height))


@cli.command()
@click.argument("name")
@click.pass_context
def wallet(ctx: click.Context, name: str) -> None:
    """Create wallet NAME, or load it if it already exists."""
    client = _connect(ctx)
    try:
        client.create_or_load_wallet(name)
    except SyscoinClientError as exc:
        _fail(exc)
    click.secho(f"Wallet {name} ready.", fg="green")


# ============ Demo ============


@cli.command()
@click.option(
    "--wallet",
    "wallet_name",
    default="wallet_name",
    show_default=True,
    help="Wallet to create or load",
)
@click.option("--hex", "hex_data", default="01020304", show_default=True, help="Blob bytes as hex")
@click.pass_context
def demo(ctx: click.Context, wallet_name: str, hex_data: str) -> None:
    """Create or load a wallet, show balance, then create and fetch a blob."""
    data = _read_payload(hex_data, None, None)
    client = _connect(ctx)

    click.echo("=== Syscoin Client Demo ===")
    click.echo("")
    try:
        client.create_or_load_wallet(wallet_name)
        click.echo(f"  Wallet:      {wallet_name}")

        click.echo(f"  Balance:     {client.get_balance()}")

        version_hash = client.create_blob(data)
        click.echo(f"  Blob hash:   {version_hash}")

        fetched = client.get_blob_from_cloud(version_hash)
        click.echo(f"  Blob data:   {list(fetched)}")
    except SyscoinClientError as exc:
        _fail(exc)

    click.echo("")
    if fetched == data:
        click.secho("  Round trip OK", fg="green")
    else:
        click.secho("  Round trip mismatch: PoDA returned different bytes", fg="yellow")


# ============ Info ============


@cli.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """Show connection settings."""
    settings: ClientSettings = ctx.obj
    click.echo(
        click.style("  ◆ ", fg="cyan")
        + click.style("syscoin-client", bold=True)
        + click.style(f"  v{__version__}", dim=True)
    )
    click.echo()
    rows = [
        ("RPC URL:  ", settings.rpc_url),
        ("RPC user: ", settings.rpc_user or "(not set)"),
        ("PoDA URL: ", settings.poda_url),
        ("Timeout:  ", f"{settings.timeout}s"),
        ("Env file: ", f"{CONFIG_ENV}" + ("" if CONFIG_ENV.exists() else " (missing)")),
    ]
    for label, value in rows:
        click.echo(click.style(f"  {label}", dim=True) + value)


# ============ Entry Points ============


def main() -> None:
    """Syscoin client CLI entry point."""
    load_env()
    cli()


if __name__ == "__main__":
    main()
