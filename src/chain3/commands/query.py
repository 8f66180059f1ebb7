"""
Query commands - read node and account state.
"""

from __future__ import annotations

import sys

import click

from ..address import is_address, is_checksum_address, to_checksum_address
from ..errors import Chain3Error
from . import fail, get_client


@click.command("block-number")
@click.pass_context
def block_number(ctx: click.Context) -> None:
    """Print the number of the most recent block."""
    try:
        number = get_client(ctx).mc.block_number()
    except Chain3Error as exc:
        fail(exc)
    click.echo(number)


@click.command()
@click.argument("address")
@click.option("--block", default="latest", show_default=True, help="Block number or tag")
@click.option("--unit", default="mc", show_default=True, help="Unit to display the balance in")
@click.pass_context
def balance(ctx: click.Context, address: str, block: str, unit: str) -> None:
    """Print the balance of ADDRESS."""
    if not is_address(address):
        click.secho(f"ERROR: Invalid address: {address}", fg="red", err=True)
        sys.exit(1)
    client = get_client(ctx)
    try:
        sha = client.mc.get_balance(address, block)
        click.echo(f"{client.from_sha(sha, unit)} {unit}")
    except (Chain3Error, ValueError) as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(getattr(exc, "exit_code", 1))


@click.command("is-address")
@click.argument("address")
def is_address_cmd(address: str) -> None:
    """Check ADDRESS format and EIP-55 checksum."""
    if not is_address(address):
        click.echo("invalid")
        sys.exit(1)
    kind = "checksummed" if is_checksum_address(address) else "valid"
    click.echo(f"{kind}: {to_checksum_address(address)}")


@click.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show node status."""
    client = get_client(ctx)
    if not client.is_connected():
        click.secho(f"Not connected: {client.current_provider!r}", fg="yellow")
        sys.exit(2)

    try:
        sync = client.mc.syncing()
        rows = [
            ("Provider", repr(client.current_provider)),
            ("Network", client.net.version()),
            ("Peers", str(client.net.peer_count())),
            ("Protocol", client.mc.protocol_version()),
            ("Block", str(client.mc.block_number())),
            ("Syncing", f"{sync.current_block}/{sync.highest_block}" if sync.syncing else "no"),
            ("Gas price", f"{client.mc.gas_price()} sha"),
        ]
    except Chain3Error as exc:
        fail(exc)

    for label, value in rows:
        click.echo(click.style(f"  {label + ':':<11}", dim=True) + value)
