"""
Chain3 CLI

Command-line interface for a MOAC node's JSON-RPC API.

Commands:
  status        - Show node status
  block-number  - Print the latest block number
  balance       - Print an account balance
  is-address    - Check an address and its EIP-55 checksum
  to-sha        - Convert an amount into sha
  from-sha      - Convert an amount of sha into another unit
  units         - List known units
  watch         - Follow new blocks or pending transactions
  send          - Send a transaction through a node-managed account
  call          - Run a read-only contract call
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import click

from .commands import RPC_URL_KEY
from .config import RPC_URL_VAR


# ============ Constants ============

VERSION = "0.1.0"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="chain3")
@click.option(
    "--rpc-url",
    default=None,
    envvar=RPC_URL_VAR,
    help="Node JSON-RPC endpoint (default: http://localhost:8545)",
)
@click.option("--verbose", "-v", is_flag=True, help="Log RPC traffic to stderr")
@click.pass_context
def cli(ctx: click.Context, rpc_url: Optional[str], verbose: bool) -> None:
    """Chain3 - MOAC JSON-RPC client."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
    ctx.meta[RPC_URL_KEY] = rpc_url
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ============ Commands ============

from .commands.query import balance, block_number, is_address_cmd, status
from .commands.convert import from_sha_cmd, to_sha_cmd, units_cmd
from .commands.watch import watch
from .commands.transact import call, send

cli.add_command(status)
cli.add_command(block_number)
cli.add_command(balance)
cli.add_command(is_address_cmd)
cli.add_command(to_sha_cmd)
cli.add_command(from_sha_cmd)
cli.add_command(units_cmd)
cli.add_command(watch)
cli.add_command(send)
cli.add_command(call)


# ============ Entry Points ============


def main() -> None:
    """Chain3 CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
