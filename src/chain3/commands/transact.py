"""
Transaction commands - send transactions through node-managed accounts
and run read-only contract calls.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import click

from ..errors import Chain3Error
from ..mc.contract import Contract, load_abi
from ..types import TransactionRequest, address_param
from ..units import to_quantity
from ..utils import hex_to_bytes
from . import fail, get_client


@click.command()
@click.option("--from", "sender", required=True, help="Sender address (unlocked on the node)")
@click.option("--to", "recipient", default=None, help="Recipient address")
@click.option("--value", default="0", show_default=True, help="Amount to send")
@click.option("--unit", default="sha", show_default=True, help="Unit of --value")
@click.option("--gas", default=None, help="Gas limit")
@click.option("--gas-price", default=None, help="Gas price in sha")
@click.option("--data", default=None, help="Hex call data")
@click.pass_context
def send(
    ctx: click.Context,
    sender: str,
    recipient: Optional[str],
    value: str,
    unit: str,
    gas: Optional[str],
    gas_price: Optional[str],
    data: Optional[str],
) -> None:
    """Send a transaction signed by the node (mc_sendTransaction)."""
    client = get_client(ctx)
    try:
        request = TransactionRequest(
            from_=address_param(sender),
            to=address_param(recipient) if recipient else None,
            value=to_quantity(client.to_sha(value, unit)),
            gas=to_quantity(gas) if gas else None,
            gas_price=to_quantity(gas_price) if gas_price else None,
            data=hex_to_bytes(data) if data else None,
        )
    except Chain3Error as exc:
        fail(exc)
    except ValueError as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(1)

    try:
        tx_hash = client.mc.send_transaction(request)
    except Chain3Error as exc:
        fail(exc)
    click.echo(f"tx {tx_hash}")


@click.command()
@click.option("--contract", required=True, help="Contract address")
@click.option("--abi", "abi_path", required=True, type=click.Path(exists=True, path_type=Path),
              help="ABI JSON file (list or compiler artifact)")
@click.option("--function", "func_name", required=True, help="Function name to call")
@click.option("--args", "args_json", default="[]", help="Function args as JSON array")
@click.option("--block", default="latest", show_default=True, help="Block number or tag")
@click.pass_context
def call(
    ctx: click.Context,
    contract: str,
    abi_path: Path,
    func_name: str,
    args_json: str,
    block: str,
) -> None:
    """Run a read-only contract call (mc_call)."""
    try:
        args = json.loads(args_json)
        if not isinstance(args, list):
            raise ValueError("Args must be a JSON array")
        abi = load_abi(abi_path)
    except (json.JSONDecodeError, ValueError) as exc:
        click.secho(f"ERROR: Invalid input: {exc}", fg="red", err=True)
        sys.exit(1)

    target = Contract(get_client(ctx).mc, contract, abi)
    try:
        result = target.call(func_name, *args, block=block)
    except Chain3Error as exc:
        fail(exc)
    except ValueError as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(1)
    click.echo(result)
