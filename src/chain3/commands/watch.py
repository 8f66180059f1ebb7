"""
Watch command - follow new blocks or pending transactions.

For new blocks, prints every transaction in the block, or only those
sent from or to --address.
"""

from __future__ import annotations

from typing import Optional

import click

from ..errors import Chain3Error
from ..mc.api import Mc
from ..types import Hash, Transaction
from . import fail, get_client


def _print_block(mc: Mc, block_hash: Hash, address: Optional[str]) -> None:
    block = mc.get_block_by_hash(block_hash, full_transactions=True)
    if block is None:
        click.echo(f"block {block_hash} not found")
        return
    click.echo(f"block {block.number} {block_hash} ({len(block.transactions)} txs)")
    for i, tx in enumerate(block.transactions):
        if not isinstance(tx, Transaction):
            tx = mc.get_transaction_by_hash(tx)
            if tx is None:
                continue
        if address is not None:
            parties = {str(tx.from_).lower(), str(tx.to).lower()}
            if address.lower() not in parties:
                continue
        click.echo(f"  tx {i} {tx.hash} {tx.input.hex()}")


@click.command()
@click.option(
    "--kind",
    type=click.Choice(["blocks", "pending"]),
    default="blocks",
    show_default=True,
    help="What to watch",
)
@click.option("--address", default=None, help="Only show transactions from/to this address")
@click.option("--count", default=0, type=int, help="Stop after N entries (0: until interrupted)")
@click.option("--interval", default=None, type=float, help="Seconds between polls")
@click.pass_context
def watch(
    ctx: click.Context,
    kind: str,
    address: Optional[str],
    count: int,
    interval: Optional[float],
) -> None:
    """Watch the chain for new blocks or pending transactions."""
    mc = get_client(ctx).mc
    try:
        if kind == "blocks":
            flt = mc.new_block_filter()
        else:
            flt = mc.new_pending_transaction_filter()
    except Chain3Error as exc:
        fail(exc)

    click.echo(f"Filter ID: {flt.id}")
    seen = 0
    try:
        with flt:
            for entry in flt.watch(interval):
                if kind == "blocks":
                    _print_block(mc, entry, address)
                else:
                    click.echo(f"tx {entry}")
                seen += 1
                if count and seen >= count:
                    break
    except KeyboardInterrupt:
        click.echo("Stopped.")
    except Chain3Error as exc:
        fail(exc)
