"""
Unit conversion commands - no node access needed.
"""

from __future__ import annotations

import sys
from typing import Callable

import click

from ..errors import UnknownUnitError
from ..units import DEFAULT_UNIT_TABLE, from_sha, to_sha


def _run(convert: Callable[[str, str], str], value: str, unit: str) -> None:
    try:
        click.echo(convert(value, unit))
    except UnknownUnitError as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(exc.exit_code)
    except ValueError as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(1)


@click.command("to-sha")
@click.argument("value")
@click.argument("unit", default="mc")
def to_sha_cmd(value: str, unit: str) -> None:
    """Convert VALUE in UNIT to sha."""
    _run(to_sha, value, unit)


@click.command("from-sha")
@click.argument("value")
@click.argument("unit", default="mc")
def from_sha_cmd(value: str, unit: str) -> None:
    """Convert VALUE in sha to UNIT."""
    _run(from_sha, value, unit)


@click.command("units")
def units_cmd() -> None:
    """List known unit names and their scale in sha."""
    for name, factor in sorted(DEFAULT_UNIT_TABLE.items(), key=lambda item: (item[1], item[0])):
        click.echo(f"  {name:<9} {factor}")
