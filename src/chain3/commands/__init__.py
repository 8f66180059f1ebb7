"""
CLI commands, one module per concern.

Commands get their client through ``get_client`` so tests can inject a
Chain3 bound to a mock provider with ``CliRunner.invoke(obj=...)``.
"""

from __future__ import annotations

import sys
from dataclasses import replace
from typing import NoReturn

import click

from ..chain3 import Chain3
from ..config import load_settings
from ..errors import Chain3Error

RPC_URL_KEY = "chain3.rpc_url"


def get_client(ctx: click.Context) -> Chain3:
    root = ctx.find_root()
    if not isinstance(root.obj, Chain3):
        try:
            settings = load_settings()
        except Chain3Error as exc:
            fail(exc)
        rpc_url = root.meta.get(RPC_URL_KEY)
        if rpc_url:
            settings = replace(settings, rpc_url=rpc_url)
        root.obj = Chain3(settings=settings)
    return root.obj


def fail(exc: Chain3Error) -> NoReturn:
    click.secho(f"ERROR: {exc}", fg="red", err=True)
    sys.exit(exc.exit_code)
