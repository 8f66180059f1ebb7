"""
Client configuration.

Values come from the process environment, optionally seeded from
~/.chain3/.env (python-dotenv). Explicit arguments always win over both.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigError

CHAIN3_DIR = Path.home() / ".chain3"
CHAIN3_ENV = CHAIN3_DIR / ".env"

DEFAULT_RPC_URL = "http://localhost:8545"
DEFAULT_TIMEOUT = 30.0
DEFAULT_POLL_INTERVAL = 1.0

RPC_URL_VAR = "CHAIN3_RPC_URL"
TIMEOUT_VAR = "CHAIN3_RPC_TIMEOUT"
POLL_INTERVAL_VAR = "CHAIN3_POLL_INTERVAL"


@dataclass(frozen=True)
class Settings:
    rpc_url: str = DEFAULT_RPC_URL
    timeout: float = DEFAULT_TIMEOUT
    poll_interval: float = DEFAULT_POLL_INTERVAL


def _positive_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}", key=name) from None
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}", key=name)
    return value


def load_env(env_path: Optional[Path] = None) -> None:
    """Load the .env file into os.environ without overriding set variables."""
    env_path = env_path or CHAIN3_ENV
    if env_path.exists():
        load_dotenv(env_path, override=False)


def get_rpc_url() -> str:
    """Get the RPC URL from environment or default."""
    return os.environ.get(RPC_URL_VAR) or DEFAULT_RPC_URL


def get_poll_interval() -> float:
    """Get the filter polling interval (seconds) from environment or default."""
    return _positive_float(POLL_INTERVAL_VAR, DEFAULT_POLL_INTERVAL)


def load_settings(env_path: Optional[Path] = None) -> Settings:
    """
    Build Settings from the .env file and environment.

    Args:
        env_path: Path to .env file (default: ~/.chain3/.env)

    Returns:
        Settings instance

    Raises:
        ConfigError: If a numeric variable is malformed or not positive
    """
    load_env(env_path)
    return Settings(
        rpc_url=get_rpc_url(),
        timeout=_positive_float(TIMEOUT_VAR, DEFAULT_TIMEOUT),
        poll_interval=get_poll_interval(),
    )
