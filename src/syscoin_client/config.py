"""
Connection settings for the command-line client.

Settings come from SYSCOIN_* environment variables, optionally seeded from
~/.syscoin-client/.env. The library itself never reads configuration;
callers construct SyscoinClient directly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .client import SyscoinClient
from .rpc.transport import DEFAULT_TIMEOUT

# Default config directory
CONFIG_DIR = Path.home() / ".syscoin-client"
CONFIG_ENV = CONFIG_DIR / ".env"

DEFAULT_RPC_URL = "http://127.0.0.1:8370"
DEFAULT_PODA_URL = "http://poda.syscoin.org/"


def load_env(env_path: Optional[Path] = None) -> bool:
    """
    Load SYSCOIN_* variables from a .env file.

    Variables already set in the environment win over the file.

    Args:
        env_path: Path to .env file (default: ~/.syscoin-client/.env)

    Returns:
        True if a file was loaded
    """
    env_path = env_path or CONFIG_ENV
    if not env_path.exists():
        return False
    return load_dotenv(env_path, override=False)


@dataclass(frozen=True)
class ClientSettings:
    rpc_url: str = DEFAULT_RPC_URL
    rpc_user: str = ""
    rpc_password: str = ""
    poda_url: str = DEFAULT_PODA_URL
    timeout: float = DEFAULT_TIMEOUT

    def __repr__(self) -> str:
        return (
            f"ClientSettings(rpc_url={self.rpc_url!r}, rpc_user={self.rpc_user!r}, "
            f"poda_url={self.poda_url!r}, timeout={self.timeout!r})"
        )

    @classmethod
    def from_env(cls) -> "ClientSettings":
        """Read settings from SYSCOIN_* environment variables.

        For programs embedding the client. The CLI reads the same variables
        through its click options, so command-line flags can override them.
        """
        timeout = os.environ.get("SYSCOIN_RPC_TIMEOUT")
        try:
            timeout_value = float(timeout) if timeout else DEFAULT_TIMEOUT
        except ValueError as exc:
            raise ValueError(f"SYSCOIN_RPC_TIMEOUT must be a number, got {timeout!r}") from exc
        return cls(
            rpc_url=os.environ.get("SYSCOIN_RPC_URL", DEFAULT_RPC_URL),
            rpc_user=os.environ.get("SYSCOIN_RPC_USER", ""),
            rpc_password=os.environ.get("SYSCOIN_RPC_PASSWORD", ""),
            poda_url=os.environ.get("SYSCOIN_PODA_URL", DEFAULT_PODA_URL),
            timeout=timeout_value,
        )

    def connect(self) -> SyscoinClient:
        return SyscoinClient.connect(
            self.rpc_url,
            self.rpc_user,
            self.rpc_password,
            self.poda_url,
            timeout=self.timeout,
        )
