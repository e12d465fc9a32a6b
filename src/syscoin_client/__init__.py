"""
Syscoin Client - blob and wallet operations for a Syscoin node.

Bridges the node's JSON-RPC interface with the PoDA cloud blob service:
create a blob on-chain, fetch its bytes back by version hash, and manage
the wallet that pays for it.
"""

import logging

__version__ = "0.1.0"

__all__ = [
    # Client
    "SyscoinClient",
    # Node connections
    "RpcClient",
    "RealRpcClient",
    "MockRpcClient",
    # Errors
    "SyscoinClientError",
    "TransportError",
    "RpcError",
    "MalformedResponse",
    "DecodeError",
    "NotFound",
    "WalletError",
    # Configuration
    "ClientSettings",
    "load_env",
    "configure_logging",
]

from .client import SyscoinClient
from .config import ClientSettings, load_env
from .errors import (
    DecodeError,
    MalformedResponse,
    NotFound,
    RpcError,
    SyscoinClientError,
    TransportError,
    WalletError,
)
from .log import configure_logging
from .rpc import MockRpcClient, RealRpcClient, RpcClient

logging.getLogger(__name__).addHandler(logging.NullHandler())
