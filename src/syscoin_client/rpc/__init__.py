"""
Node connections for the Syscoin client.

RealRpcClient talks to a running node over basic-auth JSON-RPC;
MockRpcClient answers from canned tables for tests.
"""

from .mock import MOCK_BALANCE, MOCK_BLOB_BODY, MOCK_VERSION_HASH, MockRpcClient
from .transport import DEFAULT_TIMEOUT, RealRpcClient, RpcClient, raise_for_rpc_error

__all__ = [
    "DEFAULT_TIMEOUT",
    "MOCK_BALANCE",
    "MOCK_BLOB_BODY",
    "MOCK_VERSION_HASH",
    "MockRpcClient",
    "RealRpcClient",
    "RpcClient",
    "raise_for_rpc_error",
]
