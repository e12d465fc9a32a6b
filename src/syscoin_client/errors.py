"""
Error taxonomy for the Syscoin client.

Every public operation either returns a value or raises one of these.
``exit_code`` is what the CLI exits with when the error reaches it.
"""

from __future__ import annotations

from typing import Optional


class SyscoinClientError(RuntimeError):
    exit_code: int = 1


class TransportError(SyscoinClientError):
    """Network or connection failure at the RPC or HTTP layer."""

    exit_code = 2


class RpcError(SyscoinClientError):
    """The node answered with an error envelope."""

    exit_code = 3

    def __init__(self, message: str, code: Optional[int] = None, method: Optional[str] = None) -> None:
        self.message = message
        self.code = code
        self.method = method
        super().__init__(message)

    def __str__(self) -> str:
        prefix = f"{self.method}: " if self.method else ""
        if self.code is not None:
            return f"{prefix}{self.message} (code {self.code})"
        return f"{prefix}{self.message}"


class MalformedResponse(SyscoinClientError):
    exit_code = 4


class DecodeError(SyscoinClientError):
    exit_code = 5


class NotFound(SyscoinClientError):
    exit_code = 6


class WalletError(SyscoinClientError):
    exit_code = 7
