"""
Canned node connection for deterministic tests. No network access.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Optional

from ..errors import RpcError, TransportError

MOCK_VERSION_HASH = "mocked_version_hash"
MOCK_BALANCE = Decimal("100.0")
MOCK_BLOB_BODY = b"010203"


@dataclass
class MockRpcClient:
    """
    RpcClient that answers from fixed tables.

    ``syscoincreatenevmblob`` always yields MOCK_VERSION_HASH,
    ``get_balance`` always yields MOCK_BALANCE, and ``http_get`` only
    succeeds for URLs ending in MOCK_VERSION_HASH. Other methods return
    ``responses[method]`` as the result (None if absent); ``errors[method]``
    is raised instead when set. Envelopes in ``envelopes`` are returned
    as-is, which lets tests feed error envelopes without an exception.

    Attributes:
        calls: Every ``(method, params)`` seen, in order
    """

    responses: dict[str, Any] = field(default_factory=dict)
    errors: dict[str, RpcError] = field(default_factory=dict)
    envelopes: dict[str, dict] = field(default_factory=dict)
    calls: list[tuple[str, list]] = field(default_factory=list)

    def call(self, method: str, params: list) -> dict:
        self.calls.append((method, list(params)))
        if method in self.errors:
            raise self.errors[method]
        if method in self.envelopes:
            return self.envelopes[method]
        if method == "syscoincreatenevmblob":
            return {"result": {"versionhash": MOCK_VERSION_HASH}, "error": None, "id": 1}
        return {"result": self.responses.get(method), "error": None, "id": 1}

    def get_balance(
        self,
        account: Optional[str] = None,
        include_watch_only: Optional[bool] = None,
    ) -> Decimal:
        self.calls.append(("getbalance", [account, include_watch_only]))
        return MOCK_BALANCE

    def http_get(self, url: str) -> bytes:
        self.calls.append(("GET", [url]))
        if url.endswith(MOCK_VERSION_HASH):
            return MOCK_BLOB_BODY
        raise TransportError(f"GET {url} returned 404")
