"""
JSON-RPC transport for a Syscoin node.

Uses httpx for both the node's basic-auth JSON-RPC endpoint and plain GETs
against the PoDA blob service. A short-lived httpx.Client is opened per
request, so one RealRpcClient can be shared between threads.
"""

from __future__ import annotations

import itertools
import json
import logging
from decimal import Decimal
from typing import Any, Optional, Protocol

import httpx

from ..errors import MalformedResponse, RpcError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class RpcClient(Protocol):
    """What SyscoinClient needs from a node connection.

    Implementations must be safe for concurrent calls if the SyscoinClient
    holding them is shared between threads.
    """

    def call(self, method: str, params: list) -> dict:
        ...

    def get_balance(
        self,
        account: Optional[str] = None,
        include_watch_only: Optional[bool] = None,
    ) -> Decimal:
        ...

    def http_get(self, url: str) -> bytes:
        ...


def raise_for_rpc_error(response: dict, method: str) -> None:
    """Raise RpcError if a response envelope carries a non-null ``error``."""
    error = response.get("error")
    if error is None:
        return
    if isinstance(error, dict):
        raise RpcError(
            str(error.get("message", "Unknown error")),
            code=error.get("code"),
            method=method,
        )
    raise RpcError(str(error), method=method)


def _validate_endpoint(url: str) -> httpx.URL:
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as exc:
        raise TransportError(f"Invalid RPC endpoint {url!r}: {exc}") from exc
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise TransportError(f"Invalid RPC endpoint {url!r}: expected http(s)://host[:port]")
    return parsed


class RealRpcClient:
    """
    Node connection over basic-auth JSON-RPC.

    Attributes:
        rpc_url: Node endpoint, e.g. ``http://127.0.0.1:8370``
        timeout: Per-request timeout in seconds
    """

    def __init__(
        self,
        rpc_url: str,
        user: str,
        password: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._endpoint = _validate_endpoint(rpc_url)
        self.rpc_url = rpc_url
        self.timeout = timeout
        self._auth = httpx.BasicAuth(user, password)
        self._transport = transport
        self._ids = itertools.count(1)

    def __repr__(self) -> str:
        return f"RealRpcClient(rpc_url={self.rpc_url!r})"

    def _client(self, **kwargs: Any) -> httpx.Client:
        return httpx.Client(timeout=self.timeout, transport=self._transport, **kwargs)

    def call(self, method: str, params: list) -> dict:
        """
        Make a JSON-RPC call.

        Args:
            method: RPC method name (e.g., "getblockcount")
            params: Positional RPC parameters

        Returns:
            The full response envelope (``result``, ``error``, ``id``)

        Raises:
            TransportError: If the node cannot be reached
            RpcError: If the node reports an error
            MalformedResponse: If the body is not a JSON-RPC envelope
        """
        request_id = next(self._ids)
        payload = {
            "jsonrpc": "2.0",
            "id": request_id,
            "method": method,
            "params": params,
        }
        logger.debug("rpc_call", extra={"rpc_method": method, "request_id": request_id})

        try:
            with self._client(auth=self._auth) as client:
                response = client.post(self._endpoint, json=payload)
        except httpx.HTTPError as exc:
            raise TransportError(f"RPC request {method} failed: {exc}") from exc

        # The node reports RPC errors with a non-2xx status and a JSON body,
        # so the body is inspected before the status.
        try:
            data = response.json(parse_float=Decimal)
        except (json.JSONDecodeError, UnicodeDecodeError):
            if response.is_success:
                raise MalformedResponse(f"{method}: response is not JSON")
            raise RpcError(
                f"HTTP {response.status_code} {response.reason_phrase}".strip(),
                method=method,
            )

        if not isinstance(data, dict):
            raise MalformedResponse(f"{method}: expected a JSON object, got {type(data).__name__}")

        raise_for_rpc_error(data, method)
        if not response.is_success:
            raise RpcError(f"HTTP {response.status_code}", method=method)
        return data

    def get_balance(
        self,
        account: Optional[str] = None,
        include_watch_only: Optional[bool] = None,
    ) -> Decimal:
        """
        Get the wallet balance.

        Args:
            account: Must be None or ``"*"``; the node removed per-account
                     balances and rejects any other first argument
            include_watch_only: Include watch-only addresses

        Returns:
            Balance in SYS

        Raises:
            ValueError: If ``account`` is anything but None or ``"*"``
        """
        if account not in (None, "*"):
            raise ValueError(f"getbalance only accepts account '*', got {account!r}")

        params: list = []
        if account is not None or include_watch_only is not None:
            params = ["*", 0]
            if include_watch_only is not None:
                params.append(include_watch_only)

        result = self.call("getbalance", params).get("result")
        if isinstance(result, bool) or not isinstance(result, (int, Decimal)):
            raise MalformedResponse(f"getbalance: expected a number, got {result!r}")
        return Decimal(result)

    def http_get(self, url: str) -> bytes:
        """Fetch the full body of ``url``."""
        try:
            with self._client(follow_redirects=True) as client:
                response = client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TransportError(f"GET {url} returned {exc.response.status_code}") from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(f"GET {url!r} failed: {exc}") from exc
        return response.content
