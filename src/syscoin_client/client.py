"""
SyscoinClient - blob and wallet operations over a node connection.

Each operation makes one or two RpcClient calls and reshapes the raw
response. Nothing is cached or retried; transport errors reach the caller
unchanged. The only local recovery is the create-then-load fallback in
create_or_load_wallet.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional, Union

from .errors import MalformedResponse, NotFound, RpcError, WalletError
from .rpc.transport import DEFAULT_TIMEOUT, RealRpcClient, RpcClient, raise_for_rpc_error
from .utils import BytesLike, hex_decode, hex_encode

logger = logging.getLogger(__name__)

# Node error code for "No addresses with label ..."
RPC_WALLET_INVALID_LABEL_NAME = -11

# createwallet's failure text for an existing wallet contains this. A
# substring match is all the node offers; there is no dedicated error code.
WALLET_EXISTS_MARKER = "already exists"


def _result(response: Any, method: str) -> Any:
    if not isinstance(response, dict):
        raise MalformedResponse(f"{method}: expected a response envelope, got {type(response).__name__}")
    raise_for_rpc_error(response, method)
    if "result" not in response:
        raise MalformedResponse(f"{method}: response has no 'result'")
    return response["result"]


@dataclass(frozen=True)
class SyscoinClient:
    """
    Client for Syscoin RPC and the PoDA blob service.

    Safe to share between threads when ``rpc`` is.

    Attributes:
        rpc: Node connection (RealRpcClient, MockRpcClient, ...)
        poda_url: PoDA base URL; version hashes are appended verbatim
    """

    rpc: RpcClient
    poda_url: str

    @classmethod
    def connect(
        cls,
        rpc_url: str,
        user: str,
        password: str,
        poda_url: str,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> "SyscoinClient":
        """Build a client over a RealRpcClient.

        Raises:
            TransportError: If ``rpc_url`` is not a usable endpoint
        """
        return cls(RealRpcClient(rpc_url, user, password, timeout=timeout), poda_url)

    # ============ Blobs ============

    def create_blob(self, data: Union[BytesLike, list[int]]) -> str:
        """
        Create a blob on the Syscoin chain.

        Args:
            data: Raw blob bytes (may be empty)

        Returns:
            Version hash of the new blob
        """
        method = "syscoincreatenevmblob"
        payload = bytes(data)
        result = _result(self.rpc.call(method, [hex_encode(payload)]), method)
        version_hash = result.get("versionhash") if isinstance(result, dict) else None
        if not isinstance(version_hash, str):
            raise MalformedResponse(f"{method}: result has no string 'versionhash': {result!r}")
        logger.info("blob_created", extra={"version_hash": version_hash, "size": len(payload)})
        return version_hash

    def get_blob_from_cloud(self, version_hash: str) -> bytes:
        """Fetch blob bytes from PoDA by version hash."""
        url = f"{self.poda_url}{version_hash}"
        logger.debug("poda_fetch", extra={"url": url})
        return hex_decode(self.rpc.http_get(url))

    def transaction_receipt(self, version_hash: str) -> Optional[dict]:
        """Blob metadata for ``version_hash``, or None if the node has no record object."""
        method = "getnevmblobdata"
        result = _result(self.rpc.call(method, [version_hash]), method)
        return result if isinstance(result, dict) else None

    # ============ Wallet ============

    def get_balance(self) -> Decimal:
        return self.rpc.get_balance(None, None)

    def get_new_address(self, label: str) -> str:
        method = "getnewaddress"
        address = _result(self.rpc.call(method, [label]), method)
        if not isinstance(address, str):
            raise MalformedResponse(f"{method}: expected an address string, got {address!r}")
        return address

    def fetch_addresses_by_label(self, label: str) -> list[str]:
        """
        All addresses carrying ``label``, in the order the node lists them.

        Raises:
            NotFound: If no address carries the label
        """
        method = "getaddressesbylabel"
        try:
            result = _result(self.rpc.call(method, [label]), method)
        except RpcError as exc:
            if exc.code == RPC_WALLET_INVALID_LABEL_NAME:
                raise NotFound(f"No address found for label {label!r}") from exc
            raise
        if result is None:
            result = {}
        if not isinstance(result, dict):
            raise MalformedResponse(f"{method}: expected an object, got {result!r}")
        if not result:
            raise NotFound(f"No address found for label {label!r}")
        return list(result)

    def fetch_address_by_label(self, label: str) -> str:
        """
        First address carrying ``label``.

        The node does not define an order for its result, so when several
        addresses share a label the one returned is whichever it lists first.
        """
        return self.fetch_addresses_by_label(label)[0]

    def block_number(self) -> int:
        method = "getblockcount"
        height = _result(self.rpc.call(method, []), method)
        if isinstance(height, bool) or not isinstance(height, int):
            raise MalformedResponse(f"{method}: expected an integer, got {height!r}")
        return height

    def create_or_load_wallet(self, name: str) -> None:
        """
        Create wallet ``name``, or load it if it already exists.

        Raises:
            WalletError: If creation fails for another reason, or loading fails
        """
        try:
            _result(self.rpc.call("createwallet", [name]), "createwallet")
        except RpcError as exc:
            if WALLET_EXISTS_MARKER not in exc.message:
                raise WalletError(f"Failed to create or load wallet: {exc.message}") from exc
        else:
            logger.info("wallet_created", extra={"wallet": name})
            return

        logger.info("wallet_exists_loading", extra={"wallet": name})
        try:
            _result(self.rpc.call("loadwallet", [name]), "loadwallet")
        except RpcError as exc:
            raise WalletError(f"Failed to load wallet: {exc.message}") from exc
        logger.info("wallet_loaded", extra={"wallet": name})
