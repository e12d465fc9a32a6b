from __future__ import annotations

from typing import Union

from .errors import DecodeError

BytesLike = Union[bytes, bytearray, memoryview]


def hex_encode(data: BytesLike) -> str:
    return bytes(data).hex()


def hex_decode(body: Union[str, bytes]) -> bytes:
    """Decode a hex payload, ignoring surrounding whitespace.

    Raises:
        DecodeError: If the payload is not ASCII or not valid hex.
    """
    if isinstance(body, (bytes, bytearray, memoryview)):
        try:
            body = bytes(body).decode("ascii")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"Blob payload is not ASCII hex: {exc}") from exc
    text = body.strip()
    if any(c.isspace() for c in text):
        raise DecodeError("Blob payload has whitespace between hex digits")
    try:
        return bytes.fromhex(text)
    except ValueError as exc:
        raise DecodeError(f"Blob payload is not valid hex: {exc}") from exc
