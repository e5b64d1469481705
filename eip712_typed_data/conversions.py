"""Byte coercion and hashing helpers."""

from eth_utils.conversions import to_bytes as _hex_to_bytes
from eth_utils.crypto import keccak
from eth_utils.hexadecimal import is_0x_prefixed, is_hexstr

from eip712_typed_data.exceptions import InvalidInputKind


def to_bytes(value) -> bytes:
    r"""Normalize a value into bytes.

    Accepted inputs:
        - a 0x-prefixed hex string, decoded as hex (``"0x"`` gives ``b""``). A trailing odd
          nibble is dropped, so ``"0xabc"`` gives ``b"\xab"``
        - bytes or bytearray, returned as bytes
        - a list or tuple of ints in the range 0-255
        - any other string, encoded as UTF-8

    Raises:
        InvalidInputKind: for any other kind of value.
    """
    if isinstance(value, str):
        if is_0x_prefixed(value) and is_hexstr(value):
            return _hex_to_bytes(hexstr=value[: len(value) - len(value) % 2])
        return value.encode("utf-8")
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, (list, tuple)):
        if not all(isinstance(b, int) and not isinstance(b, bool) and 0 <= b <= 255 for b in value):
            raise InvalidInputKind(value)
        return bytes(value)
    raise InvalidInputKind(value)


def sha3(value) -> bytes:
    """Keccak-256 hash of any value accepted by ``to_bytes``."""
    return keccak(to_bytes(value))
