import base64
import binascii
from typing import Union

import base58

from .errors import InvalidCharacter, InvalidEncoding

# Base58 without 0,O,I,l
ALPHABET = b"123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_ALPHABET_CHARS = frozenset(ALPHABET.decode("ascii"))


def b58decode(value: str) -> bytes:
    """Decode a base58 string; leading '1's become leading zero bytes."""
    bad = next((c for c in value if c not in _ALPHABET_CHARS), None)
    if bad is not None:
        raise InvalidCharacter(f"Invalid base58 character {bad!r}")
    try:
        return base58.b58decode(value, alphabet=ALPHABET)
    except ValueError as e:
        # UnicodeEncodeError is a ValueError too (non-ascii input)
        raise InvalidCharacter(f"Invalid base58 string: {e}") from e


def b58encode(data: Union[bytes, bytearray]) -> str:
    if not data:
        return ""
    return base58.b58encode(bytes(data), alphabet=ALPHABET).decode("ascii")


def b64decode(value: str) -> bytes:
    """Strict RFC 4648 decode: standard alphabet, '=' padding, no whitespace."""
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidEncoding(f"Invalid base64 string: {e}") from e


def b64encode(data: Union[bytes, bytearray]) -> str:
    return base64.b64encode(bytes(data)).decode("utf-8")
