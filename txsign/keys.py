import json
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from .encoding import b58decode
from .errors import InvalidCharacter, InvalidKeyLength, UnsupportedKeyFormat

SEED_LENGTH = 32
KEYPAIR_LENGTH = 64


@dataclass(frozen=True)
class Base58String:
    value: str


@dataclass(frozen=True)
class JsonByteArrayString:
    value: str


@dataclass(frozen=True)
class ByteArray:
    value: Sequence[int]


KeyMaterialInput = Union[Base58String, JsonByteArrayString, ByteArray]


def classify_key_input(raw: object) -> KeyMaterialInput:
    """Tag a caller-supplied private key with the encoding it arrived in."""
    if isinstance(raw, (Base58String, JsonByteArrayString, ByteArray)):
        return raw
    if isinstance(raw, str):
        if raw.lstrip().startswith("["):
            return JsonByteArrayString(raw)
        return Base58String(raw.strip())
    if isinstance(raw, (list, tuple, bytes, bytearray)):
        return ByteArray(raw)
    raise UnsupportedKeyFormat(
        f"Private key must be a base58 string or an array of bytes, got {type(raw).__name__}"
    )


def _to_bytes(values: Sequence[int]) -> bytearray:
    if len(values) not in (SEED_LENGTH, KEYPAIR_LENGTH):
        raise InvalidKeyLength(
            f"Private key must be {SEED_LENGTH} or {KEYPAIR_LENGTH} bytes, got {len(values)}"
        )
    if isinstance(values, (bytes, bytearray)):
        return bytearray(values)
    out = bytearray(len(values))
    for i, v in enumerate(values):
        # bool is an int subclass; [true, false] is not key material
        if isinstance(v, bool) or not isinstance(v, int) or not 0 <= v <= 255:
            raise UnsupportedKeyFormat(f"Private key byte at index {i} is not an integer in 0..255")
        out[i] = v
    return out


def key_material_bytes(material: KeyMaterialInput) -> bytearray:
    if isinstance(material, Base58String):
        try:
            return bytearray(b58decode(material.value))
        except InvalidCharacter as e:
            raise UnsupportedKeyFormat(
                "Private key is neither valid base58 nor a JSON byte array"
            ) from e

    if isinstance(material, JsonByteArrayString):
        try:
            parsed = json.loads(material.value)
        except json.JSONDecodeError as e:
            raise UnsupportedKeyFormat(f"Private key JSON array is malformed: {e.msg}") from e
        except RecursionError as e:
            raise UnsupportedKeyFormat("Private key JSON array is nested too deeply") from e
        if not isinstance(parsed, list):
            raise UnsupportedKeyFormat("Private key JSON must be an array of integers")
        return _to_bytes(parsed)

    if isinstance(material, ByteArray):
        return _to_bytes(material.value)

    raise UnsupportedKeyFormat(f"Unknown key material variant: {type(material).__name__}")


def wipe(buf: Optional[bytearray]) -> None:
    """Overwrite a key buffer in place."""
    if buf is not None:
        buf[:] = bytes(len(buf))


def normalize_private_key(raw: object) -> bytearray:
    """Turn any supported private key encoding into a 32-byte signing seed.

    Accepts a base58 string, a JSON array string (e.g. a Solana CLI keypair
    file's contents) or a sequence of integers. 64-byte keys are
    secret || public, only the first 32 bytes are kept.

    The returned buffer is owned by the caller, who should `wipe` it once
    signing is done.
    """
    material = key_material_bytes(classify_key_input(raw))
    try:
        if len(material) not in (SEED_LENGTH, KEYPAIR_LENGTH):
            raise InvalidKeyLength(
                f"Private key must be {SEED_LENGTH} or {KEYPAIR_LENGTH} bytes, got {len(material)}"
            )
        return bytearray(material[:SEED_LENGTH])
    finally:
        wipe(material)
