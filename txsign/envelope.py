from dataclasses import dataclass
from typing import Union

from .errors import (
    EnvelopeTooShort,
    SigningFailed,
    TruncatedTransaction,
    UnsupportedSignatureCount,
)

SIGNATURE_LENGTH = 64
# Signature slot 0 starts right after the one-byte count prefix
FIRST_SLOT_OFFSET = 1


@dataclass(frozen=True)
class ParsedEnvelope:
    num_signatures: int
    message_start: int
    message: bytes

    @property
    def message_length(self) -> int:
        return len(self.message)


def parse_envelope(raw_tx: Union[bytes, bytearray], single_signer: bool = True) -> ParsedEnvelope:
    """Locate the signable message inside a serialized transaction.

    Layout: count byte, `count` 64-byte signature slots, message. The count is
    read as a single byte; the compact-u16 multi-byte form (>127 signatures)
    is not supported.
    """
    if not raw_tx:
        raise TruncatedTransaction("Transaction is empty")

    num_signatures = raw_tx[0]
    if num_signatures == 0:
        raise UnsupportedSignatureCount("Transaction requires no signatures")
    if single_signer and num_signatures != 1:
        raise UnsupportedSignatureCount(
            f"Transaction requires {num_signatures} signatures, only single-signer transactions are supported"
        )

    message_start = FIRST_SLOT_OFFSET + SIGNATURE_LENGTH * num_signatures
    if message_start > len(raw_tx):
        raise TruncatedTransaction(
            f"Transaction is {len(raw_tx)} bytes, {num_signatures} signature slot(s) need at least {message_start}"
        )

    return ParsedEnvelope(
        num_signatures=num_signatures,
        message_start=message_start,
        message=bytes(raw_tx[message_start:]),
    )


def splice_signature(raw_tx: Union[bytes, bytearray], signature: Union[bytes, bytearray]) -> bytes:
    """Write `signature` into signature slot 0. Length is unchanged."""
    end = FIRST_SLOT_OFFSET + SIGNATURE_LENGTH
    if len(raw_tx) < end:
        raise EnvelopeTooShort(f"Transaction is {len(raw_tx)} bytes, need at least {end} for a signature slot")
    if len(signature) != SIGNATURE_LENGTH:
        raise SigningFailed(f"Signature must be {SIGNATURE_LENGTH} bytes, got {len(signature)}")

    signed = bytearray(raw_tx)
    signed[FIRST_SLOT_OFFSET:end] = signature
    return bytes(signed)
