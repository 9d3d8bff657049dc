import pytest

from txsign.envelope import SIGNATURE_LENGTH, parse_envelope, splice_signature
from txsign.errors import (
    EnvelopeTooShort,
    SigningFailed,
    TruncatedTransaction,
    UnsupportedSignatureCount,
)


def _envelope(num_signatures: int, message: bytes) -> bytes:
    return bytes([num_signatures]) + b"\x00" * (SIGNATURE_LENGTH * num_signatures) + message


def test_parse_single_signer_envelope():
    env = parse_envelope(_envelope(1, b"M"))
    assert env.num_signatures == 1
    assert env.message_start == 65
    assert env.message == b"M"
    assert env.message_length == 1


def test_parse_allows_empty_message():
    env = parse_envelope(_envelope(1, b""))
    assert env.message == b""


def test_zero_signatures_rejected():
    with pytest.raises(UnsupportedSignatureCount):
        parse_envelope(b"\x00" + b"message")


def test_multi_signer_rejected_in_single_signer_mode():
    with pytest.raises(UnsupportedSignatureCount):
        parse_envelope(_envelope(2, b"M"))


def test_multi_signer_allowed_when_configured():
    env = parse_envelope(_envelope(2, b"MSG"), single_signer=False)
    assert env.num_signatures == 2
    assert env.message_start == 1 + 64 * 2
    assert env.message == b"MSG"


@pytest.mark.parametrize("raw", [b"", b"\x01", b"\x01" + b"\x00" * 63])
def test_truncated_transaction(raw):
    with pytest.raises(TruncatedTransaction):
        parse_envelope(raw)


def test_truncated_multi_signer_transaction():
    with pytest.raises(TruncatedTransaction):
        parse_envelope(b"\x03" + b"\x00" * 128, single_signer=False)


def test_splice_writes_slot_zero_only():
    raw = _envelope(1, b"message bytes")
    sig = bytes(range(64))
    signed = splice_signature(raw, sig)

    assert len(signed) == len(raw)
    assert signed[:1] == raw[:1]
    assert signed[1:65] == sig
    assert signed[65:] == raw[65:]


def test_splice_leaves_other_slots_untouched():
    raw = _envelope(2, b"M")
    signed = splice_signature(raw, b"\xaa" * 64)
    assert signed[65:129] == b"\x00" * 64
    assert len(signed) == len(raw)


def test_splice_envelope_too_short():
    with pytest.raises(EnvelopeTooShort):
        splice_signature(b"\x01" + b"\x00" * 63, b"\x00" * 64)


def test_splice_rejects_wrong_signature_size():
    with pytest.raises(SigningFailed):
        splice_signature(_envelope(1, b"M"), b"\x00" * 32)
