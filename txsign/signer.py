from dataclasses import dataclass
from typing import Protocol, Union

from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.signature import Signature

from .errors import SigningFailed

BytesLike = Union[bytes, bytearray]


@dataclass(frozen=True)
class SignatureResult:
    signature: bytes
    public_key: bytes


class MessageSigner(Protocol):
    def sign(self, message: BytesLike, seed: BytesLike) -> SignatureResult:
        ...


class Ed25519Signer:
    """RFC 8032 Ed25519 signer backed by solders. Swappable for KMS/HSM later.

    Holds no key material between calls: a keypair is derived from the seed
    for each signature and dropped when the call returns.
    """

    def __init__(self, verify: bool = True):
        self.verify = verify

    @staticmethod
    def _keypair(seed: BytesLike) -> Keypair:
        try:
            return Keypair.from_seed(bytes(seed))
        except Exception as e:
            raise SigningFailed(f"Could not derive Ed25519 keypair: {e}") from e

    def sign(self, message: BytesLike, seed: BytesLike) -> SignatureResult:
        keypair = self._keypair(seed)
        message = bytes(message)
        try:
            sig = keypair.sign_message(message)
        except Exception as e:
            raise SigningFailed(f"Ed25519 signing failed: {e}") from e

        signature = bytes(sig)
        public_key = bytes(keypair.pubkey())
        if self.verify and not verify_signature(public_key, message, signature):
            raise SigningFailed("Ed25519 signature failed self-verification")

        return SignatureResult(signature=signature, public_key=public_key)


def verify_signature(public_key: BytesLike, message: BytesLike, signature: BytesLike) -> bool:
    try:
        return Signature.from_bytes(bytes(signature)).verify(Pubkey.from_bytes(bytes(public_key)), bytes(message))
    except ValueError:
        return False
