import logging
from typing import Any, Dict, Optional, Tuple

from .encoding import b58decode, b58encode, b64decode, b64encode
from .config import SignerSettings
from .envelope import parse_envelope, splice_signature
from .errors import (
    InternalError,
    InvalidCharacter,
    InvalidRequestBody,
    MissingField,
    PublicKeyMismatch,
    SigningError,
)
from .keys import normalize_private_key, wipe
from .metrics import SignTimer
from .models import SignFailure, SignRequest, SignResult
from .signer import Ed25519Signer, MessageSigner


class TransactionSigningPipeline:
    """base64 envelope + private key -> signed envelope + base58 signature.

    Stateless: safe to share between concurrent requests.
    """

    def __init__(self, settings: Optional[SignerSettings] = None, signer: Optional[MessageSigner] = None):
        self.settings = settings or SignerSettings()
        self.signer = signer or Ed25519Signer(verify=self.settings.verify_signature)

    def sign(self, request: SignRequest) -> SignResult:
        """Sign slot 0 of `request.transaction`. Raises a SigningError subclass."""

        raw_tx = b64decode(request.transaction)
        envelope = parse_envelope(raw_tx, single_signer=self.settings.single_signer)
        logging.debug(
            f"📝 Transaction {len(raw_tx)} bytes, {envelope.num_signatures} signature(s), "
            f"message {envelope.message_length} bytes"
        )

        seed = normalize_private_key(request.private_key)
        try:
            result = self.signer.sign(envelope.message, seed)
        finally:
            wipe(seed)

        if self.settings.check_public_key and request.public_key:
            self._check_public_key(request.public_key, result.public_key)

        signed_tx = splice_signature(raw_tx, result.signature)

        return SignResult(
            signed_transaction=b64encode(signed_tx),
            signature=b58encode(result.signature),
            public_key=b58encode(result.public_key),
            original_length=len(raw_tx),
            signed_length=len(signed_tx),
            num_signatures=envelope.num_signatures,
            message_length=envelope.message_length,
            signature_length=len(result.signature),
        )

    @staticmethod
    def _check_public_key(declared: str, derived: bytes) -> None:
        try:
            declared_bytes = b58decode(declared)
        except InvalidCharacter as e:
            raise PublicKeyMismatch("publicKey is not a valid base58 string") from e
        if declared_bytes != derived:
            raise PublicKeyMismatch(
                f"publicKey {declared} does not match the private key ({b58encode(derived)})"
            )

    @staticmethod
    def parse_request(body: Any) -> SignRequest:
        if not isinstance(body, dict):
            raise InvalidRequestBody("Request body must be a JSON object")

        missing = [name for name in ("transaction", "privateKey") if not body.get(name)]
        if missing:
            raise MissingField(f"Missing required fields: {', '.join(missing)}")
        if not isinstance(body["transaction"], str):
            raise InvalidRequestBody("transaction must be a base64 string")

        public_key = body.get("publicKey")
        if public_key is not None and not isinstance(public_key, str):
            raise InvalidRequestBody("publicKey must be a base58 string")

        return SignRequest(
            transaction=body["transaction"],
            private_key=body["privateKey"],
            public_key=public_key,
        )

    def handle(self, body: Any) -> Tuple[int, Dict[str, Any]]:
        """Full request -> (HTTP status, JSON payload) transformation."""

        timer = SignTimer()
        try:
            request = self.parse_request(body)
            result = self.sign(request)
        except SigningError as e:
            timer.mark_failed(e.kind)
            logging.warning(f"❌ Signing rejected ({e.kind}): {e.message}")
            failure = SignFailure(error_kind=e.kind, message=e.message, status=e.status)
            return failure.status, failure.to_dict()
        except Exception as e:
            timer.mark_failed(InternalError.kind)
            logging.error(f"💥 Unexpected signing error: {e}", exc_info=True)
            failure = SignFailure(error_kind=InternalError.kind, message="Internal signing error", status=InternalError.status)
            return failure.status, failure.to_dict()

        timer.mark_signed()
        logging.info(
            f"✅ Signed transaction for {result.public_key} "
            f"({result.signed_length} bytes, {timer.elapsed_ms:.2f} ms)"
        )
        return 200, result.to_dict()


def sign_transaction(transaction: str, private_key: Any, public_key: Optional[str] = None) -> SignResult:
    """One-shot helper using default settings."""
    return TransactionSigningPipeline().sign(
        SignRequest(transaction=transaction, private_key=private_key, public_key=public_key)
    )
