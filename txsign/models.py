from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

SIGNING_METHOD = "Ed25519-Solana-Format-v2"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass
class SignRequest:
    transaction: str                            # base64 envelope
    private_key: Union[str, List[int], bytes]   # base58 | JSON array string | int array
    public_key: Optional[str] = None            # informational

    def __repr__(self) -> str:
        # never print key material
        return f"SignRequest(transaction=<{len(self.transaction)} chars>, public_key={self.public_key!r})"


@dataclass
class SignResult:
    signed_transaction: str   # base64
    signature: str            # base58
    public_key: str           # base58 of the key that signed
    original_length: int
    signed_length: int
    num_signatures: int
    message_length: int
    signature_length: int
    method: str = SIGNING_METHOD
    timestamp: str = field(default_factory=_utc_now_iso)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "signedTransaction": self.signed_transaction,
            "signature": self.signature,
            "publicKey": self.public_key,
            "method": self.method,
            "timestamp": self.timestamp,
            "debug": {
                "originalTransactionLength": self.original_length,
                "signedTransactionLength": self.signed_length,
                "numSignatures": self.num_signatures,
                "messageLength": self.message_length,
                "signatureLength": self.signature_length,
            },
        }


@dataclass
class SignFailure:
    error_kind: str
    message: str
    status: int
    timestamp: str = field(default_factory=_utc_now_iso)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": False,
            "errorKind": self.error_kind,
            "message": self.message,
            "error": self.message,
            "timestamp": self.timestamp,
        }
