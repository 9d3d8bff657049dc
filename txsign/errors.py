from typing import Optional


class SigningError(Exception):
    """Base class for every classified failure of the signing pipeline.

    `kind` is the stable identifier surfaced to callers, `status` the HTTP
    status the adapter should answer with.
    """

    kind = "SigningError"
    status = 400

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.kind)
        self.message = message or self.kind

    def to_dict(self) -> dict:
        return {"errorKind": self.kind, "message": self.message}


class InvalidCharacter(SigningError):
    kind = "InvalidCharacter"


class InvalidEncoding(InvalidCharacter):
    kind = "InvalidEncoding"


class UnsupportedKeyFormat(SigningError):
    kind = "UnsupportedKeyFormat"


class InvalidKeyLength(SigningError):
    kind = "InvalidKeyLength"


class UnsupportedSignatureCount(SigningError):
    kind = "UnsupportedSignatureCount"


class TruncatedTransaction(SigningError):
    kind = "TruncatedTransaction"


class EnvelopeTooShort(SigningError):
    kind = "EnvelopeTooShort"


class MissingField(SigningError):
    kind = "MissingField"


class InvalidRequestBody(SigningError):
    kind = "InvalidRequestBody"


class PublicKeyMismatch(SigningError):
    kind = "PublicKeyMismatch"


class SigningFailed(SigningError):
    kind = "SigningFailed"
    status = 500


class InternalError(SigningError):
    kind = "InternalError"
    status = 500
