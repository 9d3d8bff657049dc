import os
from dataclasses import dataclass


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class SignerSettings:
    # HTTP adapter
    host: str = "0.0.0.0"
    port: int = 3000
    route: str = "/api/sign"
    cors_allow_origin: str = "*"

    # Pipeline behaviour
    single_signer: bool = True        # reject transactions needing != 1 signature
    verify_signature: bool = True     # Ed25519 self-check before splicing
    check_public_key: bool = False    # compare request publicKey with derived key

    # Observability
    metrics_enabled: bool = True
    metrics_port: int = 9109
    log_level: str = "INFO"
    log_dir: str = "logs"             # empty string disables file logs


def load_signer_settings() -> SignerSettings:
    return SignerSettings(
        # HTTP adapter
        host=os.getenv("SIGNER_HOST", "0.0.0.0"),
        port=int(os.getenv("SIGNER_PORT", "3000")),
        route=os.getenv("SIGNER_ROUTE", "/api/sign"),
        cors_allow_origin=os.getenv("CORS_ALLOW_ORIGIN", "*"),

        # Pipeline behaviour
        single_signer=_flag("SIGNER_SINGLE_SIGNER", "1"),
        verify_signature=_flag("SIGNER_VERIFY_SIGNATURE", "1"),
        check_public_key=_flag("SIGNER_CHECK_PUBLIC_KEY", "0"),

        # Observability
        metrics_enabled=_flag("METRICS_ENABLED", "1"),
        metrics_port=int(os.getenv("METRICS_PORT", "9109")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_dir=os.getenv("LOG_DIR", "logs"),
    )
