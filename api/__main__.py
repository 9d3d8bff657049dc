#!/usr/bin/env python3
"""
Standalone signing server
Run with: python -m api
"""

import logging
import sys
from pathlib import Path

from aiohttp import web
from dotenv import load_dotenv

from txsign.config import SignerSettings, load_signer_settings
from txsign.metrics import start_metrics_server

from .server import create_app


def setup_logging(settings: SignerSettings) -> None:
    """Setup logging for the signing server"""

    log_format = '%(asctime)s | %(levelname)-8s | %(name)-12s | %(message)s'

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.log_dir:
        log_dir = Path(settings.log_dir)
        log_dir.mkdir(exist_ok=True)
        handlers.append(logging.FileHandler(log_dir / "signer.log", encoding='utf-8'))

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=log_format,
        handlers=handlers,
    )

    # Access logs are noisy; request outcomes are logged by the pipeline
    logging.getLogger('aiohttp').setLevel(logging.WARNING)
    logging.getLogger('asyncio').setLevel(logging.WARNING)


def main() -> int:
    """Entry point"""

    env_file = Path('.env')
    if env_file.exists():
        load_dotenv()

    settings = load_signer_settings()
    setup_logging(settings)

    if env_file.exists():
        logging.info("📁 Loaded .env file")

    if settings.metrics_enabled:
        start_metrics_server(settings.metrics_port)

    logging.info(f"🔑 Starting signing server on {settings.host}:{settings.port}{settings.route}")
    logging.info(
        f"🛡️  single_signer={settings.single_signer} verify_signature={settings.verify_signature} "
        f"check_public_key={settings.check_public_key}"
    )

    try:
        web.run_app(create_app(settings), host=settings.host, port=settings.port, print=None)
    except KeyboardInterrupt:
        logging.info("👋 Signing server stopped by user")
    return 0


if __name__ == "__main__":
    sys.exit(main())
