import logging
import threading
import time
from typing import Optional

from prometheus_client import Counter, Histogram, start_http_server


_server_started = False
_server_lock = threading.Lock()


def start_metrics_server(port: int) -> None:
    global _server_started
    if _server_started:
        return
    with _server_lock:
        if _server_started:
            return
        try:
            start_http_server(port)
            logging.info(f"📊 Metrics server listening on :{port}")
        except OSError as e:
            # Best-effort; metrics are optional in dev
            logging.warning(f"Metrics server not started on :{port}: {e}")
        _server_started = True


SIGN_MS = Histogram(
    "signer_sign_latency_ms",
    "Latency from request decode to signed transaction (ms)",
    buckets=(0.5, 1, 2, 5, 10, 20, 50, 75, 100, 200),
)

REQUESTS = Counter("signer_requests_total", "Signing requests received")
SIGNED = Counter("signer_signed_total", "Transactions signed successfully")
FAILED = Counter("signer_failed_total", "Signing requests that failed", ["kind"])


class SignTimer:
    """Times one pipeline run and records its outcome."""

    def __init__(self) -> None:
        self._start = time.perf_counter()
        self.elapsed_ms: Optional[float] = None
        REQUESTS.inc()

    def _stop(self) -> float:
        self.elapsed_ms = (time.perf_counter() - self._start) * 1000.0
        return self.elapsed_ms

    def mark_signed(self) -> None:
        SIGN_MS.observe(self._stop())
        SIGNED.inc()

    def mark_failed(self, kind: str) -> None:
        self._stop()
        FAILED.labels(kind=kind).inc()
