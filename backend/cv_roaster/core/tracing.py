"""Langfuse tracing client.

Exports:
- observe: decorator for tracing functions
- flush: flush pending traces at end of request

The client is only created when both keys are configured; otherwise flush
is a no-op. Thread-safe init via lock.

Env vars: LANGFUSE_PUBLIC_KEY, LANGFUSE_SECRET_KEY, LANGFUSE_HOST
"""

import threading

from langfuse import Langfuse, observe

from cv_roaster.config import load_settings
from cv_roaster.core.logger import logger

__all__ = ["observe", "flush"]

# Lazy singleton with thread-safe init
_client: Langfuse | None = None
_initialized = False
_lock = threading.Lock()


def _get_client() -> Langfuse | None:
    """Get or create the Langfuse client singleton. Returns None if not configured."""
    global _client, _initialized

    if _initialized:
        return _client

    with _lock:
        if _initialized:
            return _client

        _initialized = True
        settings = load_settings()

        if not settings.langfuse_public_key or not settings.langfuse_secret_key:
            logger.info("Langfuse: no keys configured — tracing disabled")
            return None

        _client = Langfuse(
            public_key=settings.langfuse_public_key,
            secret_key=settings.langfuse_secret_key,
            host=settings.langfuse_host,
        )
        logger.info("Langfuse: client initialized")
        return _client


def flush() -> None:
    """Flush pending Langfuse traces."""
    client = _get_client()
    if client:
        try:
            client.flush()
            logger.debug("Langfuse: traces flushed")
        except Exception as e:
            logger.warning(f"Langfuse: flush failed: {e}")
