"""
Per-provider request logging.

Every adapter owns one ProviderLogger. Lines are emitted on the
``llm_orchestrator.providers.<id>`` logger and start with a bracketed
``key=value`` prefix so one request can be followed across its start,
outcome and usage lines:

    [provider=openai model=gpt-4 request_id=1a2b3c4d duration_ms=812] generate succeeded
"""

import logging
import time
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional


UsageCounts = Dict[str, Optional[int]]


class ProviderLogger:
    """Structured request logger for one provider adapter."""

    def __init__(self, provider_id: str):
        self.provider_id = provider_id
        self.logger = logging.getLogger(f"llm_orchestrator.providers.{provider_id}")

    def _log(self, level: int, message: str, **fields: Any) -> None:
        if not self.logger.isEnabledFor(level):
            return
        prefix = " ".join(
            [f"provider={self.provider_id}"]
            + [f"{key}={value}" for key, value in fields.items() if value is not None]
        )
        self.logger.log(level, "[%s] %s", prefix, message)

    def warning(self, message: str, **fields: Any) -> None:
        self._log(logging.WARNING, message, **fields)

    @contextmanager
    def track_request(self, operation: str, model: str) -> Iterator[Dict[str, Any]]:
        """
        Log the lifetime of one adapter operation.

        The caller sets ``info['success']`` before leaving the block; the
        outcome line reports it together with the elapsed time. Exceptions
        escaping the block are logged at error level and re-raised.

        Yields:
            Dict with ``request_id`` and ``success``
        """
        info: Dict[str, Any] = {"request_id": uuid.uuid4().hex[:8], "success": None}
        started = time.perf_counter()
        self._log(logging.DEBUG, f"{operation} started", model=model, request_id=info["request_id"])

        try:
            yield info
        except Exception as e:
            self._log(
                logging.ERROR, f"{operation} raised {type(e).__name__}: {e}",
                model=model, request_id=info["request_id"],
                duration_ms=int((time.perf_counter() - started) * 1000),
            )
            raise

        outcome = "succeeded" if info["success"] else "failed"
        self._log(
            logging.INFO, f"{operation} {outcome}",
            model=model, request_id=info["request_id"],
            duration_ms=int((time.perf_counter() - started) * 1000),
        )

    def log_usage(self, model: str, request_id: str, tokens_used: int, usage: UsageCounts) -> None:
        """Log the vendor-reported counts next to the billed ``tokens_used``."""
        self._log(
            logging.INFO, "token usage",
            model=model, request_id=request_id,
            prompt_tokens=usage.get("prompt_tokens"),
            completion_tokens=usage.get("completion_tokens"),
            total_tokens=usage.get("total_tokens"),
            tokens_used=tokens_used,
        )
