"""Per-provider performance and cost bookkeeping."""

import threading
from typing import Dict, Optional

from ..models.generation import CostLedger, PerformanceLedger


class LedgerBook:
    """
    Performance and cost ledgers keyed by provider id.

    Updates may come from concurrent calls, so every read and write goes
    through one lock. Reads return copies.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._performance: Dict[str, PerformanceLedger] = {}
        self._costs: Dict[str, CostLedger] = {}

    def open(self, provider_id: str, cost_per_token: float, currency: str) -> None:
        """Create empty ledgers for a newly registered provider."""
        with self._lock:
            self._performance.setdefault(provider_id, PerformanceLedger())
            self._costs.setdefault(
                provider_id,
                CostLedger(currency=currency, cost_per_token=cost_per_token),
            )

    def record(self, provider_id: str, success: bool, tokens_used: int, elapsed_ms: float) -> None:
        """Fold one adapter call into the provider's ledgers."""
        with self._lock:
            performance = self._performance.get(provider_id)
            cost = self._costs.get(provider_id)
            if performance is None or cost is None:
                return

            n = performance.call_count
            performance.average_response_time_ms = (
                performance.average_response_time_ms * n + elapsed_ms
            ) / (n + 1)
            performance.success_rate = (
                performance.success_rate * n + (1.0 if success else 0.0)
            ) / (n + 1)
            performance.average_tokens_used = (
                performance.average_tokens_used * n + tokens_used
            ) / (n + 1)
            performance.call_count = n + 1

            cost.total_tokens += tokens_used
            cost.total_cost += tokens_used * cost.cost_per_token
            cost.call_count += 1

    def performance(self, provider_id: str) -> Optional[PerformanceLedger]:
        with self._lock:
            ledger = self._performance.get(provider_id)
            return ledger.model_copy() if ledger is not None else None

    def costs(self, provider_id: str) -> Optional[CostLedger]:
        with self._lock:
            ledger = self._costs.get(provider_id)
            return ledger.model_copy() if ledger is not None else None
