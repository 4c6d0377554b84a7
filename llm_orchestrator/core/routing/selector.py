"""
Provider ranking for task-based selection.

Candidates are filtered by price and ranked by how well they cover the
requested language. Ties keep registration order.
"""

from typing import Dict, List, Optional, Sequence

from ...models.generation import SelectionCriteria
from ...providers.base import ProviderAdapter


def language_score(provider: ProviderAdapter, language: str) -> float:
    """Coverage of ``language`` by ``provider``, 0.0 when unknown."""
    support = provider.get_language_support(language)
    if isinstance(support, dict):
        return float(support.get(language, 0.0))
    return float(support)


def within_budget(provider: ProviderAdapter, max_cost: Optional[float]) -> bool:
    if max_cost is None:
        return True
    return provider.get_pricing().cost_per_token <= max_cost


def rank_providers(
    providers: Sequence[ProviderAdapter],
    criteria: SelectionCriteria
) -> List[ProviderAdapter]:
    """
    Rank providers for a task, best first.

    Args:
        providers: Candidates in registration order
        criteria: Task description

    Returns:
        Providers within ``criteria.max_cost``, sorted by language score
        (highest first). An empty list means nothing qualifies.
    """
    eligible = [p for p in providers if within_budget(p, criteria.max_cost)]
    scores: Dict[str, float] = {p.id: language_score(p, criteria.language) for p in eligible}
    # sorted() is stable, so equal scores keep registration order
    return sorted(eligible, key=lambda p: scores[p.id], reverse=True)
