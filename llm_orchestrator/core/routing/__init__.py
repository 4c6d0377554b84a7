from .selector import language_score, rank_providers, within_budget

__all__ = ["language_score", "rank_providers", "within_budget"]
