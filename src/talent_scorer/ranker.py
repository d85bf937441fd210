"""Recommendation Ranker - joins top islands to the career catalog.

match_score = island_score * 0.7 + trend_score * 0.3

Sorting is stable throughout: equal island scores keep island declaration
order, equal match scores keep the order records were gathered in.
"""

import logging
from typing import Mapping, Optional

from .config import RankingConfig, get_config
from .schema import CareerCatalog, Recommendation

logger = logging.getLogger(__name__)


def top_keys(scores: Mapping[str, float], n: int = 3) -> list[str]:
    """Keys of the ``n`` highest scores, ties kept in mapping order."""
    ordered = sorted(scores.items(), key=lambda kv: kv[1], reverse=True)
    return [key for key, _ in ordered[:max(0, n)]]


class RecommendationRanker:
    """Ranks catalog records under the best-scoring islands."""

    def __init__(self, config: Optional[RankingConfig] = None):
        self.config = config or get_config().ranking

    def match_score(self, island_score: float, trend_score: float) -> float:
        """Blend personal affinity with the record's trend score."""
        cfg = self.config
        score = island_score * cfg.affinity_weight + trend_score * cfg.trend_weight
        return min(100.0, max(0.0, score))

    def rank(
        self,
        islands: Mapping[str, float],
        catalog: CareerCatalog,
    ) -> list[Recommendation]:
        """Rank the records of the top islands.

        Args:
            islands: Fused island scores, in island declaration order
            catalog: Career catalog

        Returns:
            At most ``max_recommendations`` recommendations, highest match first
        """
        cfg = self.config
        gathered: list[Recommendation] = []

        for code in top_keys(islands, cfg.top_islands):
            records = catalog.records_for(code)
            if not records:
                logger.debug("Island %s has no catalog records", code)
            base = float(islands.get(code, 0) or 0)
            for record in records:
                gathered.append(Recommendation(
                    category=code,
                    match_score=self.match_score(base, record.effective_trend(cfg.default_trend_score)),
                    record=record,
                ))

        gathered.sort(key=lambda r: r.match_score, reverse=True)
        return gathered[:cfg.max_recommendations]
