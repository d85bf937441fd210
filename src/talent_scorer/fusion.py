"""Island Fusion Engine - blends the traditional and potential tiers.

For every island:

    traditional_core = 0.6 * (interest if interest > 0 else island) + 0.4 * intelligence_avg
                       (or just the raw island score when no free-tier data exists)
    future_core      = 0.7 * island + 0.3 * meta_avg
    fused            = clamp(0.6 * traditional_core + 0.4 * future_core)

Weights and mappings come from FusionConfig.
"""

import logging
from typing import Mapping, Optional

from .aggregator import clamp_score
from .config import FusionConfig, get_config
from .schema import DimensionScores, IslandBreakdown

logger = logging.getLogger(__name__)


def mapped_mean(scores: Mapping[str, float], keys: list[str]) -> float:
    """Mean of the scores for ``keys``; missing keys count as 0, no keys give 0."""
    if not keys:
        return 0.0
    return sum(float(scores.get(k, 0) or 0) for k in keys) / len(keys)


def overall_mean(scores: Mapping[str, float]) -> float:
    """Mean of every score in the map (0 for an empty map)."""
    if not scores:
        return 0.0
    return sum(float(v or 0) for v in scores.values()) / len(scores)


def has_traditional_data(
    intelligences: Mapping[str, float],
    interests: Mapping[str, float],
) -> bool:
    """Free-tier data counts as present if any score is above zero."""
    return any(float(v or 0) > 0 for v in intelligences.values()) or any(
        float(v or 0) > 0 for v in interests.values()
    )


class IslandFusionEngine:
    """Computes the fused island scores."""

    def __init__(self, config: Optional[FusionConfig] = None):
        self.config = config or get_config().fusion

    def explain(
        self,
        islands_raw: Mapping[str, float],
        meta: Mapping[str, float],
        intelligences: Optional[Mapping[str, float]] = None,
        interests: Optional[Mapping[str, float]] = None,
    ) -> dict[str, IslandBreakdown]:
        """Fuse every island and keep the intermediate terms.

        Args:
            islands_raw: Raw island scores from the pro bank
            meta: Meta-intelligence scores from the pro bank
            intelligences: Free-tier intelligence scores, if any
            interests: Free-tier RIASEC scores, if any

        Returns:
            Island code -> breakdown, in island declaration order
        """
        cfg = self.config
        intelligences = intelligences or {}
        interests = interests or {}

        intelligence_avg = overall_mean(intelligences)
        traditional_present = has_traditional_data(intelligences, interests)
        if not traditional_present:
            logger.debug("No free-tier scores; traditional core falls back to raw island scores")

        breakdown: dict[str, IslandBreakdown] = {}
        for code in cfg.island_codes:
            interest = mapped_mean(interests, cfg.island_to_interests.get(code, []))
            island = float(islands_raw.get(code, 0) or 0)
            meta_avg = mapped_mean(meta, cfg.island_to_meta.get(code, []))

            if traditional_present:
                base_interest = interest if interest > 0 else island
                traditional_core = (
                    cfg.interest_weight * base_interest
                    + cfg.intelligence_weight * intelligence_avg
                )
            else:
                traditional_core = island

            future_core = cfg.island_weight * island + cfg.meta_weight * meta_avg
            fused = cfg.traditional_weight * traditional_core + cfg.future_weight * future_core

            breakdown[code] = IslandBreakdown(
                code=code,
                traditional_interest=interest,
                potential_raw=island,
                meta_avg=meta_avg,
                traditional_core=traditional_core,
                future_core=future_core,
                fused=clamp_score(fused),
            )
        return breakdown

    def fuse(
        self,
        islands_raw: Mapping[str, float],
        meta: Mapping[str, float],
        intelligences: Optional[Mapping[str, float]] = None,
        interests: Optional[Mapping[str, float]] = None,
    ) -> DimensionScores:
        """Fused island scores, island code -> integer in [0, 100]."""
        breakdown = self.explain(islands_raw, meta, intelligences, interests)
        return {code: b.fused for code, b in breakdown.items()}
