"""Dimension Aggregator - Phase 1 of the scoring pipeline.

Normalizes answer vectors into 0-100 scores per dimension. Each item is
scored by the rule registered for its ScaleKind:

- binary_endorsement: a response above 0 is a hit
- binary_expected: a hit only when (response > 0) equals the item's expected answer
- four_level_weighted: the response indexes the bank's Likert weights

Unanswered slots never count, neither as points nor in the denominator.
"""

import logging
import math
from collections.abc import Sequence
from typing import Any, Iterable, Optional

from .schema import (
    BoundItem,
    DimensionScores,
    LikertScale,
    QuestionItem,
    QuestionModule,
    ScaleKind,
)

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    """Round into the 0-100 range; non-finite values become 0."""
    if not math.isfinite(value):
        return 0
    return min(100, max(0, round_half_up(value)))


def coerce_answers(raw: Any) -> list:
    """Return the answers as a list; anything that is not a sequence is empty."""
    if raw is None:
        return []
    if isinstance(raw, Sequence) and not isinstance(raw, (str, bytes)):
        return list(raw)
    logger.warning("Answer vector of type %s is not a sequence; treating as unanswered", type(raw).__name__)
    return []


def response_at(answers: Sequence, slot: int) -> Optional[float]:
    """Numeric response in a slot, or None when the slot is unanswered."""
    if slot < 0 or slot >= len(answers):
        return None
    raw = answers[slot]
    if isinstance(raw, bool):
        return float(raw)
    if isinstance(raw, (int, float)) and math.isfinite(raw):
        return float(raw)
    return None


class ScaleRule:
    """Turns one answered response into (points earned, points possible)."""

    def score(self, item: QuestionItem, response: float, scale: LikertScale) -> tuple[float, float]:
        raise NotImplementedError


class EndorsementRule(ScaleRule):
    """Yes earns the point."""

    def score(self, item: QuestionItem, response: float, scale: LikertScale) -> tuple[float, float]:
        return (1.0 if response > 0 else 0.0), 1.0


class ExpectedAnswerRule(ScaleRule):
    """The point goes to the expected answer, which may be "no"."""

    def score(self, item: QuestionItem, response: float, scale: LikertScale) -> tuple[float, float]:
        if item.expected_answer is None:
            return EndorsementRule().score(item, response, scale)
        answered_yes = response > 0
        return (1.0 if answered_yes == item.expected_answer else 0.0), 1.0


class WeightedRule(ScaleRule):
    """The response code indexes the Likert weight scale."""

    def score(self, item: QuestionItem, response: float, scale: LikertScale) -> tuple[float, float]:
        return scale.weight(response), scale.max_weight


SCALE_RULES: dict[ScaleKind, ScaleRule] = {
    ScaleKind.BINARY_ENDORSEMENT: EndorsementRule(),
    ScaleKind.BINARY_EXPECTED: ExpectedAnswerRule(),
    ScaleKind.FOUR_LEVEL_WEIGHTED: WeightedRule(),
}

_unhandled = set(ScaleKind) - set(SCALE_RULES)
if _unhandled:
    raise RuntimeError(f"No scale rule for: {sorted(k.value for k in _unhandled)}")


class DimensionAggregator:
    """Aggregates bound items and an answer vector into dimension scores."""

    def aggregate(
        self,
        bound_items: Iterable[BoundItem],
        answers: Any,
        scale: Optional[LikertScale] = None,
    ) -> DimensionScores:
        """Score every dimension the items feed.

        Args:
            bound_items: Items with their slots in ``answers``
            answers: Answer vector; non-sequences count as empty
            scale: Weights for four-level items (defaults to 3/2/1/0)

        Returns:
            Dimension -> integer score in [0, 100]. Dimensions with no
            answered items score 0.
        """
        scale = scale or LikertScale()
        answers = coerce_answers(answers)

        earned: dict[str, float] = {}
        possible: dict[str, float] = {}

        for bound in bound_items:
            item = bound.item
            if not item.scored:
                continue
            earned.setdefault(item.dimension, 0.0)
            possible.setdefault(item.dimension, 0.0)

            response = response_at(answers, bound.slot)
            if response is None:
                continue

            points, max_points = SCALE_RULES[item.scale_kind].score(item, response, scale)
            earned[item.dimension] += points
            possible[item.dimension] += max_points

        scores: DimensionScores = {}
        for dim, total in earned.items():
            denominator = possible[dim]
            scores[dim] = clamp_score(100 * total / denominator) if denominator > 0 else 0
        return scores

    def aggregate_module(
        self,
        module: Optional[QuestionModule],
        answers: Any,
        scale: Optional[LikertScale] = None,
    ) -> DimensionScores:
        """Score a module answered by its own vector (slots start at 0)."""
        if module is None:
            return {}
        bound = [BoundItem(slot=idx, item=item) for idx, item in enumerate(module.items)]
        return self.aggregate(bound, answers, scale)
