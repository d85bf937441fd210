"""Polarity Resolver - forced-choice resolution of the four type axes.

Each axis has two poles in a fixed order. Answered items add the points their
scale rule awards (the same rule the dimension aggregator applies) to their
pole; the larger sum wins and the first pole wins ties.
The four winners, in axis order, form the type code.
"""

import logging
from typing import Any, Iterable, Optional

from .aggregator import SCALE_RULES, coerce_answers, response_at
from .schema import AxisTally, BoundItem, LikertScale, PolarityResult

logger = logging.getLogger(__name__)

# Axis order and per-axis pole order are both significant.
AXES: tuple[tuple[str, str, str], ...] = (
    ("EI", "E", "I"),
    ("SN", "S", "N"),
    ("TF", "T", "F"),
    ("JP", "J", "P"),
)


class PolarityResolver:
    """Resolves axis-tagged items into a four-letter code."""

    def __init__(self, axes: tuple[tuple[str, str, str], ...] = AXES):
        self.axes = axes

    def resolve(
        self,
        bound_items: Iterable[BoundItem],
        answers: Any,
        scale: Optional[LikertScale] = None,
    ) -> PolarityResult:
        """Sum weighted responses per pole and pick each axis's dominant pole.

        Args:
            bound_items: Items carrying ``axis`` and ``pole``
            answers: Answer vector; non-sequences count as empty
            scale: Weights for four-level items

        Returns:
            PolarityResult with the code and the raw sums per axis
        """
        scale = scale or LikertScale()
        answers = coerce_answers(answers)
        tallies = {
            axis: AxisTally(axis=axis, first_pole=first, second_pole=second)
            for axis, first, second in self.axes
        }

        for bound in bound_items:
            item = bound.item
            tally = tallies.get(item.axis or "")
            if tally is None or item.pole not in (tally.first_pole, tally.second_pole):
                logger.debug("Item %s has no usable axis/pole (%s/%s)", item.id, item.axis, item.pole)
                continue

            response = response_at(answers, bound.slot)
            if response is None:
                continue

            weight, _ = SCALE_RULES[item.scale_kind].score(item, response, scale)

            if item.pole == tally.first_pole:
                tally.first_sum += weight
            else:
                tally.second_sum += weight

        code = "".join(tallies[axis].winner for axis, _, _ in self.axes)
        return PolarityResult(code=code, axes=tallies)
