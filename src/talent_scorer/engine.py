"""Scoring Engine - orchestrates the scoring pipeline.

Pipeline:
1. Dimension aggregation of every module (aggregator)
2. Polarity resolution of the MBTI module (polarity)
3. Island fusion of the two tiers (fusion)
4. Career ranking under the top islands (ranker)

The engine only holds the read-only banks and catalog; every scoring call
is a pure function of its arguments and those.
"""

import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from question_bank.loader import (
    coerce_score_map,
    load_career_catalog,
    load_question_bank,
    validate_career_catalog,
    validate_question_bank,
)

from .aggregator import DimensionAggregator, coerce_answers
from .config import ScorerConfig, get_config
from .exceptions import EngineNotReadyError
from .fusion import IslandFusionEngine, has_traditional_data
from .polarity import PolarityResolver
from .ranker import RecommendationRanker, top_keys
from .schema import (
    BoundItem,
    CareerCatalog,
    DimensionScores,
    PersonalityProfile,
    QuestionBank,
    ScoringResult,
    TraditionalProfile,
)

logger = logging.getLogger(__name__)

BankSource = Union[str, Path, QuestionBank]
CatalogSource = Union[str, Path, CareerCatalog]
TraditionalInput = Union[TraditionalProfile, Mapping[str, Any], None]


class ScoringEngine:
    """Main scoring engine for the free and pro assessments."""

    def __init__(self, config: Optional[ScorerConfig] = None):
        self.config = config or get_config()
        self.aggregator = DimensionAggregator()
        self.polarity = PolarityResolver()
        self.fusion = IslandFusionEngine(self.config.fusion)
        self.ranker = RecommendationRanker(self.config.ranking)

        self.catalog: Optional[CareerCatalog] = None
        self.pro_bank: Optional[QuestionBank] = None
        self.intelligence_bank: Optional[QuestionBank] = None
        self.interest_bank: Optional[QuestionBank] = None
        self._pro_binding: dict[str, tuple[BoundItem, ...]] = {}

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_catalog(self, source: CatalogSource) -> CareerCatalog:
        """Load the career catalog from a file, or adopt a catalog object."""
        if isinstance(source, CareerCatalog):
            self.catalog = source
        else:
            self.catalog = load_career_catalog(source)
        return self.catalog

    def load_pro_bank(self, source: BankSource) -> QuestionBank:
        """Load the pro question bank and bind its answer slots."""
        bank = source if isinstance(source, QuestionBank) else load_question_bank(source)
        self.pro_bank = bank
        self._pro_binding = bank.bind()

        keys = self.config.modules
        for key in (keys.meta, keys.islands):
            if key not in self._pro_binding:
                logger.warning("Pro bank has no '%s' module; its scores will be empty", key)
        return bank

    def load_intelligence_bank(self, source: BankSource) -> QuestionBank:
        """Load the free-tier multiple-intelligence bank."""
        self.intelligence_bank = self._load_free_bank(source, "intelligences")
        return self.intelligence_bank

    def load_interest_bank(self, source: BankSource) -> QuestionBank:
        """Load the free-tier RIASEC interest bank."""
        self.interest_bank = self._load_free_bank(source, "interests")
        return self.interest_bank

    def _load_free_bank(self, source: BankSource, module_key: str) -> QuestionBank:
        if isinstance(source, QuestionBank):
            return source
        return load_question_bank(source, module_key=module_key)

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def score_traditional(
        self,
        intelligence_answers: Any,
        interest_answers: Any,
    ) -> TraditionalProfile:
        """Score the free tier.

        Args:
            intelligence_answers: Answer vector for the intelligence bank
            interest_answers: Answer vector for the interest bank

        Returns:
            TraditionalProfile; the interest map always has every RIASEC type
        """
        if self.intelligence_bank is None:
            raise EngineNotReadyError("intelligence bank")
        if self.interest_bank is None:
            raise EngineNotReadyError("interest bank")

        intelligences = self._score_bank(self.intelligence_bank, intelligence_answers)
        raw_interests = self._score_bank(self.interest_bank, interest_answers)

        cfg = self.config.traditional
        interests: DimensionScores = {d: raw_interests.get(d, 0) for d in cfg.interest_dimensions}
        for dim, value in raw_interests.items():
            interests.setdefault(dim, value)

        return TraditionalProfile(
            intelligences=intelligences,
            interests=interests,
            top_interests=top_keys(interests, cfg.top_interests),
        )

    def score(
        self,
        answers: Any,
        traditional: TraditionalInput = None,
    ) -> ScoringResult:
        """Score the pro tier and rank careers.

        Args:
            answers: Answer vector for the pro bank, one slot per item
            traditional: Free-tier scores (profile or mapping), or None

        Returns:
            Complete ScoringResult
        """
        if self.pro_bank is None:
            raise EngineNotReadyError("pro bank")
        if self.catalog is None:
            raise EngineNotReadyError("catalog")

        answers = coerce_answers(answers)
        keys = self.config.modules
        scale = self.pro_bank.scale

        def module_scores(key: str) -> DimensionScores:
            return self.aggregator.aggregate(self._pro_binding.get(key, ()), answers, scale)

        meta = module_scores(keys.meta)
        islands_raw = module_scores(keys.islands)
        personality = PersonalityProfile(
            big5=module_scores(keys.big5),
            enneagram=module_scores(keys.enneagram),
            mbti=module_scores(keys.mbti),
            composite=module_scores(keys.composite),
            polarity=self.polarity.resolve(self._pro_binding.get(keys.mbti, ()), answers, scale),
        )

        intelligences, interests = self._traditional_maps(traditional)
        breakdown = self.fusion.explain(islands_raw, meta, intelligences, interests)
        islands = {code: b.fused for code, b in breakdown.items()}
        top_islands = top_keys(islands, self.config.ranking.top_islands)
        recommendations = self.ranker.rank(islands, self.catalog)

        logger.info(
            "Scored %d answers: top islands %s, %d recommendations",
            sum(1 for a in answers if a is not None),
            ", ".join(top_islands),
            len(recommendations),
        )

        return ScoringResult(
            meta=meta,
            islands_raw=islands_raw,
            islands=islands,
            island_breakdown=breakdown,
            top_islands=top_islands,
            traditional_present=has_traditional_data(intelligences, interests),
            personality=personality,
            recommendations=recommendations,
        )

    def _score_bank(self, bank: QuestionBank, answers: Any) -> DimensionScores:
        bound = [b for items in bank.bind().values() for b in items]
        return self.aggregator.aggregate(bound, answers, bank.scale)

    def _traditional_maps(
        self,
        traditional: TraditionalInput,
    ) -> tuple[dict[str, float], dict[str, float]]:
        if traditional is None:
            return {}, {}
        if isinstance(traditional, TraditionalProfile):
            return dict(traditional.intelligences), dict(traditional.interests)
        if isinstance(traditional, Mapping):
            return (
                coerce_score_map(traditional.get("intelligences")),
                coerce_score_map(traditional.get("interests")),
            )
        logger.warning("Ignoring traditional scores of type %s", type(traditional).__name__)
        return {}, {}


def validate_bank(path: Union[str, Path]) -> tuple[bool, list[str]]:
    """Validate a question bank file."""
    return validate_question_bank(path)


def validate_catalog(path: Union[str, Path]) -> tuple[bool, list[str]]:
    """Validate a career catalog file."""
    return validate_career_catalog(path)
