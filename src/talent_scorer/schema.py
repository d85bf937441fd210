"""Pydantic models for scoring results.

All results are plain data: they carry no references back to the banks or
the catalog other than copies of the matched career records.
"""

from typing import Optional

from pydantic import BaseModel, Field, computed_field

# Re-export bank and catalog models for convenience
from question_bank.schema import (
    BoundItem,
    CareerCatalog,
    CareerRecord,
    LikertScale,
    QuestionBank,
    QuestionItem,
    QuestionModule,
    ScaleKind,
    Tier,
)


DimensionScores = dict[str, int]


# =============================================================================
# Polarity
# =============================================================================


class AxisTally(BaseModel):
    """Summed responses for the two poles of one axis."""
    axis: str
    first_pole: str
    second_pole: str
    first_sum: float = 0.0
    second_sum: float = 0.0

    @computed_field
    @property
    def winner(self) -> str:
        """Dominant pole; the first pole wins ties."""
        return self.first_pole if self.first_sum >= self.second_sum else self.second_pole


class PolarityResult(BaseModel):
    """Four-letter type code plus the per-axis sums behind it."""
    code: str
    axes: dict[str, AxisTally] = Field(default_factory=dict)


# =============================================================================
# Fusion
# =============================================================================


class IslandBreakdown(BaseModel):
    """Intermediate terms of one island's fused score."""
    code: str
    traditional_interest: float = Field(0.0, description="Mean of mapped interest scores")
    potential_raw: float = Field(0.0, description="Raw island score from the pro bank")
    meta_avg: float = Field(0.0, description="Mean of mapped meta-intelligence scores")
    traditional_core: float = 0.0
    future_core: float = 0.0
    fused: int = Field(0, ge=0, le=100)


# =============================================================================
# Recommendations
# =============================================================================


class Recommendation(BaseModel):
    """A career record matched through one of the top islands."""
    category: str = Field(..., description="Island code the record was found under")
    match_score: float = Field(..., ge=0, le=100)
    record: CareerRecord


# =============================================================================
# Profiles and results
# =============================================================================


class TraditionalProfile(BaseModel):
    """Free-tier result: multiple intelligences and RIASEC interests."""
    intelligences: DimensionScores = Field(default_factory=dict)
    interests: DimensionScores = Field(default_factory=dict)
    top_interests: list[str] = Field(default_factory=list)

    @property
    def has_data(self) -> bool:
        """True if any free-tier score is above zero."""
        return any(v > 0 for v in self.intelligences.values()) or any(
            v > 0 for v in self.interests.values()
        )


class PersonalityProfile(BaseModel):
    """Personality modules of the pro bank."""
    big5: DimensionScores = Field(default_factory=dict)
    enneagram: DimensionScores = Field(default_factory=dict)
    mbti: DimensionScores = Field(default_factory=dict, description="Per-pole scores, e.g. EI-E")
    composite: DimensionScores = Field(default_factory=dict)
    polarity: Optional[PolarityResult] = None


class ScoringResult(BaseModel):
    """Complete pro-tier scoring result."""
    meta: DimensionScores = Field(default_factory=dict)
    islands_raw: DimensionScores = Field(default_factory=dict)
    islands: DimensionScores = Field(default_factory=dict, description="Fused island scores")
    island_breakdown: dict[str, IslandBreakdown] = Field(default_factory=dict)
    top_islands: list[str] = Field(default_factory=list)
    traditional_present: bool = False
    personality: PersonalityProfile = Field(default_factory=PersonalityProfile)
    recommendations: list[Recommendation] = Field(default_factory=list)


__all__ = [
    "AxisTally",
    "BoundItem",
    "CareerCatalog",
    "CareerRecord",
    "DimensionScores",
    "IslandBreakdown",
    "LikertScale",
    "PersonalityProfile",
    "PolarityResult",
    "QuestionBank",
    "QuestionItem",
    "QuestionModule",
    "Recommendation",
    "ScaleKind",
    "ScoringResult",
    "Tier",
    "TraditionalProfile",
]
