"""Pydantic models for question banks and the career catalog."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ScaleKind(str, Enum):
    """How a raw response code is normalized into points."""
    BINARY_ENDORSEMENT = "binary_endorsement"  # yes = point
    BINARY_EXPECTED = "binary_expected"  # point only when answer matches expected_answer
    FOUR_LEVEL_WEIGHTED = "four_level_weighted"  # code indexes the Likert weight scale


class Tier(str, Enum):
    """Scoring tier a module belongs to."""
    TRADITIONAL = "traditional"
    POTENTIAL = "potential"


class CareerKind(str, Enum):
    """Kind of catalog entry."""
    JOB = "job"
    STARTUP = "startup"


class LocalizedText(BaseModel):
    """A string in every supported display language."""
    zh: str = ""
    en: str = ""

    class Config:
        frozen = True


class LocalizedList(BaseModel):
    """A list of strings in every supported display language."""
    zh: list[str] = Field(default_factory=list)
    en: list[str] = Field(default_factory=list)

    class Config:
        frozen = True


DEFAULT_SCALE_SCORES = [3, 2, 1, 0]


class LikertScale(BaseModel):
    """Ordered response levels of the four-level scale.

    ``scores[i]`` is the weight of response code ``i``. The default scale
    puts the strongest endorsement first.
    """
    scores: list[float] = Field(
        default_factory=lambda: list(DEFAULT_SCALE_SCORES),
        description="Weight for each response code, indexed by code"
    )
    labels: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Display labels per language, indexed by code"
    )

    class Config:
        frozen = True

    @property
    def max_weight(self) -> float:
        """Largest weight a single response can earn."""
        return max(self.scores) if self.scores else 0

    def weight(self, code) -> float:
        """Weight for a response code; anything not a valid index weighs 0."""
        if isinstance(code, bool):
            code = int(code)
        if isinstance(code, float):
            if not code.is_integer():
                return 0
            code = int(code)
        if not isinstance(code, int) or code < 0 or code >= len(self.scores):
            return 0
        return self.scores[code]


class QuestionItem(BaseModel):
    """A single questionnaire item."""
    id: str = Field(..., description="Item identifier, unique within a bank")
    dimension: str = Field(..., description="Scoring bucket this item contributes to")
    scale_kind: ScaleKind = Field(
        default=ScaleKind.FOUR_LEVEL_WEIGHTED,
        description="Normalization rule for this item"
    )
    expected_answer: Optional[bool] = Field(
        None,
        description="Correct answer for binary_expected items"
    )
    axis: Optional[str] = Field(None, description="Polarity axis, e.g. EI")
    pole: Optional[str] = Field(None, description="Pole of the axis this item points to")
    text: LocalizedText = Field(default_factory=LocalizedText)
    scored: bool = Field(
        default=True,
        description="False for items that hold a slot but feed no dimension"
    )

    class Config:
        frozen = True


class QuestionModule(BaseModel):
    """An independently designed block of items."""
    key: str = Field(..., description="Module key, e.g. metaIntelligence")
    tier: Tier = Field(default=Tier.POTENTIAL)
    items: list[QuestionItem] = Field(default_factory=list)

    class Config:
        frozen = True

    @property
    def dimensions(self) -> list[str]:
        """Dimensions of scored items in first-seen order."""
        seen: dict[str, None] = {}
        for item in self.items:
            if item.scored:
                seen.setdefault(item.dimension, None)
        return list(seen)


@dataclass(frozen=True)
class BoundItem:
    """An item paired with its slot in the answer vector."""
    slot: int
    item: QuestionItem


class QuestionBank(BaseModel):
    """Ordered set of modules answered by a single answer vector."""
    name: str = Field(default="", description="Bank name")
    version: str = Field(default="1.0.0", description="Bank schema version")
    scale: LikertScale = Field(default_factory=LikertScale)
    modules: list[QuestionModule] = Field(default_factory=list)

    class Config:
        frozen = True

    @property
    def answer_length(self) -> int:
        """Number of slots in the answer vector for this bank."""
        return sum(len(m.items) for m in self.modules)

    def module(self, key: str) -> Optional[QuestionModule]:
        """Look up a module by key."""
        return next((m for m in self.modules if m.key == key), None)

    def bind(self) -> dict[str, tuple[BoundItem, ...]]:
        """Assign every item its answer slot, module by module."""
        bound: dict[str, tuple[BoundItem, ...]] = {}
        slot = 0
        for module in self.modules:
            items = []
            for item in module.items:
                items.append(BoundItem(slot=slot, item=item))
                slot += 1
            bound[module.key] = tuple(items)
        return bound


DEFAULT_TREND_SCORE = 75.0


class CareerRecord(BaseModel):
    """A job or startup direction attached to an island."""
    kind: CareerKind = Field(default=CareerKind.JOB, alias="type")
    title: LocalizedText = Field(default_factory=LocalizedText)
    category: Optional[LocalizedText] = None
    trend_score: Optional[float] = Field(
        None,
        ge=0,
        le=100,
        alias="trendScore",
        description="Externally supplied demand weight (0-100)"
    )
    ai_trend: Optional[LocalizedText] = Field(None, alias="aiTrend")
    skills: Optional[LocalizedList] = None

    class Config:
        frozen = True
        populate_by_name = True

    def effective_trend(self, default: float = DEFAULT_TREND_SCORE) -> float:
        """Trend score, or the default when the record has none."""
        return self.trend_score if self.trend_score is not None else default


class CareerCatalog(BaseModel):
    """Island code to career records, in catalog order."""
    version: str = Field(default="1.0.0", description="Catalog schema version")
    islands: dict[str, list[CareerRecord]] = Field(default_factory=dict)

    class Config:
        frozen = True

    @property
    def total_records(self) -> int:
        return sum(len(records) for records in self.islands.values())

    def records_for(self, code: str) -> list[CareerRecord]:
        """Records attached to an island; empty for unknown codes."""
        return self.islands.get(code, [])
