"""Talent Scoring Engine.

Scores questionnaire answers into dimension scores, fuses the free and pro
tiers into island scores and ranks career recommendations.
"""

from .engine import ScoringEngine
from .schema import ScoringResult, TraditionalProfile

__version__ = "1.0.0"

__all__ = ["ScoringEngine", "ScoringResult", "TraditionalProfile", "__version__"]
