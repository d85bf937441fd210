"""
Custom exceptions for the talent scorer.

The base class lives with the bank loaders so that load failures are
``TalentScorerError`` instances too.
"""

from question_bank.exceptions import CatalogLoadError, QuestionBankLoadError, TalentScorerError


class EngineNotReadyError(TalentScorerError):
    """Raised when scoring is requested before the required data is loaded."""

    def __init__(self, missing: str):
        self.missing = missing
        super().__init__(f"{missing} not loaded. Call load_{missing.replace(' ', '_')}() first.")


__all__ = ["CatalogLoadError", "EngineNotReadyError", "QuestionBankLoadError", "TalentScorerError"]
