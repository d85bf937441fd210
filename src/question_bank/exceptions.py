"""
Exceptions shared by the bank loaders and the talent scorer.
"""


class TalentScorerError(Exception):
    """Base exception for the talent scorer and its data loaders."""
    pass


class QuestionBankLoadError(TalentScorerError):
    """Raised when a question bank file cannot be loaded."""


class CatalogLoadError(TalentScorerError):
    """Raised when a career catalog file cannot be loaded."""
