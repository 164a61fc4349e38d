"""Scoring-related domain exceptions."""

from typing import List

from .base import DomainException


class InsufficientDataException(DomainException):
    """Raised when the data-sufficiency gate blocks a scoring run."""

    def __init__(self, user_id: str, unmet_requirements: List[str]):
        super().__init__(
            message="Critical data requirements not met",
            code="INSUFFICIENT_DATA",
        )
        self.user_id = user_id
        self.unmet_requirements = unmet_requirements


class ScoreNotFoundException(DomainException):
    """Raised when a user has no credit score snapshot yet."""

    def __init__(self, user_id: str):
        super().__init__(
            message=f"No credit score found for user: {user_id}",
            code="SCORE_NOT_FOUND",
        )
        self.user_id = user_id
