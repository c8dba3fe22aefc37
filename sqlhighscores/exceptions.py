"""
Project-wide custom exception hierarchy.
All modules raise subclasses of HighScoresError, never bare Exception.
"""

__all__ = [
    "HighScoresError",
    "StoreError",
    "StoreUnavailableError",
    "StoreClosedError",
    "ScoreNotFoundError",
    "ScoreValidationError",
]


class HighScoresError(Exception):
    """Root exception for all sqlhighscores errors."""


# ── Store ─────────────────────────────────────────────────────────────────────

class StoreError(HighScoresError):
    """Base class for ScoreStore errors."""


class StoreUnavailableError(StoreError):
    """Raised when the database file cannot be opened, read or written."""


class StoreClosedError(StoreError):
    """Raised when an operation is attempted outside open() / close()."""


class ScoreNotFoundError(StoreError):
    """Raised when a caller requires a score id that is not in the table."""

    def __init__(self, score_id: int) -> None:
        super().__init__(f"No score with id={score_id}")
        self.score_id = score_id


# ── Validation ────────────────────────────────────────────────────────────────

class ScoreValidationError(HighScoresError, ValueError):
    """Raised when a name or score value entered by the user is not acceptable."""
