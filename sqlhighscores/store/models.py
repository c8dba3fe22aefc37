"""Data models for the store module."""

from dataclasses import dataclass
from typing import Optional

__all__ = ["Score", "NEW_ENTRY"]

# Sentinel id used by forms that are creating a record rather than editing one
NEW_ENTRY = -1


@dataclass
class Score:
    """
    One row of the high-score table.

    Fields
    ──────
    name   — free-text label, not unique
    value  — integer score
    id     — SQLite row id (None until saved, never changes afterwards)
    """
    name:  str
    value: int
    id:    Optional[int] = None

    @property
    def is_persisted(self) -> bool:
        """True iff the record carries a store-assigned id."""
        return self.id is not None and self.id >= 1

    def sort_key(self) -> tuple[int, int]:
        """Key that orders scores highest value first, then by storage order."""
        return (-self.value, self.id if self.id is not None else 0)

    def __lt__(self, other: "Score") -> bool:
        if not isinstance(other, Score):
            return NotImplemented
        return self.value < other.value

    def __str__(self) -> str:
        return f"{self.name} {self.value}"
