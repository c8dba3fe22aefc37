"""
GUI ViewModels — pure-Python state containers for the high-score screen.

No toolkit imports here; every class is testable without a display.
A front end renders ScoreListViewModel.rows and forwards user actions
(add, edit, delete, confirm, cancel) to the methods below.

Public API
──────────
parse_score_value    — validate the text typed into the score field
ScoreFormViewModel   — state of the add / edit dialog
ScoreListViewModel   — score list + selection + dialog, backed by a ScoreStore
"""

import logging
from typing import Optional

from sqlhighscores.exceptions import ScoreNotFoundError, ScoreValidationError
from sqlhighscores.store.db import ScoreStore
from sqlhighscores.store.models import NEW_ENTRY, Score

__all__ = [
    "parse_score_value",
    "ScoreFormViewModel",
    "ScoreListViewModel",
]

logger = logging.getLogger(__name__)


def parse_score_value(text: str) -> int:
    """
    Parse the score field of the form.

    Raises:
        ScoreValidationError: *text* is empty or not a base-10 integer.
    """
    cleaned = (text or "").strip()
    if not cleaned:
        raise ScoreValidationError("Score must not be empty")
    try:
        return int(cleaned, 10)
    except ValueError:
        raise ScoreValidationError(f"Score must be a whole number, got {cleaned!r}") from None


# ── ScoreFormViewModel ─────────────────────────────────────────────────────────

class ScoreFormViewModel:
    """
    State of the add / edit dialog.

    Attributes
    ──────────
    editing_id — id of the score being edited, or NEW_ENTRY when adding
    name_text  — contents of the name field
    value_text — contents of the score field (validated on submit)
    """

    def __init__(self, editing_id: int = NEW_ENTRY,
                 name_text: str = "", value_text: str = "") -> None:
        self.editing_id: int = editing_id
        self.name_text:  str = name_text
        self.value_text: str = value_text

    @classmethod
    def for_score(cls, score: Score) -> "ScoreFormViewModel":
        """Prefill the form from a persisted score."""
        return cls(editing_id=score.id, name_text=score.name, value_text=str(score.value))

    @property
    def is_new(self) -> bool:
        return self.editing_id == NEW_ENTRY

    def to_score(self) -> Score:
        """Build the Score described by the form; id is None when adding."""
        value = parse_score_value(self.value_text)
        return Score(
            name=self.name_text,
            value=value,
            id=None if self.is_new else self.editing_id,
        )


# ── ScoreListViewModel ─────────────────────────────────────────────────────────

class ScoreListViewModel:
    """
    Drives the high-score list screen.

    Attributes
    ──────────
    scores     — scores from the last refresh(), highest value first
    selected   — the highlighted score, or None
    form       — the open add / edit dialog, or None
    last_error — message from the last rejected submit, or ""
    rows       — derived: display strings for the list
    """

    def __init__(self, store: ScoreStore) -> None:
        self._store = store
        self.scores:     list[Score]                  = []
        self.selected:   Optional[Score]              = None
        self.form:       Optional[ScoreFormViewModel] = None
        self.last_error: str                          = ""

    @property
    def rows(self) -> list[str]:
        return [str(s) for s in self.scores]

    def refresh(self) -> list[Score]:
        """Re-read every score from the store."""
        self.scores = self._store.get_all()
        if self.selected is not None and self.selected.id not in {s.id for s in self.scores}:
            self.selected = None
        return self.scores

    def select(self, score: Optional[Score]) -> None:
        """Mark *score* as selected (None clears the selection)."""
        self.selected = score

    # ── dialog ────────────────────────────────────────────────────────────

    def begin_add(self) -> ScoreFormViewModel:
        """Open an empty form for a new score."""
        self.form = ScoreFormViewModel()
        self.last_error = ""
        return self.form

    def begin_edit(self, score_id: int) -> ScoreFormViewModel:
        """
        Open the form prefilled with the stored values of *score_id*.

        Raises:
            ScoreNotFoundError: the score has been removed meanwhile.
        """
        score = self._store.get_by_id(score_id)
        if score is None:
            raise ScoreNotFoundError(score_id)
        self.form = ScoreFormViewModel.for_score(score)
        self.last_error = ""
        return self.form

    def cancel(self) -> None:
        """Close the form without saving."""
        self.form = None
        self.last_error = ""

    def submit(self) -> Score:
        """
        Validate the open form and create or update the score.

        The form stays open when validation fails so the user can correct it.

        Raises:
            RuntimeError: no form is open.
            ScoreValidationError: the score field is not a whole number, or is
                out of range for the table.
            ScoreNotFoundError: the edited score no longer exists.
        """
        if self.form is None:
            raise RuntimeError("submit() called without an open form")
        try:
            saved = self._store.save(self.form.to_score())
        except ScoreValidationError as exc:
            self.last_error = str(exc)
            logger.debug("Rejected form input: %s", exc)
            raise

        self.form = None
        self.last_error = ""
        self.refresh()
        return saved

    # ── context menu ──────────────────────────────────────────────────────

    def delete(self, score_id: int) -> bool:
        """Remove *score_id* and refresh; False if it was already gone."""
        removed = self._store.delete_by_id(score_id)
        self.refresh()
        return removed
