"""
store — SQLite-backed persistence layer for the high-score list.

Public API
──────────
Score           — dataclass representing one row
ScoreStore      — CRUD interface (create, get_all, get_by_id, update, delete_by_id, …)
NEW_ENTRY       — sentinel id for a form that is creating a score
SCHEMA_VERSION  — table layout version checked on open()
"""

from sqlhighscores.store.models import NEW_ENTRY, Score
from sqlhighscores.store.db import SCHEMA_VERSION, ScoreStore

__all__ = ["Score", "ScoreStore", "NEW_ENTRY", "SCHEMA_VERSION"]
