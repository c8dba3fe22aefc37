"""
gui — display-free presentation layer for the high-score list.

Public API
──────────
viewmodels            — list screen and add / edit form state
"""

from sqlhighscores.gui import viewmodels

__all__ = ["viewmodels"]
