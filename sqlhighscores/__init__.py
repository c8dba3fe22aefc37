"""
sqlhighscores — a named high-score list kept in a single SQLite table.

Packages
────────
store   — Score model and the ScoreStore persistence layer
gui     — display-free view models for the list screen and add/edit form
cli     — command-line front end
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
