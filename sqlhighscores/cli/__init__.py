"""
cli — command-line interface for sqlhighscores.

Entry points
────────────
  python -m sqlhighscores   (via sqlhighscores/__main__.py)
  sqlhighscores             (via pyproject.toml [project.scripts])

Subcommands: list | show | add | edit | delete | clear
"""

from sqlhighscores.cli.main import build_parser, cmd_add, cmd_delete, cmd_list, main

__all__ = ["build_parser", "cmd_add", "cmd_delete", "cmd_list", "main"]
