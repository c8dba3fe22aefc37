"""
CLI entry point for sqlhighscores.

Usage
─────
  # Show the list, highest score first
  sqlhighscores list

  # Add, edit and remove scores
  sqlhighscores add --name Alice --value 10
  sqlhighscores edit --id 1 --value 25
  sqlhighscores delete --id 1

  # Use a specific database file
  sqlhighscores --db ./scores.db list

The database path is taken from --db, then the SQLHIGHSCORES_DB environment
variable, then ~/.sqlhighscores/scores.db.

Subcommands are implemented as standalone functions (cmd_list, cmd_add, …)
so they can be unit-tested without invoking argparse.
"""

import argparse
import logging
import os
import sys
from typing import Optional

from sqlhighscores.exceptions import (
    ScoreNotFoundError,
    ScoreValidationError,
    StoreError,
)
from sqlhighscores.gui.viewmodels import parse_score_value
from sqlhighscores.store.db import ScoreStore
from sqlhighscores.store.models import Score

__all__ = [
    "DEFAULT_DB_PATH",
    "DB_ENV_VAR",
    "build_parser",
    "resolve_db_path",
    "cmd_list",
    "cmd_show",
    "cmd_add",
    "cmd_edit",
    "cmd_delete",
    "cmd_clear",
    "main",
]

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = "~/.sqlhighscores/scores.db"
DB_ENV_VAR = "SQLHIGHSCORES_DB"

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INVALID = 2


# ── Argument parser ────────────────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    """
    Build and return the top-level argument parser.

    Subcommands: list | show | add | edit | delete | clear
    """
    parser = argparse.ArgumentParser(
        prog="sqlhighscores",
        description="Keep a list of named high scores in SQLite",
    )
    parser.add_argument(
        "--db",
        default=None,
        metavar="PATH",
        help=f"SQLite database path (default: ${DB_ENV_VAR} or {DEFAULT_DB_PATH})",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Enable verbose debug logging",
    )

    sub = parser.add_subparsers(dest="subcommand")

    sub.add_parser("list", help="List all scores, highest first")

    show = sub.add_parser("show", help="Show a single score")
    show.add_argument("--id", required=True, type=int, metavar="ID", help="Score id")

    # Values stay strings here and go through parse_score_value so that bad
    # input is reported the same way as in the form.
    add = sub.add_parser("add", help="Add a new score")
    add.add_argument("--name", required=True, metavar="NAME", help="Player name")
    add.add_argument("--value", required=True, metavar="VALUE", help="Integer score")

    edit = sub.add_parser("edit", help="Change the name and/or value of a score")
    edit.add_argument("--id", required=True, type=int, metavar="ID", help="Score id")
    edit.add_argument("--name", default=None, metavar="NAME", help="New player name")
    edit.add_argument("--value", default=None, metavar="VALUE", help="New integer score")

    delete = sub.add_parser("delete", help="Delete a score")
    delete.add_argument("--id", required=True, type=int, metavar="ID", help="Score id")

    clear = sub.add_parser("clear", help="Delete every score")
    clear.add_argument(
        "--yes",
        action="store_true",
        default=False,
        help="Confirm that all scores should be removed",
    )

    return parser


def resolve_db_path(cli_value: Optional[str]) -> str:
    """Pick the database path: --db, then $SQLHIGHSCORES_DB, then the default."""
    return cli_value or os.environ.get(DB_ENV_VAR) or DEFAULT_DB_PATH


# ── Helpers ───────────────────────────────────────────────────────────────────


def _format_row(score: Score) -> str:
    return f"[{score.id:>4}]  {score.name:<30} {score.value:>10}"


# ── Command implementations ───────────────────────────────────────────────────


def cmd_list(store: ScoreStore) -> list[Score]:
    """Print every score to stdout, highest value first."""
    scores = store.get_all()
    if not scores:
        print("0 scores found.")
        return scores
    for score in scores:
        print(_format_row(score))
    return scores


def cmd_show(store: ScoreStore, score_id: int) -> Score:
    """Print one score; ScoreNotFoundError if absent."""
    score = store.get_by_id(score_id)
    if score is None:
        raise ScoreNotFoundError(score_id)
    print(_format_row(score))
    return score


def cmd_add(store: ScoreStore, name: str, value_text: str) -> Score:
    """Validate *value_text* and insert a new score."""
    score = store.create(name, parse_score_value(value_text))
    logger.info("Added score id=%d", score.id)
    print(f"Added {_format_row(score)}")
    return score


def cmd_edit(
    store: ScoreStore,
    score_id: int,
    name: Optional[str],
    value_text: Optional[str],
) -> Score:
    """
    Overwrite name and/or value of an existing score.

    Fields left as None keep their stored value.

    Raises:
        ScoreNotFoundError: no score with *score_id*.
        ScoreValidationError: *value_text* is not a whole number.
    """
    current = store.get_by_id(score_id)
    if current is None:
        raise ScoreNotFoundError(score_id)

    new_name = current.name if name is None else name
    new_value = current.value if value_text is None else parse_score_value(value_text)
    saved = store.save(Score(id=score_id, name=new_name, value=new_value))
    print(f"Updated {_format_row(saved)}")
    return saved


def cmd_delete(store: ScoreStore, score_id: int) -> bool:
    """Delete a score; returns False and reports an error if it was not there."""
    removed = store.delete_by_id(score_id)
    if removed:
        print(f"Deleted score {score_id}")
    else:
        print(f"Error: No score with id={score_id}; nothing deleted", file=sys.stderr)
    return removed


def cmd_clear(store: ScoreStore, confirmed: bool) -> int:
    """Delete every score when *confirmed*; returns the number removed."""
    if not confirmed:
        raise ScoreValidationError("Refusing to clear all scores without --yes")
    removed = store.clear()
    print(f"Deleted {removed} scores")
    return removed


# ── Entry point ───────────────────────────────────────────────────────────────


def _dispatch(ns: argparse.Namespace, store: ScoreStore) -> int:
    if ns.subcommand == "list":
        cmd_list(store=store)
    elif ns.subcommand == "show":
        cmd_show(store=store, score_id=ns.id)
    elif ns.subcommand == "add":
        cmd_add(store=store, name=ns.name, value_text=ns.value)
    elif ns.subcommand == "edit":
        cmd_edit(store=store, score_id=ns.id, name=ns.name, value_text=ns.value)
    elif ns.subcommand == "delete":
        if not cmd_delete(store=store, score_id=ns.id):
            return EXIT_ERROR
    elif ns.subcommand == "clear":
        cmd_clear(store=store, confirmed=ns.yes)
    return EXIT_OK


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point. Returns exit code."""
    parser = build_parser()
    ns = parser.parse_args(argv)

    level = logging.DEBUG if ns.debug else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")

    if ns.subcommand is None:
        parser.print_help()
        return EXIT_OK

    db_path = resolve_db_path(ns.db)
    try:
        with ScoreStore(db_path=db_path) as store:
            logger.debug("Using score database %s", store.db_path)
            return _dispatch(ns, store)
    except ScoreValidationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_INVALID
    except StoreError as exc:
        logger.debug("%s failed", ns.subcommand, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
