"""
CLI entry point for movie-catalog.

Usage
─────
  # List the catalog (optionally filtered by title)
  movie-catalog list
  movie-catalog list --search shining

  # Add a movie
  movie-catalog add --title "The Shining" --year 1980 \\
      --director "Stanley Kubrick" --rating 8.4 --runtime 146 \\
      --votes 1100000 --watched yes

  # Show details + scariness, edit, remove by row index
  movie-catalog show 0
  movie-catalog edit 0 --rating 8.5
  movie-catalog remove 0

  # Bulk import another file
  movie-catalog import ./more_movies.csv

  # Launch the desktop window
  movie-catalog gui

Subcommands are implemented as standalone functions (cmd_list, cmd_add, …)
so they can be unit-tested without invoking argparse.
"""

import argparse
import logging
import sys
from typing import Optional

from movie_catalog.catalog.codec import decode_fields
from movie_catalog.catalog.models import MovieRecord
from movie_catalog.catalog.store import ImportReport, MovieStore
from movie_catalog.config import CatalogConfig
from movie_catalog.exceptions import CatalogBaseError

__all__ = [
    "build_parser",
    "cmd_list",
    "cmd_show",
    "cmd_add",
    "cmd_edit",
    "cmd_remove",
    "cmd_import",
    "main",
]

logger = logging.getLogger(__name__)


# ── Argument parser ────────────────────────────────────────────────────────────


def _add_field_options(parser: argparse.ArgumentParser, required: bool) -> None:
    """Register the seven movie field flags on *parser*."""
    parser.add_argument("--title", required=required, metavar="TEXT")
    parser.add_argument("--year", required=required, metavar="YEAR")
    parser.add_argument("--director", required=required, metavar="TEXT")
    parser.add_argument("--rating", required=required, metavar="0-10")
    parser.add_argument("--runtime", required=required, metavar="MINUTES",
                        help="Runtime in minutes (> 0)")
    parser.add_argument("--votes", required=required, metavar="N")
    parser.add_argument(
        "--watched",
        default="no" if required else None,
        metavar="BOOL",
        help="true/false, yes/no, y/n or 1/0",
    )


def build_parser() -> argparse.ArgumentParser:
    """
    Build and return the top-level argument parser.

    Subcommands: list | show | add | edit | remove | import | gui
    """
    config = CatalogConfig.from_env()
    parser = argparse.ArgumentParser(
        prog="movie-catalog",
        description="Manage a small horror-movie catalog stored in a CSV file",
    )
    parser.add_argument(
        "--file",
        default=config.data_file,
        metavar="PATH",
        help=f"Catalog file (default: {config.data_file})",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=config.debug,
        help="Enable verbose debug logging",
    )

    sub = parser.add_subparsers(dest="subcommand")

    # ── list ──────────────────────────────────────────────────────────────
    lst = sub.add_parser("list", help="List catalog entries")
    lst.add_argument(
        "--search",
        default=None,
        metavar="TEXT",
        help="Filter by title substring",
    )

    # ── show ──────────────────────────────────────────────────────────────
    show = sub.add_parser("show", help="Show one entry with its scariness score")
    show.add_argument("index", type=int, help="Row index as printed by 'list'")

    # ── add ───────────────────────────────────────────────────────────────
    add = sub.add_parser("add", help="Add a movie")
    _add_field_options(add, required=True)

    # ── edit ──────────────────────────────────────────────────────────────
    edit = sub.add_parser("edit", help="Replace fields of an existing entry")
    edit.add_argument("index", type=int, help="Row index as printed by 'list'")
    _add_field_options(edit, required=False)

    # ── remove ────────────────────────────────────────────────────────────
    rm = sub.add_parser("remove", help="Remove an entry by row index")
    rm.add_argument("index", type=int, help="Row index as printed by 'list'")

    # ── import ────────────────────────────────────────────────────────────
    imp = sub.add_parser("import", help="Bulk-import movies from another file")
    imp.add_argument("source", metavar="PATH", help="File to import")

    # ── gui ───────────────────────────────────────────────────────────────
    sub.add_parser("gui", help="Open the desktop window")

    return parser


# ── Command implementations ───────────────────────────────────────────────────


def cmd_list(store: MovieStore, search: Optional[str] = None) -> None:
    """Print catalog rows with their store index."""
    query = (search or "").lower()
    rows = [
        (i, rec) for i, rec in enumerate(store.get_all())
        if query in rec.title.lower()
    ]
    if not rows:
        print("0 movies found.")
        return
    for i, rec in rows:
        seen = "yes" if rec.watched else "no"
        print(f"[{i:>3}]  {rec.title:<30} {rec.year}  {rec.director:<22} "
              f"{rec.rating:>4.1f}  watched={seen}")


def cmd_show(store: MovieStore, index: int) -> MovieRecord:
    """Print one record and its scariness score."""
    records = store.get_all()
    if not 0 <= index < len(records):
        raise IndexError(f"No movie at index {index}")
    rec = records[index]
    print(rec.pretty())
    print(f"Scariness: {rec.scariness:.1f} / 10.0")
    return rec


def cmd_add(
    store: MovieStore,
    title: str,
    year: str,
    director: str,
    rating: str,
    runtime: str,
    votes: str,
    watched: str = "no",
) -> MovieRecord:
    """
    Validate the fields as a unit and append the movie.

    Raises:
        ValidationError: any field fails validation (nothing is stored).
        StoreError:      the catalog file could not be written.
    """
    record = decode_fields(title, year, director, rating, runtime, votes, watched)
    store.add(record)
    logger.info("Added %s", record)
    print(f"Added [{len(store) - 1}] {record.pretty()}")
    return record


def cmd_edit(
    store: MovieStore,
    index: int,
    title: Optional[str] = None,
    year: Optional[str] = None,
    director: Optional[str] = None,
    rating: Optional[str] = None,
    runtime: Optional[str] = None,
    votes: Optional[str] = None,
    watched: Optional[str] = None,
) -> MovieRecord:
    """
    Replace the record at *index*; omitted fields keep their current value.

    Raises:
        IndexError:      *index* is not a valid row.
        ValidationError: the merged fields fail validation.
    """
    records = store.get_all()
    if not 0 <= index < len(records):
        raise IndexError(f"No movie at index {index}")
    old = records[index]

    def pick(new: Optional[str], current: str) -> str:
        return current if new is None else new

    record = decode_fields(
        pick(title, old.title),
        pick(year, str(old.year)),
        pick(director, old.director),
        pick(rating, str(old.rating)),
        pick(runtime, str(old.runtime_minutes)),
        pick(votes, str(old.votes)),
        pick(watched, "true" if old.watched else "false"),
    )
    store.replace_at(index, record)
    logger.info("Updated row %d → %s", index, record)
    print(f"Updated {record.pretty()}")
    return record


def cmd_remove(store: MovieStore, index: int) -> bool:
    """Remove the row at *index*; prints whether anything was removed."""
    removed = store.remove_at(index)
    if removed:
        print(f"Removed movie at index {index}.")
    else:
        print(f"Not removed: no movie at index {index}.")
    return removed


def cmd_import(store: MovieStore, source: str) -> ImportReport:
    """Import *source* and print the report verbatim."""
    report = store.import_file(source)
    print(f"Import finished. {report.summary()}")
    for err in report.errors:
        print(f"  {err}")
    return report


def _launch_gui(store: MovieStore) -> int:
    from movie_catalog.gui.app import run_app
    return run_app(store)


# ── Entry point ───────────────────────────────────────────────────────────────


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point. Returns exit code."""
    parser = build_parser()
    ns = parser.parse_args(argv)

    level = logging.DEBUG if ns.debug else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")

    if ns.subcommand is None:
        parser.print_help()
        return 0

    store = MovieStore(ns.file)

    try:
        if ns.subcommand == "list":
            cmd_list(store=store, search=ns.search)
            return 0

        if ns.subcommand == "show":
            cmd_show(store=store, index=ns.index)
            return 0

        if ns.subcommand == "add":
            cmd_add(
                store=store,
                title=ns.title,
                year=ns.year,
                director=ns.director,
                rating=ns.rating,
                runtime=ns.runtime,
                votes=ns.votes,
                watched=ns.watched,
            )
            return 0

        if ns.subcommand == "edit":
            cmd_edit(
                store=store,
                index=ns.index,
                title=ns.title,
                year=ns.year,
                director=ns.director,
                rating=ns.rating,
                runtime=ns.runtime,
                votes=ns.votes,
                watched=ns.watched,
            )
            return 0

        if ns.subcommand == "remove":
            return 0 if cmd_remove(store=store, index=ns.index) else 1

        if ns.subcommand == "import":
            cmd_import(store=store, source=ns.source)
            return 0

        if ns.subcommand == "gui":
            return _launch_gui(store)
    except (CatalogBaseError, IndexError) as exc:
        logger.debug("%s failed", ns.subcommand, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
