"""
cli — command-line interface for movie-catalog.

Entry points
────────────
  python -m movie_catalog   (via movie_catalog/__main__.py)
  movie-catalog             (via pyproject.toml [project.scripts])

Subcommands: list | show | add | edit | remove | import | gui
"""

from movie_catalog.cli.main import (
    build_parser,
    cmd_add,
    cmd_edit,
    cmd_import,
    cmd_list,
    cmd_remove,
    cmd_show,
    main,
)

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
