"""
GUI ViewModels — pure-Python state containers.

No Qt imports here; every class is testable without a display.
Qt widgets read from these objects and push user input into them.

Public API
──────────
CatalogViewModel     — table rows + title search + selection → store index
RecordFormViewModel  — the add/edit form; builds a MovieRecord in one shot
"""

import logging
from typing import Optional

from movie_catalog.catalog.codec import decode_fields
from movie_catalog.catalog.models import MovieRecord
from movie_catalog.exceptions import ValidationError

__all__ = [
    "COLUMNS",
    "CatalogViewModel",
    "RecordFormViewModel",
]

logger = logging.getLogger(__name__)

COLUMNS = ["Title", "Year", "Director", "Rating", "Runtime", "Votes", "Watched"]


# ── CatalogViewModel ───────────────────────────────────────────────────────────

class CatalogViewModel:
    """
    Rows shown in the main table.

    Attributes
    ──────────
    records        — snapshot from MovieStore.get_all()
    search_query   — case-insensitive title substring
    selected_row   — row in the *visible* table, or None
    visible_rows   — derived: (store_index, record) pairs matching the query
    """

    def __init__(self) -> None:
        self.records:      list[MovieRecord] = []
        self.search_query: str               = ""
        self.selected_row: Optional[int]     = None

    def load(self, records: list[MovieRecord]) -> None:
        """Replace the snapshot (after any store mutation); clears selection."""
        self.records = list(records)
        self.selected_row = None

    @property
    def visible_rows(self) -> list[tuple[int, MovieRecord]]:
        q = self.search_query.strip().lower()
        return [
            (i, rec) for i, rec in enumerate(self.records)
            if not q or q in rec.title.lower()
        ]

    def select(self, row: Optional[int]) -> None:
        """Select a visible row; out-of-range rows clear the selection."""
        if row is None or not 0 <= row < len(self.visible_rows):
            self.selected_row = None
        else:
            self.selected_row = row

    @property
    def selected_index(self) -> Optional[int]:
        """Store index of the selected row, or None."""
        if self.selected_row is None:
            return None
        rows = self.visible_rows
        if self.selected_row >= len(rows):
            return None
        return rows[self.selected_row][0]

    @property
    def selected_record(self) -> Optional[MovieRecord]:
        index = self.selected_index
        return None if index is None else self.records[index]

    @staticmethod
    def cells(record: MovieRecord) -> list[str]:
        """Display strings for one table row, in COLUMNS order."""
        return [
            record.title,
            str(record.year),
            record.director,
            f"{record.rating:.1f}",
            str(record.runtime_minutes),
            str(record.votes),
            "Yes" if record.watched else "No",
        ]


# ── RecordFormViewModel ────────────────────────────────────────────────────────

class RecordFormViewModel:
    """
    Add / edit form state.

    All inputs are kept as raw text until build() validates them together,
    so no half-valid record ever reaches the store.
    """

    def __init__(self) -> None:
        self.title:    str  = ""
        self.year:     str  = ""
        self.director: str  = ""
        self.rating:   str  = ""
        self.runtime:  str  = ""
        self.votes:    str  = ""
        self.watched:  bool = False
        self.error_message: str = ""

    @classmethod
    def from_record(cls, record: Optional[MovieRecord]) -> "RecordFormViewModel":
        """Prefill from *record* (edit mode) or return a blank form."""
        vm = cls()
        if record is not None:
            vm.title    = record.title
            vm.year     = str(record.year)
            vm.director = record.director
            vm.rating   = f"{record.rating:.1f}"
            vm.runtime  = str(record.runtime_minutes)
            vm.votes    = str(record.votes)
            vm.watched  = record.watched
        return vm

    def build(self) -> MovieRecord:
        """
        Validate every field and return the record.

        Raises:
            ValidationError: first failing field; message also kept in
                             ``error_message`` for display.
        """
        try:
            record = decode_fields(
                self.title,
                self.year,
                self.director,
                self.rating,
                self.runtime,
                self.votes,
                "true" if self.watched else "false",
            )
        except ValidationError as exc:
            self.error_message = str(exc)
            raise
        self.error_message = ""
        return record
