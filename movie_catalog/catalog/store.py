"""
MovieStore — in-memory movie list synchronized to one delimited text file.

Usage::

    store = MovieStore("movies.csv")       # loads the file if it exists

    store.add(record)                      # append + save
    store.remove_at(3)                     # False if index out of range
    store.replace_at(0, edited)            # edit by position, saved once

    report = store.import_file("more.csv")
    print(report.summary())
    for err in report.errors:
        print(err)

Every mutating call rewrites the whole file before returning.  If a save
fails the in-memory list is kept as-is and StoreError propagates; the
file is then stale until the next successful save.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Union

from movie_catalog.catalog.codec import HEADER, decode_line, encode_record, is_header
from movie_catalog.catalog.models import MovieRecord
from movie_catalog.exceptions import StoreError, ValidationError

__all__ = ["LineError", "ImportReport", "MovieStore"]

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


# ── Reports ───────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class LineError:
    """A single diagnostic; line_number 0 means the whole file."""
    line_number: int
    message:     str

    def __str__(self) -> str:
        if self.line_number <= 0:
            return self.message
        return f"Line {self.line_number}: {self.message}"


@dataclass
class ImportReport:
    """Outcome of MovieStore.import_file(): partial success is normal."""
    inserted: int = 0
    errors:   list[LineError] = field(default_factory=list)

    def summary(self) -> str:
        return f"Inserted: {self.inserted}, Errors: {len(self.errors)}"


# ── Store ─────────────────────────────────────────────────────────────────────

class MovieStore:
    """
    Ordered, duplicate-tolerant movie list bound to a single file.

    The file is opened only inside load()/save()/import_file() with
    context-managed handles; nothing is kept open between calls.
    """

    def __init__(self, path: PathLike) -> None:
        self._path = Path(path).expanduser()
        self._records: list[MovieRecord] = []
        self.load_errors: list[LineError] = []
        self.load()

    # ── Internal helpers ──────────────────────────────────────────────────

    @staticmethod
    def _scan(path: Path) -> Iterator[tuple[int, Union[MovieRecord, LineError]]]:
        """
        Yield (line_number, record or LineError) for every data line in *path*.

        Line 1 is skipped if it looks like a header; blank lines are skipped.
        Lines are decoded one at a time, so a line that is not valid UTF-8
        becomes a LineError without affecting its neighbours.
        Line numbers are 1-based physical line numbers.

        Raises:
            OSError: the file could not be opened or read.
        """
        with path.open("rb") as fh:
            for line_number, raw in enumerate(fh, start=1):
                try:
                    text = raw.decode("utf-8").strip()
                except UnicodeDecodeError as exc:
                    yield line_number, LineError(
                        line_number,
                        f"Line is not valid UTF-8 (byte {exc.start}: {exc.reason})",
                    )
                    continue
                if line_number == 1:
                    text = text.lstrip("\ufeff")
                if not text:
                    continue
                if line_number == 1 and is_header(text):
                    continue
                try:
                    item: Union[MovieRecord, LineError] = decode_line(text)
                except ValidationError as exc:
                    item = LineError(line_number, str(exc))
                yield line_number, item

    # ── Persistence ───────────────────────────────────────────────────────

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> None:
        """
        Replace the in-memory list with the file contents.

        Best effort: a missing file means an empty catalog, invalid lines are
        skipped and recorded in ``load_errors``, and a read failure keeps the
        records read before it.  Never raises.
        """
        self._records.clear()
        self.load_errors = []
        if not self._path.exists():
            logger.debug("No catalog file at %s yet", self._path)
            return

        try:
            for line_number, item in self._scan(self._path):
                if isinstance(item, LineError):
                    logger.warning("Skipping invalid line %d: %s", line_number, item.message)
                    self.load_errors.append(item)
                else:
                    self._records.append(item)
        except OSError as exc:
            logger.error("Error reading file '%s': %s", self._path, exc)
            self.load_errors.append(
                LineError(0, f"Error reading file '{self._path}': {exc}")
            )
            return

        logger.debug("Loaded %d record(s) from %s", len(self._records), self._path)

    def save(self) -> None:
        """
        Overwrite the bound file with the header plus one line per record.

        Raises:
            StoreError: the file could not be written.  In-memory state is
                        unchanged.
        """
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("w", encoding="utf-8", newline="\n") as fh:
                fh.write(HEADER + "\n")
                for record in self._records:
                    fh.write(encode_record(record) + "\n")
        except OSError as exc:
            logger.error("Error saving to file '%s': %s", self._path, exc)
            raise StoreError(f"Error saving to file '{self._path}': {exc}") from exc
        logger.debug("Saved %d record(s) to %s", len(self._records), self._path)

    # ── Public API ────────────────────────────────────────────────────────

    def get_all(self) -> list[MovieRecord]:
        """Return a copy of the records in insertion order."""
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def add(self, record: MovieRecord) -> None:
        """
        Append *record* and save.

        Raises:
            StoreError: save failed (the record stays in memory).
        """
        self._records.append(record)
        self.save()

    def remove_at(self, index: int) -> bool:
        """
        Remove the record at *index* and save.

        Returns:
            True if removed, False if *index* is outside [0, len).
        """
        if not 0 <= index < len(self._records):
            return False
        del self._records[index]
        self.save()
        return True

    def replace_at(self, index: int, record: MovieRecord) -> bool:
        """
        Replace the record at *index* with *record* in one save.

        The edited record moves to the end of the list, matching the
        remove-then-add behaviour of the catalog screens.

        Returns:
            True if replaced, False if *index* is outside [0, len).
        """
        if not 0 <= index < len(self._records):
            return False
        del self._records[index]
        self._records.append(record)
        self.save()
        return True

    def import_file(self, source_path: PathLike) -> ImportReport:
        """
        Append every valid line of *source_path* to the catalog.

        Invalid lines become LineError entries instead of aborting the run.
        The catalog is saved once at the end if anything was inserted.

        Returns:
            ImportReport with the inserted count and all diagnostics.

        Raises:
            StoreError: the final save failed (inserted records stay in memory).
        """
        source = Path(source_path).expanduser()
        report = ImportReport()
        if not source.exists():
            report.errors.append(LineError(0, f"File not found: {source}"))
            return report

        try:
            for _, item in self._scan(source):
                if isinstance(item, LineError):
                    report.errors.append(item)
                    continue
                self._records.append(item)
                report.inserted += 1
        except OSError as exc:
            logger.error("I/O error while reading '%s': %s", source, exc)
            report.errors.append(
                LineError(0, f"I/O error while reading the file: {exc}")
            )

        logger.info(
            "Imported %s: %d inserted, %d error(s)",
            source, report.inserted, len(report.errors),
        )
        if report.inserted > 0:
            self.save()
        return report
