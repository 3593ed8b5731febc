"""
Line codec for the catalog file.

Format
──────
One record per line, seven comma-separated fields in fixed order:

    title,year,director,rating,runtimeMinutes,votes,watched

rating is written with exactly one fractional digit, watched as lowercase
true/false.  There is no quoting: a comma inside a title or director name
breaks the line (decode reports a field-count error).

Validation order (decode_line / decode_fields)
──────────────────────────────────────────────
   1. field count == 7
   2. title non-empty, no comma or line break
   3. year is an integer          4. 1888 <= year <= current year
   5. director non-empty, no comma or line break
   6. rating is a number          7. 0.0 <= rating <= 10.0
   8. runtime is an integer       9. runtime > 0
  10. votes is an integer        11. votes >= 0
  12. watched in TRUE_TOKENS | FALSE_TOKENS (case-insensitive)

The first failing rule raises ValidationError; nothing is constructed.
"""

from __future__ import annotations

import logging
import math
import re
from datetime import date
from typing import Optional

from movie_catalog.catalog.models import MovieRecord
from movie_catalog.exceptions import ValidationError

__all__ = [
    "HEADER",
    "FIELD_COUNT",
    "MIN_YEAR",
    "MIN_RATING",
    "MAX_RATING",
    "TRUE_TOKENS",
    "FALSE_TOKENS",
    "decode_line",
    "decode_fields",
    "encode_record",
    "parse_watched",
    "is_header",
]

logger = logging.getLogger(__name__)

# ── Constants ─────────────────────────────────────────────────────────────────

HEADER      = "title,year,director,rating,runtimeMinutes,votes,watched"
FIELD_COUNT = 7
MIN_YEAR    = 1888
MIN_RATING  = 0.0
MAX_RATING  = 10.0

TRUE_TOKENS  = frozenset({"true", "yes", "y", "1"})
FALSE_TOKENS = frozenset({"false", "no", "n", "0"})

# Plain decimal integers only: no underscores, no embedded spaces
_INT_RE   = re.compile(r"^[+-]?[0-9]+$")
_FLOAT_RE = re.compile(r"^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?$")

# Characters that cannot survive a round trip through one catalog line
_UNSAFE_TEXT = frozenset(",\r\n")


# ── Field parsers ─────────────────────────────────────────────────────────────

def _parse_int(text: str, field: str, label: str) -> int:
    if not _INT_RE.match(text):
        raise ValidationError(field, f"{label} is not a valid integer: '{text}'")
    return int(text)


def _parse_float(text: str, field: str, label: str) -> float:
    if not _FLOAT_RE.match(text):
        raise ValidationError(field, f"{label} is not a valid number: '{text}'")
    value = float(text)
    if not math.isfinite(value):
        raise ValidationError(field, f"{label} is not a valid number: '{text}'")
    return value


def _check_text(text: str, field: str, label: str) -> None:
    if not text:
        raise ValidationError(field, f"{label} is empty")
    if _UNSAFE_TEXT.intersection(text):
        raise ValidationError(
            field, f"{label} must not contain commas or line breaks: {text!r}"
        )


def parse_watched(text: str) -> bool:
    """
    Map a watched token to a bool.

    Accepts true/yes/y/1 and false/no/n/0 in any case.

    Raises:
        ValidationError: for anything else.
    """
    token = text.strip().lower()
    if token in TRUE_TOKENS:
        return True
    if token in FALSE_TOKENS:
        return False
    raise ValidationError(
        "watched", f"Watched must be true/false, yes/no, or 1/0: '{text}'"
    )


def is_header(line: str) -> bool:
    """True if *line* looks like the catalog header (contains "title")."""
    return "title" in line.lower()


# ── Decode / encode ───────────────────────────────────────────────────────────

def decode_fields(
    title: str,
    year: str,
    director: str,
    rating: str,
    runtime: str,
    votes: str,
    watched: str,
    current_year: Optional[int] = None,
) -> MovieRecord:
    """
    Validate seven text fields as a unit and build a MovieRecord.

    Each field is trimmed first.  *current_year* defaults to today's year.

    Raises:
        ValidationError: on the first failing rule (see module docstring).
    """
    title, year, director, rating, runtime, votes, watched = (
        s.strip() for s in (title, year, director, rating, runtime, votes, watched)
    )
    max_year = current_year if current_year is not None else date.today().year

    _check_text(title, "title", "Title")

    year_value = _parse_int(year, "year", "Year")
    if year_value < MIN_YEAR or year_value > max_year:
        raise ValidationError(
            "year", f"Year must be between {MIN_YEAR} and {max_year}"
        )

    _check_text(director, "director", "Director")

    rating_value = _parse_float(rating, "rating", "Rating")
    if rating_value < MIN_RATING or rating_value > MAX_RATING:
        raise ValidationError(
            "rating", f"Rating must be between {MIN_RATING} and {MAX_RATING}"
        )

    runtime_value = _parse_int(runtime, "runtime_minutes", "Runtime")
    if runtime_value <= 0:
        raise ValidationError("runtime_minutes", "Runtime must be a positive integer")

    votes_value = _parse_int(votes, "votes", "Votes")
    if votes_value < 0:
        raise ValidationError("votes", "Votes must be 0 or greater")

    watched_value = parse_watched(watched)

    return MovieRecord(
        title=title,
        year=year_value,
        director=director,
        rating=rating_value,
        runtime_minutes=runtime_value,
        votes=votes_value,
        watched=watched_value,
    )


def decode_line(line: Optional[str], current_year: Optional[int] = None) -> MovieRecord:
    """
    Parse one catalog line into a MovieRecord.

    Empty fields are kept (``"a,,b"`` has three fields), so a missing value
    is reported against its own field rather than shifting the others.

    Raises:
        ValidationError: wrong field count or any field rule violated.
    """
    if line is None:
        raise ValidationError("line", "Line is null")

    parts = line.split(",")
    if len(parts) != FIELD_COUNT:
        raise ValidationError(
            "line", f"Expected {FIELD_COUNT} fields but found {len(parts)}"
        )
    return decode_fields(*parts, current_year=current_year)


def encode_record(record: MovieRecord) -> str:
    """Render *record* as one catalog line (rating to one decimal place)."""
    return (
        f"{record.title},{record.year},{record.director},{record.rating:.1f},"
        f"{record.runtime_minutes},{record.votes},"
        f"{'true' if record.watched else 'false'}"
    )
