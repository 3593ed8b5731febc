"""
catalog — movie records and their file-backed store.

Public API
──────────
MovieRecord   — immutable dataclass for one validated movie
decode_line   — text line → MovieRecord (raises ValidationError)
decode_fields — seven text fields → MovieRecord (form / CLI input)
encode_record — MovieRecord → text line
MovieStore    — ordered list synchronized to one file
ImportReport  — inserted count + per-line diagnostics from import_file()
LineError     — one (line_number, message) diagnostic
"""

from movie_catalog.catalog.models import MovieRecord
from movie_catalog.catalog.codec import decode_fields, decode_line, encode_record
from movie_catalog.catalog.store import ImportReport, LineError, MovieStore

__all__ = [
    "MovieRecord",
    "decode_line",
    "decode_fields",
    "encode_record",
    "MovieStore",
    "ImportReport",
    "LineError",
]
