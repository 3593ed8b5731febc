"""movie-catalog — a small horror-movie catalog kept in one CSV-style file."""

__version__ = "0.1.0"
