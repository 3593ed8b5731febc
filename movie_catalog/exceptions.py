"""
Project-wide custom exception hierarchy.
All modules raise subclasses of CatalogBaseError — never bare Exception.
"""

__all__ = [
    "CatalogBaseError",
    "ValidationError",
    "StoreError",
]


class CatalogBaseError(Exception):
    """Root exception for all movie-catalog errors."""


# ── Record ────────────────────────────────────────────────────────────────────

class ValidationError(CatalogBaseError, ValueError):
    """
    Raised when a movie field is malformed or out of range.

    Attributes:
        field — name of the offending field ("title", "year", …), or "line"
                when the line itself has the wrong shape.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


# ── Store ─────────────────────────────────────────────────────────────────────

class StoreError(CatalogBaseError):
    """Raised when the catalog file cannot be written (disk / permission fault)."""
