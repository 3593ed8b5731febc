"""Data models for the catalog module."""

from dataclasses import dataclass

__all__ = ["MovieRecord"]

# Scariness tuning
_VOTES_PER_POINT   = 500000.0
_MAX_VOTES_BONUS   = 2.0
_LONG_RUNTIME_MIN  = 120
_SCORE_MIN         = 0.0
_SCORE_MAX         = 10.0


@dataclass(frozen=True)
class MovieRecord:
    """
    One validated movie entry.

    Fields
    ──────
    title           — non-empty display title
    year            — release year, 1888 … current year
    director        — non-empty director name
    rating          — 0.0 … 10.0
    runtime_minutes — > 0
    votes           — >= 0
    watched         — whether the user has seen it

    Records are immutable; an edit replaces the whole record in the store.
    Direct construction trusts its arguments — text from files or forms goes
    through codec.decode_line() / codec.decode_fields() instead.
    """
    title:           str
    year:            int
    director:        str
    rating:          float
    runtime_minutes: int
    votes:           int
    watched:         bool

    # ── Derived ───────────────────────────────────────────────────────────

    @property
    def scariness(self) -> float:
        """Derived 0.0 – 10.0 score; never persisted."""
        score = self.rating
        score += min(self.votes / _VOTES_PER_POINT, _MAX_VOTES_BONUS)
        if self.runtime_minutes > _LONG_RUNTIME_MIN:
            score += 1.0
        if self.watched:
            score -= 1.0
        return max(_SCORE_MIN, min(_SCORE_MAX, score))

    # ── Text helpers ──────────────────────────────────────────────────────

    @classmethod
    def from_line(cls, line: str) -> "MovieRecord":
        """Decode one catalog line; raises ValidationError on bad input."""
        from movie_catalog.catalog.codec import decode_line
        return decode_line(line)

    def to_line(self) -> str:
        """Encode as one catalog line (no trailing newline)."""
        from movie_catalog.catalog.codec import encode_record
        return encode_record(self)

    def pretty(self) -> str:
        """One-line human-readable description for lists and dialogs."""
        return (
            f"{self.title} ({self.year}) - Dir: {self.director} | "
            f"Rating: {self.rating:.1f} | {self.runtime_minutes} min | "
            f"Votes: {self.votes} | Watched: {'Yes' if self.watched else 'No'}"
        )

    def __str__(self) -> str:
        return f"MovieRecord(title={self.title!r}, year={self.year})"
