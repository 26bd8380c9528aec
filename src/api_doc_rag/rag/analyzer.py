"""Text normalization shared by the indexer and the query side.

Both corpus fields and queries go through ``normalize`` so that terms are
always comparable.
"""

import re
from dataclasses import dataclass

TOKEN_SPLIT = re.compile(r"[^a-z0-9]+")

MIN_TOKEN_LENGTH = 2

STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "is", "are", "was", "be",
    "how", "do", "does", "did", "i", "me", "my", "we", "you",
    "to", "of", "in", "on", "at", "for", "with", "what", "which",
    "can", "it", "this", "that",
})


@dataclass(frozen=True)
class Query:
    """A raw query and its normalized terms (order and duplicates kept)."""

    raw: str
    terms: tuple[str, ...]

    @property
    def text(self) -> str:
        """The normalized query as a single space-joined string."""
        return " ".join(self.terms)

    @property
    def unique_terms(self) -> frozenset[str]:
        return frozenset(self.terms)

    def __bool__(self) -> bool:
        return bool(self.terms)


def normalize(text: str) -> list[str]:
    """Lower-case, split on non-alphanumerics, drop short tokens and stop words."""
    tokens = TOKEN_SPLIT.split(text.lower())
    return [t for t in tokens if len(t) >= MIN_TOKEN_LENGTH and t not in STOP_WORDS]


def analyze(raw: str) -> Query:
    return Query(raw=raw, terms=tuple(normalize(raw)))
