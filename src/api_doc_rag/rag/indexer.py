"""Lexical index over a Corpus.

For every endpoint, each weighted field is tokenized with the shared
normalizer and turned into a term-frequency Counter. Document frequency
is counted once per endpoint, across all of its fields.
"""

import logging
import math
from collections import Counter
from dataclasses import dataclass

from api_doc_rag.config import FieldWeights
from api_doc_rag.corpus.models import ApiEndpoint, Corpus
from api_doc_rag.rag.analyzer import normalize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexedEndpoint:
    """Term statistics for one endpoint, keyed by field name."""

    position: int
    fields: dict[str, Counter]
    path_text: str  # normalized path, space-joined

    def term_frequency(self, field: str, term: str) -> int:
        return self.fields[field][term]

    def has_term(self, term: str) -> bool:
        return any(term in counts for counts in self.fields.values())


@dataclass(frozen=True)
class Index:
    corpus: Corpus
    entries: tuple[IndexedEndpoint, ...]
    doc_freq: dict[str, int]
    weights: FieldWeights

    @property
    def size(self) -> int:
        return len(self.entries)

    def idf(self, term: str) -> float:
        """log(1 + N / df); 0.0 for terms absent from the corpus."""
        df = self.doc_freq.get(term, 0)
        if df == 0:
            return 0.0
        return math.log(1 + self.size / df)


def field_texts(endpoint: ApiEndpoint) -> dict[str, list[str]]:
    """Raw text of each weighted field."""
    tags = list(endpoint.tags)
    if endpoint.category:
        tags.append(endpoint.category)
    return {
        "path": [endpoint.path],
        "name": [endpoint.name],
        "description": [endpoint.description],
        "parameters": [p.name for p in endpoint.parameters],
        "tags": tags,
    }


def build_index(corpus: Corpus, weights: FieldWeights | None = None) -> Index:
    weights = weights or FieldWeights()
    entries = []
    doc_freq: Counter = Counter()

    for position, endpoint in enumerate(corpus.endpoints):
        fields = {}
        for field, texts in field_texts(endpoint).items():
            counts: Counter = Counter()
            for text in texts:
                counts.update(normalize(text))
            fields[field] = counts

        seen = set()
        for counts in fields.values():
            seen.update(counts)
        doc_freq.update(seen)

        entries.append(IndexedEndpoint(
            position=position,
            fields=fields,
            path_text=" ".join(normalize(endpoint.path)),
        ))

    logger.debug("Indexed %d endpoints, %d distinct terms", len(entries), len(doc_freq))
    return Index(corpus=corpus, entries=tuple(entries), doc_freq=dict(doc_freq), weights=weights)
