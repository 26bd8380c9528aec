"""Swappable handle on the current corpus and index.

A Snapshot is immutable. Readers take ``store.snapshot`` once and use it
for the whole query; ``reload`` builds a new snapshot off to the side and
publishes it with a single reference assignment, so a reader sees either
the old or the new index in full.
"""

import logging
import threading
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from api_doc_rag.config import FieldWeights
from api_doc_rag.corpus.loader import load_corpus
from api_doc_rag.corpus.models import Corpus
from api_doc_rag.errors import LoadError
from api_doc_rag.rag.indexer import Index, build_index

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    corpus: Corpus
    index: Index
    loaded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class IndexStore:
    """Holds the published Snapshot. Reads are lock-free."""

    def __init__(self, snapshot: Snapshot, weights: FieldWeights | None = None, strict: bool = False):
        self._snapshot = snapshot
        self._weights = weights or snapshot.index.weights
        self._strict = strict
        self._reload_lock = threading.Lock()

    @classmethod
    def from_corpus(cls, corpus: Corpus, weights: FieldWeights | None = None, strict: bool = False) -> "IndexStore":
        return cls(Snapshot(corpus=corpus, index=build_index(corpus, weights)), weights=weights, strict=strict)

    @classmethod
    def from_source(
        cls,
        source: Path | bytes | str | Sequence | Mapping,
        weights: FieldWeights | None = None,
        strict: bool = False,
    ) -> "IndexStore":
        """Load and index ``source``. LoadError propagates: there is nothing to fall back to."""
        return cls.from_corpus(load_corpus(source, strict=strict), weights=weights, strict=strict)

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    def reload(self, source: Path | bytes | str | Sequence | Mapping) -> Snapshot:
        """Rebuild from ``source`` and publish the result.

        On LoadError the current snapshot stays published and the error is
        re-raised to the caller.
        """
        try:
            corpus = load_corpus(source, strict=self._strict)
        except LoadError as e:
            current = self._snapshot
            logger.error(
                "Reload failed, keeping %d endpoints loaded at %s: %s",
                current.corpus.count, current.loaded_at.isoformat(), e,
            )
            raise
        snapshot = Snapshot(corpus=corpus, index=build_index(corpus, self._weights))

        # only the swap is serialized; loading and indexing run unlocked
        with self._reload_lock:
            self._snapshot = snapshot

        logger.info("Reloaded index: %d endpoints", corpus.count)
        return snapshot
