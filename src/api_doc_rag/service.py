"""Query handling: retrieval plus optional answer generation."""

import logging
import time

from pydantic import BaseModel, ConfigDict

from api_doc_rag.config import Settings
from api_doc_rag.errors import LlmError
from api_doc_rag.llm import LlmClient
from api_doc_rag.rag.analyzer import Query, analyze
from api_doc_rag.rag.confidence import calculate_confidence
from api_doc_rag.rag.context import RetrievalResponse, assemble
from api_doc_rag.rag.ranker import rank
from api_doc_rag.rag.store import IndexStore

logger = logging.getLogger(__name__)

NO_MATCH_ANSWER = (
    "I couldn't find any relevant information in the API documentation for your query. "
    "Try asking about a specific operation, for example creating, listing or updating a resource."
)

FALLBACK_PREFIX = "Answer generation is unavailable. These are the most relevant documented endpoints:"


class Answer(BaseModel):
    model_config = ConfigDict(frozen=True)

    query: str
    answer: str
    generated: bool
    retrieval: RetrievalResponse
    confidence: float
    explanation: str
    error: str | None = None


class DocsAssistant:
    """Answers questions against whatever snapshot the store currently publishes."""

    def __init__(self, store: IndexStore, settings: Settings | None = None, llm: LlmClient | None = None):
        self.store = store
        self.settings = settings or Settings()
        self.llm = llm

    def retrieve(self, query: str, k: int | None = None) -> RetrievalResponse:
        return self._retrieve(analyze(query), k)

    def ask(self, query: str) -> Answer:
        analyzed = analyze(query)
        retrieval = self._retrieve(analyzed, None)
        confidence = calculate_confidence(analyzed, retrieval)
        explanation = _explain(retrieval, confidence)

        if not retrieval.found:
            return Answer(
                query=query, answer=NO_MATCH_ANSWER, generated=False,
                retrieval=retrieval, confidence=confidence, explanation=explanation,
            )

        if self.llm is None:
            return Answer(
                query=query, answer=f"{FALLBACK_PREFIX}\n\n{retrieval.context}", generated=False,
                retrieval=retrieval, confidence=confidence, explanation=explanation,
            )

        try:
            text = self.llm.generate_answer(query, retrieval.context)
        except LlmError as e:
            logger.error("Answer generation failed, returning retrieval only: %s", e)
            return Answer(
                query=query, answer=f"{FALLBACK_PREFIX}\n\n{retrieval.context}", generated=False,
                retrieval=retrieval, confidence=confidence, explanation=explanation, error=str(e),
            )

        return Answer(
            query=query, answer=text, generated=True,
            retrieval=retrieval, confidence=confidence, explanation=explanation,
        )

    def _retrieve(self, query: Query, k: int | None) -> RetrievalResponse:
        start = time.perf_counter()
        snapshot = self.store.snapshot
        s = self.settings

        results = rank(
            snapshot.index,
            query,
            k if k is not None else s.top_k,
            path_match_bonus=s.path_match_bonus,
            full_coverage_bonus=s.full_coverage_bonus,
        )
        response = assemble(query.raw, results, snapshot.corpus, s.max_context_length)

        latency_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "query=%r terms=%d results=%d top_score=%.2f context_chars=%d latency_ms=%.2f",
            query.raw, len(query.terms), len(response.results),
            response.results[0].score if response.results else 0.0,
            len(response.context), latency_ms,
        )
        return response


def _explain(retrieval: RetrievalResponse, confidence: float) -> str:
    explanation = f"Found {len(retrieval.results)} relevant endpoints. "
    if retrieval.endpoints:
        best = retrieval.endpoints[0]
        explanation += f"Best match: '{best.method} {best.path}' with score {best.score:.2f}. "
    return explanation + f"Overall confidence: {confidence:.2f}"
