"""Heuristic confidence for a retrieval, in [0.1, 1.0]."""

from api_doc_rag.rag.analyzer import Query
from api_doc_rag.rag.context import RetrievalResponse

MIN_CONFIDENCE = 0.1
MAX_CONFIDENCE = 1.0

API_TERMS = frozenset({
    "api", "endpoint", "method", "curl", "request", "parameter", "parameters",
    "example", "create", "get", "list", "update", "delete",
})


def calculate_confidence(query: Query, response: RetrievalResponse) -> float:
    if not response.results or not query.terms:
        return MIN_CONFIDENCE

    top = response.results[0]
    match = len(top.matched_terms) / len(query.unique_terms)

    confidence = (
        match * 0.6
        + query_quality(query) * 0.2
        + context_richness(response) * 0.2
    )
    return max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, confidence))


def query_quality(query: Query) -> float:
    """Longer queries that use API vocabulary score higher."""
    word_count = len(query.raw.split())
    if word_count >= 4:
        specificity = 0.8
    elif word_count >= 2:
        specificity = 0.5
    else:
        specificity = 0.2
    term_score = len(query.unique_terms & API_TERMS) / len(API_TERMS)
    return min(1.0, specificity * 0.6 + term_score * 0.4)


def context_richness(response: RetrievalResponse) -> float:
    """Reward contexts with more lines, parameters, examples and several endpoints."""
    if not response.results:
        return 0.0

    non_empty = sum(1 for line in response.context.splitlines() if line.strip())
    if non_empty >= 10:
        richness = 0.4
    elif non_empty >= 5:
        richness = 0.2
    else:
        richness = 0.1

    if "\nParameters:\n" in response.context:
        richness += 0.3
    if "\nExample:\n" in response.context:
        richness += 0.2
    if len(response.results) > 1:
        richness += 0.1
    return min(1.0, richness)
