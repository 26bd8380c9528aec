"""Score endpoints against an analyzed query.

score = sum over query terms (duplicates included) and fields of
        weight(field) * tf(term, field) * idf(term)
      + path_match_bonus     if the normalized query occurs in the path
      + full_coverage_bonus  if every distinct query term is matched
"""

from dataclasses import dataclass

from api_doc_rag.rag.analyzer import Query
from api_doc_rag.rag.indexer import Index, IndexedEndpoint

DEFAULT_PATH_MATCH_BONUS = 2.0
DEFAULT_FULL_COVERAGE_BONUS = 1.0


@dataclass(frozen=True)
class RankedResult:
    position: int  # index into Corpus.endpoints
    score: float
    matched_terms: frozenset[str]


def rank(
    index: Index,
    query: Query,
    k: int,
    *,
    path_match_bonus: float = DEFAULT_PATH_MATCH_BONUS,
    full_coverage_bonus: float = DEFAULT_FULL_COVERAGE_BONUS,
) -> list[RankedResult]:
    """Return at most ``k`` results, best first, ties in corpus order."""
    if not query.terms or k <= 0:
        return []

    idf = {term: index.idf(term) for term in query.unique_terms}
    weights = index.weights.items()
    results = []

    for entry in index.entries:
        matched = frozenset(t for t in query.unique_terms if entry.has_term(t))
        if not matched:
            continue

        score = 0.0
        for term in query.terms:
            for field, weight in weights:
                tf = entry.term_frequency(field, term)
                if tf:
                    score += weight * tf * idf[term]

        if _path_contains(entry, query):
            score += path_match_bonus
        if matched == query.unique_terms:
            score += full_coverage_bonus

        if score > 0:
            results.append(RankedResult(position=entry.position, score=score, matched_terms=matched))

    results.sort(key=lambda r: (-r.score, r.position))
    return results[:k]


def _path_contains(entry: IndexedEndpoint, query: Query) -> bool:
    """True when the normalized query is a substring of the normalized path."""
    return query.text in entry.path_text
