"""Render ranked endpoints into a bounded context for answer generation."""

import logging

from pydantic import BaseModel, ConfigDict

from api_doc_rag.corpus.models import ApiEndpoint, Corpus
from api_doc_rag.rag.ranker import RankedResult

logger = logging.getLogger(__name__)

NO_RELEVANT_ENDPOINT = "No relevant endpoint found."

BLOCK_SEPARATOR = "\n---\n\n"


class EndpointSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    method: str
    path: str
    name: str
    description: str
    score: float


class RetrievalResponse(BaseModel):
    """Top-ranked endpoints plus the context string rendered from them."""

    model_config = ConfigDict(frozen=True)

    query: str
    results: tuple[RankedResult, ...]
    endpoints: tuple[EndpointSummary, ...]
    context: str

    @property
    def found(self) -> bool:
        return bool(self.results)


def render_endpoint(endpoint: ApiEndpoint, score: float) -> str:
    lines = [f"[Relevance: {score:.2f}] {endpoint.method.value} {endpoint.path}"]
    if endpoint.name:
        lines.append(f"Name: {endpoint.name}")
    lines.append(f"Description: {endpoint.description}")
    if endpoint.tags or endpoint.category:
        labels = list(endpoint.tags) + ([endpoint.category] if endpoint.category else [])
        lines.append(f"Tags: {', '.join(labels)}")
    if endpoint.parameters:
        lines.append("Parameters:")
        for p in endpoint.parameters:
            line = f"  - {p.name} ({p.type.value}, {p.location.value})"
            if p.required:
                line += " [Required]"
            if p.default is not None:
                line += f" [Default: {p.default}]"
            lines.append(f"{line}: {p.description}")
    if endpoint.example:
        lines.append("Example:")
        lines.append(endpoint.example)
    return "\n".join(lines)


def assemble(
    query: str,
    results: list[RankedResult],
    corpus: Corpus,
    max_context_length: int,
) -> RetrievalResponse:
    """Concatenate rendered endpoints in rank order within ``max_context_length``.

    A block that does not fit is dropped whole; later, shorter blocks may
    still be included.
    """
    blocks: list[str] = []
    kept: list[RankedResult] = []
    length = 0

    for result in results:
        block = render_endpoint(corpus[result.position], result.score)
        extra = len(block) + (len(BLOCK_SEPARATOR) if blocks else 0)
        if length + extra > max_context_length:
            logger.debug(
                "Dropping %s from context (%d chars, %d remaining)",
                corpus[result.position].label, len(block), max_context_length - length,
            )
            continue
        blocks.append(block)
        kept.append(result)
        length += extra

    if not kept:
        # the sentinel is held to the same budget as rendered blocks
        context = NO_RELEVANT_ENDPOINT[:max_context_length]
        return RetrievalResponse(query=query, results=(), endpoints=(), context=context)

    endpoints = tuple(
        EndpointSummary(
            method=corpus[r.position].method.value,
            path=corpus[r.position].path,
            name=corpus[r.position].name,
            description=corpus[r.position].description,
            score=r.score,
        )
        for r in kept
    )
    return RetrievalResponse(
        query=query,
        results=tuple(kept),
        endpoints=endpoints,
        context=BLOCK_SEPARATOR.join(blocks),
    )
