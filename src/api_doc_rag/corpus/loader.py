"""Corpus loader.

Reads the scraper's output (a JSON or YAML document) into an immutable
Corpus. Accepts either a bare list of endpoint objects or a mapping of the
form ``{"base_url": ..., "scraped_at": ..., "endpoints": [...]}``.
"""

import json
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from api_doc_rag.corpus.models import ApiEndpoint, Corpus
from api_doc_rag.errors import EmptyCorpusError, MalformedCorpusError

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def load_corpus(source: Path | bytes | str | Sequence | Mapping, *, strict: bool = False) -> Corpus:
    """Load and validate a corpus.

    ``source`` is a file path, the raw document text, or an already
    decoded list/mapping. Malformed entries are skipped and counted unless
    ``strict`` is set, in which case the first one aborts the load.
    """
    doc = _read(source)
    entries, meta = _split_document(doc)

    endpoints: list[ApiEndpoint] = []
    seen: set[tuple[str, str]] = set()
    skipped = 0

    for i, entry in enumerate(entries):
        try:
            endpoint = _parse_entry(i, entry)
            if endpoint.key in seen:
                raise MalformedCorpusError(f"entry {i}: duplicate endpoint {endpoint.label}", entry=i)
        except MalformedCorpusError as e:
            if strict:
                raise
            logger.warning("Skipping malformed corpus entry: %s", e)
            skipped += 1
            continue
        seen.add(endpoint.key)
        endpoints.append(endpoint)

    if not endpoints:
        raise EmptyCorpusError(f"no valid endpoints in corpus ({skipped} malformed entries skipped)")

    try:
        corpus = Corpus(endpoints=tuple(endpoints), skipped=skipped, **meta)
    except ValidationError as e:
        raise MalformedCorpusError(f"invalid corpus metadata: {e}") from e

    logger.info("Loaded %d endpoints (%d skipped)", corpus.count, skipped)
    return corpus


def _read(source: Path | bytes | str | Sequence | Mapping) -> Any:
    if isinstance(source, Path):
        try:
            text = source.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise MalformedCorpusError(f"cannot read {source}: {e}") from e
        if source.suffix.lower() in YAML_SUFFIXES:
            return _decode_yaml(text)
        return _decode_json(text)
    if isinstance(source, bytes):
        try:
            source = source.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedCorpusError(f"corpus is not valid UTF-8: {e}") from e
    if isinstance(source, str):
        try:
            return json.loads(source)
        except json.JSONDecodeError:
            return _decode_yaml(source)
    return source


def _decode_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedCorpusError(f"invalid JSON: {e}") from e


def _decode_yaml(text: str) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise MalformedCorpusError(f"invalid YAML: {e}") from e


def _split_document(doc: Any) -> tuple[list, dict]:
    """Return (entries, corpus metadata) for either supported top-level shape."""
    if isinstance(doc, Mapping):
        entries = doc.get("endpoints")
        if not _is_sequence(entries):
            raise MalformedCorpusError("corpus mapping must contain an 'endpoints' list")
        meta = {key: doc[key] for key in ("base_url", "scraped_at") if doc.get(key) is not None}
    elif _is_sequence(doc):
        entries, meta = doc, {}
    else:
        raise MalformedCorpusError(
            f"corpus must be a list of endpoint objects, got {type(doc).__name__}"
        )

    # a list with no objects at all is not a collection of endpoints
    if entries and not any(isinstance(entry, Mapping) for entry in entries):
        raise MalformedCorpusError("corpus must be a list of endpoint objects, found no objects")
    return list(entries), meta


def _parse_entry(i: int, entry: Any) -> ApiEndpoint:
    if not isinstance(entry, Mapping):
        raise MalformedCorpusError(f"entry {i}: expected an object, got {type(entry).__name__}", entry=i)
    try:
        return ApiEndpoint.model_validate(dict(entry))
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise MalformedCorpusError(f"entry {i}: invalid field(s) {fields}", entry=i) from e


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))
