"""Runtime settings.

Settings come from (lowest to highest precedence) the defaults below, an
optional YAML file, ``API_DOC_RAG_*`` environment variables, and finally
CLI options.
"""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

DEFAULT_CORPUS_PATH = Path("data/scraped/documentation.json")

ENV_CORPUS = "API_DOC_RAG_CORPUS"
ENV_MODEL = "API_DOC_RAG_MODEL"
ENV_TOP_K = "API_DOC_RAG_TOP_K"


class FieldWeights(BaseModel):
    """Per-field multipliers applied to term frequency during ranking."""

    path: float = Field(default=3.0, gt=0)
    name: float = Field(default=2.0, gt=0)
    description: float = Field(default=1.5, gt=0)
    parameters: float = Field(default=1.0, gt=0)
    tags: float = Field(default=0.5, gt=0)

    def items(self) -> list[tuple[str, float]]:
        """(field, weight) pairs in a fixed order."""
        return [(name, getattr(self, name)) for name in FieldWeights.model_fields]


class Settings(BaseModel):
    weights: FieldWeights = FieldWeights()
    path_match_bonus: float = Field(default=2.0, ge=0)
    full_coverage_bonus: float = Field(default=1.0, ge=0)
    top_k: int = Field(default=5, ge=1)
    max_context_length: int = Field(default=6000, gt=0)
    strict_load: bool = False
    corpus_path: Path = DEFAULT_CORPUS_PATH
    model: str | None = None  # no answer generation when unset
    llm_timeout: float = Field(default=30.0, gt=0)


def load_settings(path: Path | None = None) -> Settings:
    """Build Settings from an optional YAML file plus environment overrides."""
    data: dict = {}
    if path is not None:
        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
        if loaded is not None:
            if not isinstance(loaded, dict):
                raise ValueError(f"{path}: settings file must contain a mapping")
            data.update(loaded)

    if os.getenv(ENV_CORPUS):
        data["corpus_path"] = os.environ[ENV_CORPUS]
    if os.getenv(ENV_MODEL):
        data["model"] = os.environ[ENV_MODEL]
    if os.getenv(ENV_TOP_K):
        data["top_k"] = os.environ[ENV_TOP_K]

    return Settings.model_validate(data)
