"""Exception hierarchy for api-doc-rag."""


class ApiDocRagError(Exception):
    """Base class for all errors raised by this package."""


class LoadError(ApiDocRagError):
    """The corpus could not be loaded."""


class MalformedCorpusError(LoadError):
    """The corpus document (or, in strict mode, one of its entries) is invalid."""

    def __init__(self, message: str, entry: int | None = None):
        super().__init__(message)
        self.entry = entry


class EmptyCorpusError(LoadError):
    """No valid endpoint remained after filtering."""


class LlmError(ApiDocRagError):
    """The language model failed to produce an answer."""
