"""Data models for scraped API documentation.

The loader validates raw corpus entries into these models. Everything
downstream (indexer, ranker, context assembler) works on them.
"""

from datetime import datetime, timezone
from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


class ParamLocation(str, Enum):
    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"
    BODY = "body"
    FORM = "form"


class ParamType(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    FILE = "file"


_LOCATION_ALIASES = {
    "formdata": "form",
    "form-data": "form",
    "json": "body",
    "request_body": "body",
}

_TYPE_ALIASES = {
    "str": "string",
    "text": "string",
    "int": "integer",
    "long": "integer",
    "float": "number",
    "double": "number",
    "decimal": "number",
    "bool": "boolean",
    "list": "array",
    "dict": "object",
    "json": "object",
    "hash": "object",
}


class Param(BaseModel):
    """A single documented parameter of an endpoint."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(min_length=1)
    location: ParamLocation = Field(
        default=ParamLocation.QUERY, validation_alias=AliasChoices("location", "in")
    )
    type: ParamType = Field(
        default=ParamType.STRING, validation_alias=AliasChoices("type", "param_type")
    )
    required: bool = False
    description: str = ""
    default: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("location", mode="before")
    @classmethod
    def _coerce_location(cls, value):
        if isinstance(value, str):
            value = value.strip().lower()
            return _LOCATION_ALIASES.get(value, value)
        return value

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value):
        if isinstance(value, str):
            value = value.strip().lower()
            return _TYPE_ALIASES.get(value, value)
        return value

    @field_validator("description", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("default", mode="before")
    @classmethod
    def _stringify_default(cls, value):
        if value is None or isinstance(value, str):
            return value
        return str(value)


class ApiEndpoint(BaseModel):
    """One documented API operation."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    method: HttpMethod
    path: str = Field(min_length=1)
    name: str = ""
    description: str = ""
    parameters: tuple[Param, ...] = ()
    example: str | None = Field(
        default=None, validation_alias=AliasChoices("example", "curl_example")
    )
    tags: tuple[str, ...] = ()
    category: str | None = None

    @field_validator("method", mode="before")
    @classmethod
    def _upper_method(cls, value):
        return value.strip().upper() if isinstance(value, str) else value

    @field_validator("path", mode="before")
    @classmethod
    def _strip_path(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("name", "description", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("parameters", "tags", mode="before")
    @classmethod
    def _none_to_empty_seq(cls, value):
        return () if value is None else value

    @property
    def key(self) -> tuple[str, str]:
        """The (method, path) pair that identifies this endpoint in a corpus."""
        return self.method.value, self.path

    @property
    def label(self) -> str:
        return f"{self.method.value} {self.path}"


class Corpus(BaseModel):
    """The full, ordered collection of endpoints plus load metadata."""

    model_config = ConfigDict(frozen=True)

    endpoints: tuple[ApiEndpoint, ...]
    base_url: str | None = None
    scraped_at: datetime | None = None
    loaded_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    skipped: int = 0

    @property
    def count(self) -> int:
        return len(self.endpoints)

    def __len__(self) -> int:
        return len(self.endpoints)

    def __getitem__(self, position: int) -> ApiEndpoint:
        return self.endpoints[position]
