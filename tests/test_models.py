import pytest
from pydantic import ValidationError

from api_doc_rag.corpus.models import (
    ApiEndpoint,
    Corpus,
    HttpMethod,
    Param,
    ParamLocation,
    ParamType,
)


class TestParam:
    def test_defaults(self):
        p = Param(name="limit")
        assert p.location is ParamLocation.QUERY
        assert p.type is ParamType.STRING
        assert p.required is False
        assert p.description == ""
        assert p.default is None

    def test_accepts_scraper_aliases(self):
        p = Param.model_validate({"name": "id", "in": "PATH", "param_type": "int", "required": True})
        assert p.location is ParamLocation.PATH
        assert p.type is ParamType.INTEGER

    @pytest.mark.parametrize("raw,expected", [
        ("bool", ParamType.BOOLEAN),
        ("Float", ParamType.NUMBER),
        ("list", ParamType.ARRAY),
        ("json", ParamType.OBJECT),
        ("text", ParamType.STRING),
    ])
    def test_type_aliases(self, raw, expected):
        assert Param.model_validate({"name": "x", "type": raw}).type is expected

    def test_unknown_location_rejected(self):
        with pytest.raises(ValidationError):
            Param.model_validate({"name": "x", "location": "somewhere"})

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            Param.model_validate({"name": "x", "type": "uuid-ish"})

    def test_numeric_default_stringified(self):
        assert Param(name="page", default=1).default == "1"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            Param(name="   ")


class TestApiEndpoint:
    def test_create_minimal_endpoint(self):
        ep = ApiEndpoint(method="get", path=" /api/users ")
        assert ep.method is HttpMethod.GET
        assert ep.path == "/api/users"
        assert ep.parameters == ()
        assert ep.tags == ()
        assert ep.example is None
        assert ep.label == "GET /api/users"
        assert ep.key == ("GET", "/api/users")

    def test_curl_example_alias(self):
        ep = ApiEndpoint.model_validate({
            "method": "POST",
            "path": "/api/users",
            "curl_example": "curl -X POST https://example.com/api/users",
        })
        assert ep.example.startswith("curl")

    def test_nulls_become_empty(self):
        ep = ApiEndpoint.model_validate({
            "method": "GET", "path": "/x", "description": None, "parameters": None, "tags": None,
        })
        assert ep.description == ""
        assert ep.parameters == ()
        assert ep.tags == ()

    def test_empty_path_rejected(self):
        with pytest.raises(ValidationError):
            ApiEndpoint(method="GET", path="  ")

    def test_unknown_method_rejected(self):
        with pytest.raises(ValidationError):
            ApiEndpoint(method="FETCH", path="/x")

    def test_endpoint_is_immutable(self):
        ep = ApiEndpoint(method="GET", path="/x")
        with pytest.raises(ValidationError):
            ep.path = "/y"


class TestCorpus:
    def test_count_and_lookup(self):
        endpoints = (ApiEndpoint(method="GET", path="/a"), ApiEndpoint(method="GET", path="/b"))
        corpus = Corpus(endpoints=endpoints)
        assert corpus.count == 2
        assert corpus[1].path == "/b"
        assert corpus.skipped == 0
        assert corpus.loaded_at.tzinfo is not None
