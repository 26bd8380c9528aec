from api_doc_rag.corpus.models import ApiEndpoint, Corpus, Param


def make_endpoint(method: str, path: str, description: str = "", **kwargs) -> ApiEndpoint:
    return ApiEndpoint(method=method, path=path, description=description, **kwargs)


def make_corpus(*endpoints: ApiEndpoint) -> Corpus:
    return Corpus(endpoints=tuple(endpoints))


def tickets_corpus() -> Corpus:
    return make_corpus(
        make_endpoint("POST", "/tickets", "Create a new ticket"),
        make_endpoint("GET", "/tickets/{id}", "Get ticket details",
                      parameters=(Param(name="id", location="path", type="integer", required=True),)),
    )
