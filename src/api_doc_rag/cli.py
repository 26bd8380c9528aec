"""CLI entry point for api-doc-rag."""

import logging
from pathlib import Path

import click
import yaml

from api_doc_rag.config import Settings, load_settings
from api_doc_rag.errors import LoadError
from api_doc_rag.llm import LlmClient
from api_doc_rag.logging_config import setup_logging
from api_doc_rag.rag.store import IndexStore
from api_doc_rag.service import DocsAssistant


def _open_store(settings: Settings, corpus: Path | None) -> tuple[IndexStore, Path]:
    """Load the corpus; a LoadError here is fatal."""
    path = corpus or settings.corpus_path
    try:
        store = IndexStore.from_source(path, weights=settings.weights, strict=settings.strict_load)
    except LoadError as e:
        raise click.ClickException(f"Cannot load corpus {path}: {e}") from e
    return store, path


def _make_assistant(settings: Settings, store: IndexStore, model: str | None) -> DocsAssistant:
    model = model or settings.model
    llm = LlmClient(model=model, timeout=settings.llm_timeout) if model else None
    return DocsAssistant(store, settings, llm=llm)


@click.group()
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="YAML settings file.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: Path | None, verbose: bool):
    """API Doc RAG: answer questions about a REST API from its scraped documentation."""
    setup_logging(logging.DEBUG if verbose else logging.WARNING)
    try:
        ctx.obj = load_settings(config_path)
    except (ValueError, yaml.YAMLError) as e:
        raise click.ClickException(f"Invalid settings {config_path or '(environment)'}: {e}") from e


@main.command()
@click.argument("query")
@click.option("--corpus", default=None, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Corpus JSON/YAML file.")
@click.option("-k", "--top-k", "top_k", default=None, type=click.IntRange(min=1), help="Maximum number of endpoints to return.")
@click.option("--json", "as_json", is_flag=True, help="Print the retrieval response as JSON.")
@click.option("--show-context", is_flag=True, help="Also print the assembled context.")
@click.pass_obj
def search(settings: Settings, query: str, corpus: Path | None, top_k: int | None, as_json: bool, show_context: bool):
    """Rank documented endpoints against QUERY."""
    store, _ = _open_store(settings, corpus)
    response = DocsAssistant(store, settings).retrieve(query, k=top_k)

    if as_json:
        click.echo(response.model_dump_json(indent=2, exclude={"results"}))
        return

    if not response.found:
        click.echo(response.context)
        return

    for i, ep in enumerate(response.endpoints, start=1):
        click.echo(f"{i}. [{ep.score:.2f}] {ep.method} {ep.path}  {ep.description}")
    if show_context:
        click.echo("")
        click.echo(response.context)


@main.command()
@click.argument("query")
@click.option("--corpus", default=None, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Corpus JSON/YAML file.")
@click.option("--model", default=None, help="LLM model to use (litellm model name).")
@click.pass_obj
def ask(settings: Settings, query: str, corpus: Path | None, model: str | None):
    """Answer QUERY from the documentation, using an LLM when one is configured."""
    store, _ = _open_store(settings, corpus)
    assistant = _make_assistant(settings, store, model)
    _print_answer(assistant, query)


@main.command()
@click.option("--corpus", default=None, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Corpus JSON/YAML file.")
@click.pass_obj
def inspect(settings: Settings, corpus: Path | None):
    """Show what the loaded corpus contains."""
    store, path = _open_store(settings, corpus)
    docs = store.snapshot.corpus

    click.echo(f"Corpus: {path}")
    click.echo(f"Endpoints: {docs.count} ({docs.skipped} skipped)")
    if docs.base_url:
        click.echo(f"Base URL: {docs.base_url}")
    if docs.scraped_at:
        click.echo(f"Scraped at: {docs.scraped_at.isoformat()}")
    for ep in docs.endpoints:
        title = f"  {ep.name}" if ep.name else ""
        click.echo(f"  {ep.method.value:7} {ep.path}{title}")


@main.command()
@click.option("--corpus", default=None, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Corpus JSON/YAML file.")
@click.option("--model", default=None, help="LLM model to use (litellm model name).")
@click.pass_obj
def chat(settings: Settings, corpus: Path | None, model: str | None):
    """Interactive session. Type :reload to re-read the corpus, :quit to exit."""
    store, path = _open_store(settings, corpus)
    assistant = _make_assistant(settings, store, model)
    click.echo(f"Loaded {store.snapshot.corpus.count} endpoints from {path}.")

    while True:
        try:
            line = click.prompt("?", prompt_suffix=" ", default="", show_default=False)
        except click.Abort:
            break
        line = line.strip()
        if not line:
            continue
        if line in (":quit", ":q"):
            break
        if line == ":reload":
            try:
                snapshot = store.reload(path)
            except LoadError as e:
                click.echo(f"Reload failed, keeping the current index: {e}")
            else:
                click.echo(f"Reloaded {snapshot.corpus.count} endpoints.")
            continue
        _print_answer(assistant, line)


def _print_answer(assistant: DocsAssistant, query: str):
    result = assistant.ask(query)
    click.echo(result.answer)
    click.echo("")
    if result.error:
        click.echo(f"LLM error: {result.error}")
    click.echo(f"Confidence: {result.confidence:.2f}")
    click.echo(result.explanation)
