"""Command line interface for InstructFinder."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from instructfinder.config import AppConfig
from instructfinder.index.indexer import InstructionsIndex
from instructfinder.tools.instructions import InstructionsTool, preprocess
from instructfinder.utils.text import tokenize


console = Console()
app = typer.Typer(help="InstructFinder - lexical search over GKE MCP instructions")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _build_index(config: AppConfig) -> InstructionsIndex:
    document = config.resolve_document_path(Path.cwd())
    if document is not None and not document.is_file():
        raise typer.BadParameter(f"Document not found: {document}")
    try:
        boosts = config.keyword_boosts()
    except (OSError, ValueError) as exc:
        raise typer.BadParameter(f"Invalid boosts file {config.boosts_path}: {exc}") from exc
    return InstructionsIndex.from_path(document, boosts=boosts)


@app.command()
def search(
    query: str = typer.Argument(..., help="Query text"),
    max_sections: int = typer.Option(
        AppConfig().default_max_sections, "--max-sections", "-n", help="Sections to return"
    ),
    document: Path = typer.Option(None, "--document", "-d", help="Markdown document to search"),
    boosts: Path = typer.Option(None, "--boosts", help="JSON keyword boost table"),
    scores: bool = typer.Option(False, "--scores", help="Show scores instead of section text"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Search the instructions document."""
    _setup_logging(verbose)
    config = AppConfig(document_path=document, boosts_path=boosts)
    index = _build_index(config)

    if not scores:
        result = InstructionsTool(index, config).handle(
            {"query": query, "max_sections": max_sections}
        )
        console.print(result.text, markup=False, highlight=False)
        if result.is_error:
            raise typer.Exit(code=1)
        return

    prepared = preprocess(query, max_sections, config=config)
    if prepared is None:
        console.print("[yellow]Nothing to search for once trigger phrases are removed.[/yellow]")
        return

    results = index.search(prepared.query, max_sections=prepared.max_sections)
    if not results:
        console.print("[yellow]No matches found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Score")
    table.add_column("Level")
    table.add_column("Title")

    for result in results:
        table.add_row(f"{result.score:.4f}", str(result.level), result.title)

    console.print(table)


@app.command()
def sections(
    document: Path = typer.Option(None, "--document", "-d", help="Markdown document to index"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """List the indexed sections."""
    _setup_logging(verbose)
    index = _build_index(AppConfig(document_path=document))

    if not len(index):
        console.print("[yellow]No sections found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Level")
    table.add_column("Title")
    table.add_column("Tokens")

    for section in index.sections:
        tokens = len(tokenize(section.title)) + len(tokenize(section.content))
        table.add_row(str(section.level), section.title, str(tokens))

    console.print(table)


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
    document: Optional[Path] = typer.Option(None, "--document", "-d", help="Markdown document to serve"),
    boosts: Optional[Path] = typer.Option(None, "--boosts", help="JSON keyword boost table"),
) -> None:
    """Start the HTTP API."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - optional extra
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    from instructfinder.web.app import create_app

    config = AppConfig(document_path=document, boosts_path=boosts)
    index = _build_index(config)

    console.print(f"Starting HTTP API on http://{host}:{port} ({len(index)} sections)")
    uvicorn.run(
        create_app(index, config),
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
