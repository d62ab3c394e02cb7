"""CLI interface for transcript-rag."""

import json
import os
from pathlib import Path

import typer
import uvicorn
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from ....common.exception_handler import format_exception_json
from ....composition import container
from ....config.logging import setup_logging
from ....core.domain import ChatContext, ChatMessage, ChatOutcome, ChatResponse, Document
from ....core.services import default_style_guide, trim_context
from .progress import embedding_progress, stage_progress

app = typer.Typer(
    name="transcript-rag",
    help="Ask grounded questions about transcripts and compare A/B summaries",
    add_completion=False,
)

console = Console()

# Determine if we're in debug mode (shows full stack traces)
DEBUG_MODE = os.getenv("DEBUG", "false").lower() == "true"


@app.callback()
def main(
    log_level: str = typer.Option(None, "--log-level", help="Override the configured log level"),
) -> None:
    settings = container.get_settings()
    setup_logging(
        level=log_level or settings.log_level,
        log_file=settings.log_file,
        json_format=settings.log_json,
    )


def handle_cli_error(exc: Exception) -> None:
    """Display an error with its code; full JSON details when DEBUG=true."""
    error_data = format_exception_json(exc, include_trace=DEBUG_MODE)

    if DEBUG_MODE:
        console.print(
            Panel(
                json.dumps(error_data, indent=2, default=str),
                title="[bold red]Error Details[/]",
                border_style="red",
            )
        )
        return

    error = error_data["error"]
    location = error_data.get("location", {})
    console.print(f"\n[red]Error [{error.get('code', 'UNKNOWN')}]:[/] {error['message']}")
    console.print(f"[dim]Type: {error['type']}[/]")
    if location:
        loc_str = f"{location.get('file', '?')}:{location.get('line', '?')} in {location.get('method', '?')}"
        console.print(f"[dim]Location: {loc_str}[/]")
    console.print("[dim]Set DEBUG=true for full details[/]")


def load_and_index(path: Path) -> Document:
    """Upload a transcript file and embed it, showing progress."""
    indexing = container.get_indexing_service()
    text = path.read_text(encoding="utf-8")
    document = indexing.add_document(path.stem, text, filename=path.name)
    with embedding_progress(console, document.title) as on_progress:
        embedded = indexing.index_document(document.id, on_progress=on_progress)
    console.print(
        f"[green]OK[/] Indexed [bold]{document.title}[/] "
        f"({document.metadata.word_count} words, {len(embedded)} chunks)"
    )
    return document


def print_response(response: ChatResponse) -> None:
    style = "green" if response.outcome is ChatOutcome.GROUNDED else "yellow"
    if response.outcome is ChatOutcome.ERROR:
        style = "red"
    console.print(
        Panel(Markdown(response.message.content), title="[bold]Assistant[/]", border_style=style)
    )
    if response.sources:
        console.print("[dim]Sources:[/]")
        for source in response.sources:
            console.print(
                f"  [dim]#{source.rank} {source.chunk.id} "
                f"(similarity {source.similarity * 100:.1f}%)[/]"
            )


FileArgument = typer.Argument(
    ..., exists=True, dir_okay=False, readable=True, help="Transcript file (.txt or .md)"
)


@app.command()
def status() -> None:
    """Show Ollama connectivity and configured models."""
    settings = container.get_settings()
    client = container.get_ollama_client()

    console.print("[bold]transcript-rag status[/]\n")
    console.print(f"Ollama URL: {settings.ollama_base_url}")

    try:
        models = client.list_models()
    except Exception as exc:
        console.print("[red]Ollama is not reachable[/]")
        handle_cli_error(exc)
        raise typer.Exit(1) from exc

    table = Table(title="Models")
    table.add_column("Role")
    table.add_column("Model")
    table.add_column("Installed")
    for role, name in (("chat", settings.chat_model), ("embedding", settings.embedding_model)):
        installed = any(m == name or m.split(":")[0] == name for m in models)
        table.add_row(role, name, "[green]yes[/]" if installed else "[red]no[/]")
    console.print(table)

    console.print(
        f"\nChunking: {settings.chunk_target_words} words, overlap {settings.chunk_overlap_words}"
    )
    console.print(
        f"Retrieval: top {settings.max_retrieval_results}, "
        f"threshold {settings.min_similarity_threshold}, "
        f"weights {settings.vector_weight}/{settings.lexical_weight}"
    )


@app.command()
def ask(
    file: Path = FileArgument,
    question: str = typer.Argument(..., help="Question about the transcript"),
) -> None:
    """Index a transcript and ask a single question about it."""
    try:
        document = load_and_index(file)
        with console.status("[bold green]Thinking...[/]"):
            response = container.get_chat_service().respond(
                question, ChatContext(document_ids=[document.id]), default_style_guide()
            )
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1) from exc

    print_response(response)


@app.command()
def chat(file: Path = FileArgument) -> None:
    """Start an interactive chat session about a transcript."""
    try:
        document = load_and_index(file)
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1) from exc

    console.print(
        Panel.fit(
            f"[bold]Chatting about {document.title}[/]\n\n"
            "Examples:\n"
            "- What are the main techniques taught?\n"
            "- Summarize this in 3 sentences\n"
            "- List the key takeaways as bullet points\n\n"
            "[dim]Type 'quit' or 'exit' to leave[/]",
            border_style="cyan",
        )
    )

    settings = container.get_settings()
    service = container.get_chat_service()
    style_guide = default_style_guide()
    context = ChatContext(
        document_ids=[document.id],
        active_document=document,
        max_context_length=settings.max_context_chars,
    )

    while True:
        try:
            query = Prompt.ask("\n[bold cyan]You[/]")
            if query.lower() in ("quit", "exit", "q"):
                console.print("[dim]Goodbye![/]")
                break
            if not query.strip():
                continue

            with console.status("[bold green]Thinking...[/]"):
                response = service.respond(query, context, style_guide)
            print_response(response)

            context.messages.extend([ChatMessage.user(query), response.message])
            context = trim_context(context)
        except KeyboardInterrupt:
            console.print("\n[dim]Goodbye![/]")
            break
        except Exception as exc:
            handle_cli_error(exc)


@app.command()
def summarize(
    file: Path = FileArgument,
    vote: bool = typer.Option(True, help="Ask which summary you prefer"),
) -> None:
    """Generate an A/B pair of styled summaries for a transcript."""
    indexing = container.get_indexing_service()
    service = container.get_ab_summary_service()

    try:
        text = file.read_text(encoding="utf-8")
        document = indexing.add_document(file.stem, text, filename=file.name)
        with stage_progress(console) as on_progress:
            pair = service.generate_pair(document, default_style_guide(), on_progress)
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1) from exc

    for label, variant, result in (
        ("A", pair.variant_a, pair.summary_a),
        ("B", pair.variant_b, pair.summary_b),
    ):
        stats = result.processing_stats
        console.print(
            Panel(
                Markdown(result.markdown_summary),
                title=f"[bold]Summary {label}: {variant.name}[/]",
                subtitle=(
                    f"{stats.successful_chunks}/{stats.total_chunks} chunks parsed, "
                    f"{stats.processing_time_ms / 1000:.1f}s"
                ),
                border_style="blue" if label == "A" else "magenta",
            )
        )

    if not vote:
        return

    winner = Prompt.ask("Which summary do you prefer?", choices=["A", "B", "skip"], default="skip")
    if winner == "skip":
        return
    reason = Prompt.ask("Why? (optional)", default="")
    service.record_feedback(pair.id, winner, reason or None)

    stats = service.get_ab_testing_stats()
    console.print(
        f"[green]OK[/] Vote recorded. {stats.completed_tests}/{stats.total_tests} pairs rated "
        f"({stats.completion_rate}%), A wins {stats.variant_a_wins}, B wins {stats.variant_b_wins}"
    )


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Interface to bind"),
    port: int = typer.Option(8000, help="Port to listen on"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    console.print(f"[bold]Serving transcript-rag API on http://{host}:{port}[/]")
    uvicorn.run(
        "transcript_rag.adapters.inbound.api.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info",
    )


if __name__ == "__main__":
    app()
