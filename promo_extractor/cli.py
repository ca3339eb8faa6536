"""
Command-line interface for the promo extractor.

Runs extractions from the terminal, shows the configured strategy and starts
the HTTP server.
"""

import asyncio
import json
import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from extraction.models import ExtractionRequest
from extraction.strategies.strategy_factory import available_strategies, create_orchestrator
from promo_extractor.config import get_settings
from promo_extractor.utils.errors import ConfigurationError, InputValidationError, PromoExtractorException
from promo_extractor.utils.logging import setup_logging

# Initialize Typer app and Rich console
app = typer.Typer(
    name="promo-extractor",
    help="Extract structured data from promo messages",
    add_completion=False,
)
console = Console()


@app.command()
def extract(
    text: Optional[str] = typer.Argument(
        None,
        help="Message text (read from --file or stdin when omitted)",
    ),
    file: Optional[Path] = typer.Option(
        None,
        "--file",
        "-f",
        exists=True,
        dir_okay=False,
        help="Read the message text from a file",
    ),
    chat: str = typer.Option("cli", "--chat", help="Chat identifier"),
    message_id: int = typer.Option(1, "--message-id", help="Message identifier"),
    links: Optional[List[str]] = typer.Option(
        None,
        "--link",
        "-l",
        help="Source link (repeatable)",
    ),
    regex_only: bool = typer.Option(
        False,
        "--regex-only",
        help="Skip the AI strategy even if a provider is configured",
    ),
):
    """Extract fields from one promo message and print them as JSON."""
    if text is None:
        text = file.read_text(encoding="utf-8") if file else sys.stdin.read()

    try:
        request = ExtractionRequest.from_payload(
            {"text": text, "chat": chat, "messageId": message_id, "links": links or []}
        )
    except InputValidationError as e:
        console.print(f"[red]Invalid input:[/red] {e.message}")
        for error in e.errors:
            console.print(f"  {error['field']}: {error['message']}")
        raise typer.Exit(2)

    async def _extract():
        orchestrator = create_orchestrator(get_settings(), regex_only=regex_only)
        return await orchestrator.extract(request)

    try:
        result = asyncio.run(_extract())
    except PromoExtractorException as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print_json(json.dumps(result.to_response(), ensure_ascii=False))


@app.command()
def strategy():
    """Show the configured extraction strategy."""
    try:
        settings = get_settings()
    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)

    orchestrator = create_orchestrator(settings)
    current = orchestrator.current_strategy()

    table = Table(title="Extraction Strategy")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("LLM provider", settings.llm_provider.value)
    table.add_row("Model", settings.llm_model or "-")
    table.add_row("Retry preset", settings.retry_preset.value)
    table.add_row("Primary", current["primary"])
    table.add_row("Fallback", current["fallback"])

    console.print(table)

    available = Table(title="Available Strategies")
    available.add_column("Name", style="cyan")
    available.add_column("Description")
    for name, description in available_strategies().items():
        available.add_row(name, description)

    console.print(available)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default: HOST)"),
    port: Optional[int] = typer.Option(None, "--port", help="Bind port (default: PORT)"),
):
    """Start the HTTP server."""
    import uvicorn

    from promo_extractor.api import create_app

    settings = get_settings()
    console.print(
        f"[green]✓[/green] Serving on {host or settings.host}:{port or settings.port}"
    )
    uvicorn.run(create_app(settings=settings), host=host or settings.host, port=port or settings.port)


@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Promo Extractor - turn promo messages into structured records."""
    try:
        settings = get_settings()
    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)

    # Setup logging
    setup_logging(
        log_level="DEBUG" if debug else settings.log_level,
        log_file_path=settings.log_file_path,
        use_structured_logging=settings.structured_logging,
        dev_mode=settings.dev_mode,
    )


if __name__ == "__main__":
    app()
