"""CLI interface for TDocs."""

import json
import os

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from ....common.exception_handler import format_exception_json
from ....composition.container import (
    build_fetch_options,
    get_renderer,
    get_smart_fetch_service,
)
from ....config import get_settings, log_startup, setup_logging
from ....core.domain import ContentType, SmartFetchResult
from ....core.services.docs_search import DocsSearchService
from ....core.services.openapi_parser import extract_endpoints_summary, is_valid_openapi_spec
from ....core.services.smart_fetch import SmartFetchService

app = typer.Typer(
    name="tdocs",
    help="TDocs - search technical documentation, Swagger UIs included",
    add_completion=False,
)

console = Console(force_terminal=True, legacy_windows=False)

# Determine if we're in debug mode (shows full stack traces)
DEBUG_MODE = os.getenv("DEBUG", "false").lower() == "true"

PREVIEW_CHARS = 800


def handle_cli_error(exc: Exception) -> None:
    """Handle and display errors in CLI with structured format.

    In debug mode, shows full JSON error details.
    In normal mode, shows a user-friendly message with error code.

    Args:
        exc: The exception to handle.
    """
    error_data = format_exception_json(exc, include_trace=DEBUG_MODE)

    if DEBUG_MODE:
        console.print(
            Panel(
                json.dumps(error_data, indent=2),
                title="[bold red]Error Details[/]",
                border_style="red",
            )
        )
        return

    error_msg = error_data["error"]["message"]
    error_code = error_data["error"].get("code", "UNKNOWN")
    console.print(f"\n[red]Error [{error_code}]:[/] {error_msg}")
    console.print(f"[dim]Type: {error_data['error']['type']}[/]")
    console.print("[dim]Set DEBUG=true for full details[/]")


def print_preview(content: str) -> None:
    """Print the start of extracted content without rich markup."""
    preview = content[:PREVIEW_CHARS]
    if len(content) > PREVIEW_CHARS:
        preview += "\n..."
    console.print(preview, markup=False, highlight=False)


def print_endpoint_summary(
    fetcher: SmartFetchService, url: str, result: SmartFetchResult, timeout: float
) -> None:
    """Print the compact endpoint list of the spec behind a fetch result."""
    if result.content_type is not ContentType.OPENAPI:
        console.print("[yellow]No OpenAPI spec found; nothing to summarize[/]")
        return

    spec = fetcher.locator.fetch_openapi_spec(result.spec_url or url, timeout)
    if spec is None or not is_valid_openapi_spec(spec):
        console.print("[yellow]The spec could not be loaded again for summarizing[/]")
        return
    console.print(Markdown(extract_endpoints_summary(spec)))


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log pipeline decisions"),
) -> None:
    """Configure logging before any command runs."""
    settings = get_settings()
    setup_logging("DEBUG" if verbose else settings.log_level, json_format=settings.log_json)


def get_search_service(url: str | None = None) -> DocsSearchService:
    """Build a search service, optionally for a different documentation URL."""
    settings = get_settings()
    if url:
        settings = settings.model_copy(update={"docs_url": url})
    settings.validate_required()

    return DocsSearchService(
        get_smart_fetch_service(),
        docs_url=settings.docs_url,
        default_max_results=settings.default_max_results,
        fetch_options=build_fetch_options(settings),
    )


@app.command()
def search(
    query: str = typer.Argument(..., help="What to look for in the documentation"),
    max_results: int | None = typer.Option(
        None, "--max-results", "-n", min=1, max=10, help="Number of excerpts (1-10)"
    ),
    url: str | None = typer.Option(None, "--url", help="Search this URL instead of TDOCS_DOCS_URL"),
) -> None:
    """Search the documentation and print the best excerpts."""
    try:
        service = get_search_service(url)
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    with console.status("[bold green]Searching documentation...[/]"):
        output = service.search(query, max_results)

    if output.error:
        console.print(f"[red]Error:[/] {output.summary}")
        console.print(f"[dim]{output.error}[/]")
        raise typer.Exit(1)

    if not output.matched_chunks:
        console.print(f"[yellow]{output.summary}[/]")
        return

    console.print(
        f"[bold]Found {output.matched_chunks} relevant excerpts[/] "
        f"[dim]({output.total_chunks} chunks searched)[/]\n"
    )
    for i, result in enumerate(output.results, 1):
        console.print(Panel(Markdown(result), title=f"Result {i}", border_style="blue"))


@app.command()
def fetch(
    url: str = typer.Argument(..., help="URL to fetch"),
    show_content: bool = typer.Option(False, "--show-content", help="Print the extracted content"),
    summary: bool = typer.Option(False, "--summary", help="List the endpoints of an OpenAPI spec"),
) -> None:
    """Fetch a URL and show which strategy produced its content."""
    settings = get_settings()
    fetcher = get_smart_fetch_service()

    with console.status(f"[bold green]Fetching {url}...[/]"):
        result = fetcher.fetch(url, build_fetch_options(settings))

    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()
    table.add_row("Success:", "[green]yes[/]" if result.success else "[red]no[/]")
    table.add_row("Method:", result.method.value)
    table.add_row("Content type:", result.content_type.value)
    table.add_row("Spec URL:", result.spec_url or "-")
    table.add_row("Length:", f"{len(result.content or '')} chars")
    if result.error:
        table.add_row("Error:", f"[red]{result.error}[/]")
    console.print(Panel(table, title=url, border_style="green" if result.success else "red"))

    if show_content and result.content:
        print_preview(result.content)
    if summary and result.success:
        print_endpoint_summary(fetcher, url, result, settings.request_timeout)

    if not result.success:
        raise typer.Exit(1)


@app.command()
def render(
    url: str = typer.Argument(..., help="Page to render"),
    show_content: bool = typer.Option(False, "--show-content", help="Print the visible text"),
) -> None:
    """Render a page in headless Chromium and report what it produced."""
    settings = get_settings()

    with console.status(f"[bold green]Rendering {url}...[/]"):
        result = get_renderer().render_page(url, settings.headless_timeout)

    if not result.success:
        console.print(f"[red]Render failed ({result.method}):[/] {result.error}")
        raise typer.Exit(1)

    console.print(
        f"[green]Rendered[/] {len(result.html or '')} chars of HTML, "
        f"{len(result.text or '')} chars of visible text"
    )
    if show_content and result.text:
        print_preview(result.text)


@app.command()
def headless() -> None:
    """Show whether single-page apps can be rendered headlessly."""
    support = get_smart_fetch_service().check_headless_support()

    if not support.available:
        console.print(f"❌ {support.message}")
        return

    status = get_renderer().get_status()
    console.print(f"✅ {support.message}")
    if "version" in status:
        console.print(f"  [dim]Chromium {status['version']}[/]")
    if "executable_path" in status:
        console.print(f"  [dim]{status['executable_path']}[/]")


@app.command()
def status() -> None:
    """Show the loaded configuration with the token masked."""
    settings = get_settings()
    log_startup(settings, console)

    try:
        settings.validate_required()
        console.print("✅ Ready to search")
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Interface to bind"),
    port: int = typer.Option(8000, help="Port to listen on"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the search API with uvicorn."""
    import uvicorn

    uvicorn.run("tdocs.adapters.inbound.api.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
