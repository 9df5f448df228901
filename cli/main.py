"""Web Page Analyzer CLI — entry-point for analysis and the HTTP server.

Usage:
    pageanalyzer --help

Commands:
    analyze   → fetch one page and print its structural analysis
    serve     → run the HTTP API and browser front-end
"""

from __future__ import annotations

import json
from typing import Optional

import typer

from pageanalyzer.config import settings
from pageanalyzer.errors import HttpError, InvalidUrlError, MalformedInputError
from pageanalyzer.logging_setup import configure_logging

app = typer.Typer(
    name="pageanalyzer",
    help="Web Page Analyzer CLI.",
    no_args_is_help=True,
)


@app.command("analyze")
def analyze(
    url: str = typer.Option(..., help="URL of the page to analyze."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON envelope."),
) -> None:
    """Fetch a page, probe its links and print the analysis."""
    from pageanalyzer.analyzer import analyze_url, validate_url

    configure_logging(settings.log_level)

    try:
        validate_url(url)
    except InvalidUrlError as exc:
        typer.echo(f"[analyze] Invalid URL: {exc}")
        raise typer.Exit(1)

    if not as_json:
        typer.echo(f"[analyze] Fetching {url!r} …")
    try:
        analysis = analyze_url(url)
    except (HttpError, MalformedInputError) as exc:
        typer.echo(f"[analyze] Failed: {exc}")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(analysis.to_dict(), indent=2))
        return

    links = analysis.links
    headings = "  ".join(f"{level}={count}" for level, count in analysis.headings.items())
    typer.echo(f"[analyze] Version      : {analysis.html_version}")
    typer.echo(f"[analyze] Title        : {analysis.title or '(none)'}")
    typer.echo(f"[analyze] Headings     : {headings}")
    typer.echo(
        f"[analyze] Links        : {links.internal} internal, {links.external} external, "
        f"{links.inaccessible} inaccessible"
    )
    typer.echo(f"[analyze] Login form   : {'yes' if analysis.has_login_form else 'no'}")


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Interface to bind (default from settings)."),
    port: Optional[int] = typer.Option(None, help="Port to listen on (default from settings)."),
) -> None:
    """Run the analysis API and the static front-end with uvicorn."""
    import uvicorn

    bind_host = host or settings.host
    bind_port = port or settings.port
    configure_logging(settings.log_level)
    typer.echo(f"[serve] Server starting on {bind_host}:{bind_port}")
    uvicorn.run("pageanalyzer.api.app:app", host=bind_host, port=bind_port)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
