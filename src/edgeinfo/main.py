from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import httpx
import typer
from rich.console import Console
from rich.markup import escape

from edgeinfo.client import fetch_info, load_metadata, parse_header_options, render_info
from edgeinfo_server.extract import extract_full, extract_minimal
from edgeinfo_server.render import render_html, render_json
from edgeinfo_server.settings import Settings

app = typer.Typer(add_completion=False, no_args_is_help=True)
console = Console()


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind host"),
    port: int = typer.Option(8080, help="Bind port"),
    log_level: str = typer.Option("info", help="Uvicorn log level"),
):
    console.print(f"Starting server on http://{host}:{port}")
    console.print(f"IP lookup: http://{host}:{port}/ip")
    console.print(f"JSON API:  http://{host}:{port}/api")

    import uvicorn
    uvicorn.run("edgeinfo_server.main:app", host=host, port=port, reload=False, log_level=log_level)


@app.command("render")
def render(
    metadata: Optional[Path] = typer.Option(
        None, "--metadata", "-m", help="JSON file standing in for the edge connection metadata."
    ),
    header: List[str] = typer.Option([], "--header", "-H", help="Request header as 'Name: value'. Repeatable."),
    fmt: str = typer.Option("api", "--format", "-f", help="Output: ip, api or html."),
):
    """Run extraction and rendering offline, without an edge runtime."""
    try:
        headers = parse_header_options(header)
        meta = load_metadata(metadata)
    except (OSError, ValueError) as ex:
        console.print(f"[red]{escape(str(ex))}[/red]")
        raise typer.Exit(code=1)

    if fmt == "ip":
        typer.echo(render_json(extract_minimal(headers, meta).to_payload()))
    elif fmt == "api":
        typer.echo(render_json(extract_full(headers, meta).to_payload()))
    elif fmt == "html":
        typer.echo(render_html(extract_full(headers, meta).to_payload(), Settings()))
    else:
        console.print("[red]format must be 'ip', 'api' or 'html'[/red]")
        raise typer.Exit(code=2)


@app.command("query")
def query(
    url: str = typer.Argument(..., help="Base URL of a deployed instance, e.g. https://ip.example.com"),
    full: bool = typer.Option(False, "--full", help="Query /api instead of /ip."),
    json_mode: bool = typer.Option(False, "--json", help="Print the raw JSON payload."),
    timeout: float = typer.Option(10.0, help="Request timeout seconds."),
):
    try:
        info = fetch_info(url, full=full, timeout_s=timeout)
    except httpx.HTTPError as ex:
        console.print(f"[red]query error[/red]: {escape(str(ex))}")
        raise typer.Exit(code=1)

    if json_mode:
        console.print_json(data=info)
    else:
        render_info(info)


if __name__ == "__main__":
    app()
