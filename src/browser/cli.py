"""CLI interface using typer."""

import json
import sys

import typer

from .config import settings
from .errors import BrowserError
from .extract import extract
from .load import fetch_url, response_text
from .log import setup_logging

app = typer.Typer(
    name="browser",
    help="Text-only web page viewer",
    no_args_is_help=True,
)


def _parse_headers(values: list[str]) -> dict[str, str]:
    headers = {}
    for value in values:
        if ":" not in value:
            raise typer.BadParameter(f"Expected 'Name: value', got {value!r}", param_hint="--header")
        name, content = value.split(":", 1)
        headers[name.strip()] = content.strip()
    return headers


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, "--log-level", help="Log level for stderr output"),
):
    """Configure logging before any command runs."""
    try:
        setup_logging(log_level)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--log-level") from e


@app.command()
def load(
    url: str = typer.Argument(..., help="URL to load (http, https, file or data)"),
    header: list[str] = typer.Option(None, "-H", "--header", help="Extra request header, 'Name: value'"),
    raw: bool = typer.Option(False, "--raw", help="Print the decoded body without extracting text"),
    output: str = typer.Option(None, "-o", "--output", help="Output file (JSON)"),
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Only output page text"),
):
    """Load a page and print its text."""
    headers = _parse_headers(header or [])

    try:
        response = fetch_url(url, headers)
        decoded = response_text(response)
    except BrowserError as e:
        typer.echo(str(e))
        raise typer.Exit(code=1)

    text = decoded if raw else extract(response.status, decoded)

    if output:
        result = {
            "url": url,
            "status": response.status,
            "reason": response.reason,
            "headers": response.headers,
            "text": text,
        }
        with open(output, "w", encoding="utf-8") as f:
            json.dump(result, f, indent=2, ensure_ascii=False)
        typer.echo(f"Saved to {output}")
    elif quiet:
        sys.stdout.write(text)
    else:
        typer.echo(url)
        typer.echo("---")
        typer.echo(text)


@app.command()
def version():
    """Show version."""
    from . import __version__

    typer.echo(f"text-browser {__version__}")


if __name__ == "__main__":
    app()
