"""
URLPolicy CLI - Command Line Interface

Entry point for checking URLs against a fragment policy file.
"""

import logging
import sys
from pathlib import Path
from typing import List

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from urlpolicy.core.constants import Classification

# Version
__version__ = "0.1.0"

# Create CLI app
app = typer.Typer(
    name="urlpolicy",
    help="URLPolicy - Classify URL fragments against allow-list policies",
    add_completion=False,
    no_args_is_help=True,
)

# Rich console for output
console = Console()


_STYLES = {
    Classification.MATCH: "green",
    Classification.NOT_A_MATCH: "yellow",
    Classification.INVALID: "red",
}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


# ============================================================================
# Commands
# ============================================================================

@app.command()
def check(
    urls: List[str] = typer.Argument(..., help="URLs to classify"),
    policy: Path = typer.Option(
        ...,
        "--policy",
        "-p",
        help="Fragment policy YAML file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Verbose output",
    ),
) -> None:
    """
    Classify the fragment of each URL against a policy.

    Exits with 0 only if every URL matches.
    """
    from urlpolicy.core.config import load_fragment_policy
    from urlpolicy.core.exceptions import ConfigError
    from urlpolicy.core.models import URLContext, URLValue

    _configure_logging(verbose)

    try:
        fragment_policy = load_fragment_policy(policy)
    except ConfigError as e:
        console.print(f"[red]Error loading policy:[/red] {e}")
        raise typer.Exit(code=2)

    table = Table(title="Fragment Classification")
    table.add_column("URL", style="cyan")
    table.add_column("Fragment")
    table.add_column("Result")

    all_match = True
    for text in urls:
        url = URLValue.of(URLContext.DEFAULT, text)
        result = fragment_policy.classify(url)
        if result is not Classification.MATCH:
            all_match = False

        fragment = url.get_fragment()
        style = _STYLES[result]
        table.add_row(
            escape(text),
            "[dim](none)[/dim]" if fragment is None else escape(fragment),
            f"[{style}]{result.name}[/{style}]",
        )

    console.print(table)

    if not all_match:
        raise typer.Exit(code=1)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold cyan]URLPolicy[/bold cyan] version [yellow]{__version__}[/yellow]")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
