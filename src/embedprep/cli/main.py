"""
EmbedPrep CLI - Main entry point
"""

import logging

import typer
from rich.console import Console
from rich.table import Table

from embedprep.cli.commands import preview
from embedprep.core.config.settings import settings
from embedprep.core.logging.logger import get_logger

# Initialize CLI app
app = typer.Typer(
    name="embedprep",
    help="Quality-gated content preprocessing for embedding pipelines",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

# Initialize console and logger
console = Console()
logger = get_logger(__name__)

# Add commands
app.command(name="preview")(preview.preview)
app.command(name="config")(preview.show_config)


def _version_table() -> Table:
    table = Table(title="EmbedPrep Version Information")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")
    table.add_column("Environment", style="yellow")

    table.add_row(settings.APP_NAME, settings.APP_VERSION, settings.ENVIRONMENT)
    table.add_row("Python", "3.9+", "Required")
    return table


def version_callback(value: bool) -> None:
    """Handle version callback"""
    if value:
        console.print(_version_table())
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show EmbedPrep version and exit",
    ),
) -> None:
    """
    EmbedPrep CLI - Preview cleaning, chunking and quality gating

    Run 'embedprep --help' for available commands.
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        for handler in logging.getLogger().handlers:
            handler.setLevel(logging.DEBUG)
        logger.info("Verbose logging enabled")


@app.command()
def version() -> None:
    """Show EmbedPrep version information"""
    console.print(_version_table())


if __name__ == "__main__":
    app()
