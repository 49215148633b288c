"""
Command-line interface for previewing the preprocessing pipeline.

These commands let an operator see what the pipeline would send to the
embedding model for a piece of content, and which per-type configuration
produced it, without running any embedding or storage service.

Commands:
    preview: Clean, chunk and quality-gate a text file for one target type
    config: Print the effective configuration of a target type as JSON

Configuration Overrides:
    Both commands accept ``--config`` pointing to a YAML or JSON file of
    per-type overrides, in the same shape an admin settings store would hold:

        post:
          chunking:
            target_size: 400
          quality:
            min_length: 30

Example Usage:
    # Preview a Markdown article as a post
    embedprep preview article.md --type post

    # Only the chunks that would be embedded, as JSON
    embedprep preview comment.txt --type comment --filter --json

    # Effective configuration with overrides applied
    embedprep config post --config overrides.yaml
"""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from embedprep.core.config.settings import settings
from embedprep.core.config.validation import (
    ConfigValidator,
    PreprocessingConfigOverride,
)
from embedprep.core.exceptions.custom_exceptions import EmbedPrepError
from embedprep.core.logging.logger import get_logger
from embedprep.processing.base import PreprocessingResult, QualityStatus, TargetType
from embedprep.processing.manager import ProcessingManager
from embedprep.processing.registry import resolve_target_type

console = Console()
logger = get_logger(__name__)

STATUS_STYLES = {
    QualityStatus.PASSED: "green",
    QualityStatus.INCOMPLETE: "yellow",
    QualityStatus.FAILED: "red",
}

PREVIEW_WIDTH = 60


def _load_override(
    config_file: Optional[str], target_type: TargetType
) -> Optional[PreprocessingConfigOverride]:
    if not config_file:
        return None
    overrides = ConfigValidator.validate_file(config_file)
    logger.info(
        "Loaded configuration overrides",
        config_file=config_file,
        target_types=[t.value for t in overrides],
    )
    return overrides.get(target_type)


def _build_manager(type_name: str, config_file: Optional[str]) -> ProcessingManager:
    target_type = resolve_target_type(type_name)
    return ProcessingManager(target_type, _load_override(config_file, target_type))


def _render_result(result: PreprocessingResult, target_type: TargetType) -> None:
    table = Table(title=f"Chunks ({target_type.value})")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Span", style="magenta")
    table.add_column("Tokens", justify="right")
    table.add_column("Status")
    table.add_column("Score", justify="right")
    table.add_column("Text", style="white")

    for chunk in result.chunks:
        style = STATUS_STYLES[chunk.quality_status]
        status = chunk.quality_status.value
        if chunk.validity_result is not None and chunk.validity_result.reason:
            status = f"{status} ({chunk.validity_result.reason.value})"

        text = chunk.text.replace("\n", " ")
        if len(text) > PREVIEW_WIDTH:
            text = text[:PREVIEW_WIDTH].rstrip() + "..."

        table.add_row(
            str(chunk.index),
            f"{chunk.char_start}-{chunk.char_end}",
            str(chunk.token_count),
            f"[{style}]{status}[/{style}]",
            f"{chunk.quality_score:.2f}",
            Text(text),
        )

    console.print(table)

    metadata = result.metadata
    cleaning = metadata.cleaning
    quality = metadata.quality
    cleaners = ", ".join(cleaning.cleaners_applied) or "none"
    summary_panel = Panel(
        f"""
        [bold]Preprocessing Complete[/bold]

        Characters: {cleaning.original_length} -> {cleaning.cleaned_length}
        Cleaning Ratio: {cleaning.cleaning_ratio:.2f}
        Cleaners: {cleaners}
        Strategy: {metadata.chunking.strategy.value}
        Average Tokens: {metadata.chunking.average_tokens}
        Chunks: {quality.total} (passed {quality.passed}, \
incomplete {quality.incomplete}, failed {quality.failed})
        """,
        title="Summary",
        border_style="green",
    )
    console.print(summary_panel)


def preview(
    input_file: str = typer.Argument(..., help="Path to a UTF-8 text file."),
    target_type: str = typer.Option(
        settings.DEFAULT_TARGET_TYPE,
        "--type",
        "-t",
        help="Target type: product, post, gallery_item, comment",
    ),
    filter_failed: bool = typer.Option(
        False, "--filter", help="Drop failed chunks from the output."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
    config_file: Optional[str] = typer.Option(
        None, "--config", "-c", help="YAML or JSON file with per-type overrides."
    ),
) -> None:
    """
    Run the preprocessing pipeline over a file and show the chunks.

    Examples:
      embedprep preview article.md --type post
      embedprep preview review.txt --type comment --filter --json
    """
    input_path = Path(input_file)

    if not input_path.exists():
        console.print(f"Input file not found: {input_file}", style="red")
        raise typer.Exit(1)

    try:
        manager = _build_manager(target_type, config_file)
    except EmbedPrepError as e:
        console.print(f"Configuration error: {e.message}", style="red")
        raise typer.Exit(1)

    try:
        raw_content = input_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"Error reading input file: {e}", style="red")
        raise typer.Exit(1)

    if filter_failed:
        result = manager.process_and_filter(raw_content)
    else:
        result = manager.process(raw_content)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        return

    _render_result(result, manager.target_type)


def show_config(
    target_type: str = typer.Argument(
        ..., help="Target type: product, post, gallery_item, comment"
    ),
    config_file: Optional[str] = typer.Option(
        None, "--config", "-c", help="YAML or JSON file with per-type overrides."
    ),
) -> None:
    """Print the effective configuration of a target type as JSON."""
    try:
        manager = _build_manager(target_type, config_file)
    except EmbedPrepError as e:
        console.print(f"Configuration error: {e.message}", style="red")
        raise typer.Exit(1)

    typer.echo(json.dumps(manager.config.model_dump(mode="json"), indent=2))
