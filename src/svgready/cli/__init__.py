from __future__ import annotations

import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ..config import AppConfig, dump_config, load_config
from ..core import ConversionService
from ..errors import ConversionError
from ..models import ConversionOptions
from ..utils import atomic_write
from ..whitelist import DEFAULT_WHITELIST

console = Console()

app = typer.Typer(help="Sanitize SVG markup and encode it as CSS data URIs")


def _load_config(path: Path | None) -> AppConfig:
    return load_config(path)


def _print_error(error: ConversionError, debug: bool) -> None:
    console.print(f"[red]Conversion failed[/red]: {error.code} - {error.message}")
    if debug and error.technical_detail:
        console.print(error.technical_detail, style="dim", markup=False, highlight=False)


@app.command()
def convert(
    file: str = typer.Argument(..., help="SVG file to convert, or - for stdin"),
    strip_wh: bool = typer.Option(False, "--strip-wh", help="Remove width/height from the root <svg>"),
    strip_class: bool = typer.Option(False, "--strip-class", help="Remove class from the root <svg>"),
    base64: bool = typer.Option(False, "--base64", help="Also emit a base64 data URI"),
    debug: bool = typer.Option(False, "--debug", help="Show parser diagnostics on failure"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the normalized SVG here"),
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    cfg = _load_config(config)
    service = ConversionService(cfg)
    options = ConversionOptions(
        strip_root_width_height=strip_wh,
        strip_root_class=strip_class,
        emit_base64=base64,
        debug=debug or cfg.runtime.debug,
    )
    if file == "-":
        outcome = service.convert_text(sys.stdin.buffer.read(), options)
    else:
        path = Path(file)
        if not path.is_file():
            console.print(f"[red]No such file[/red]: {path}")
            raise typer.Exit(2)
        outcome = service.convert_file(path, options)

    if isinstance(outcome, ConversionError):
        _print_error(outcome, options.debug)
        raise typer.Exit(1)

    if output is not None:
        atomic_write(output, outcome.normalized + "\n")
        console.print(f"[green]Success[/green]: wrote {output}")
    else:
        console.print(outcome.normalized, markup=False, highlight=False, soft_wrap=True)
    console.print(outcome.data_uri, markup=False, highlight=False, soft_wrap=True)
    console.print(outcome.background_css, markup=False, highlight=False, soft_wrap=True)
    if outcome.base64_uri:
        console.print(outcome.base64_uri, markup=False, highlight=False, soft_wrap=True)
    console.print(
        f"{outcome.size_before} -> {outcome.size_after} bytes ({outcome.savings_percent}% smaller)"
    )
    for warning in outcome.warnings:
        console.print(f"[yellow]warning[/yellow]: {warning}")


@app.command()
def batch(
    path: list[Path],
    parallel: int | None = typer.Option(None, "--parallel", min=1, help="Parallel workers"),
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    cfg = _load_config(config)
    service = ConversionService(cfg)
    batch_result = service.batch_convert(path, parallelism=parallel)
    table = Table(title="Batch summary")
    table.add_column("Source")
    table.add_column("Status")
    table.add_column("Bytes")
    for item in batch_result.items:
        if item.result is not None:
            table.add_row(str(item.source), "ok", f"{item.result.size_before} -> {item.result.size_after}")
        elif item.error is not None:
            table.add_row(str(item.source), item.error.code, "-")
    console.print(table)
    summary = batch_result.summary
    console.print(
        f"Processed {summary.total} files: "
        f"{summary.successes} succeeded, {summary.failures} failed."
    )
    if summary.failures:
        raise typer.Exit(1)


@app.command()
def whitelist() -> None:
    """List the element and attribute names that survive sanitization."""
    elements = Table(title="Allowed elements")
    elements.add_column("Element")
    for name in sorted(DEFAULT_WHITELIST.elements):
        elements.add_row(name)
    attributes = Table(title="Allowed attributes")
    attributes.add_column("Attribute")
    for name in sorted(DEFAULT_WHITELIST.attributes):
        attributes.add_row(name)
    attributes.add_row(" ".join(f"{prefix}*" for prefix in DEFAULT_WHITELIST.attribute_prefixes))
    console.print(elements)
    console.print(attributes)


@app.command("show-config")
def show_config(
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    """Print the effective configuration as JSON."""
    console.print_json(dump_config(_load_config(config)))


@app.command()
def serve(
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    """Run the local HTTP API."""
    import uvicorn

    from ..api import create_app
    from ..settings import apply_settings, get_settings

    cfg = apply_settings(_load_config(config), get_settings())
    cfg.runtime.enable_local_api = True
    uvicorn.run(create_app(cfg), host=cfg.api.host, port=cfg.api.port)


if __name__ == "__main__":
    app()
