"""Command line entry point: ``zi``."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from zipinfo import __version__
from zipinfo.config import ReportConfig, load_config, merge_cli
from zipinfo.core.errors import ArchiveError, ConfigurationError
from zipinfo.formats import formatter_for
from zipinfo.report.builder import build_batch_report

EXIT_ARCHIVE_ERROR = 1
EXIT_CONFIG_ERROR = 2

app = typer.Typer(
    add_completion=False,
    help="zi presents information about Zip archives.",
)


def _configure_logging(verbose: bool) -> None:
    handler = RichHandler(console=Console(stderr=True), show_time=False, show_path=False)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"zi {__version__}")
        raise typer.Exit()


def _fail(message: str, code: int) -> typer.Exit:
    typer.echo(f"error: {message}", err=True)
    return typer.Exit(code=code)


@app.command()
def report(
    paths: Annotated[list[str], typer.Argument(help="Zip archives to inspect.", show_default=False)],
    json: Annotated[bool, typer.Option("--json", "-j", help="Structure the output in JSON.")] = False,
    pretty_json: Annotated[
        bool, typer.Option("--pretty-json", "-p", help="Structure the output in easy-to-read JSON.")
    ] = False,
    exclude: Annotated[
        str | None,
        typer.Option("--exclude", metavar="GLOB", help="Ignore objects whose name is like this glob pattern."),
    ] = None,
    compression_type: Annotated[
        bool, typer.Option("--compression-type", help="Show the compression type of each file.")
    ] = False,
    original_size: Annotated[bool, typer.Option("--original-size", help="Show the original size of each file.")] = False,
    compressed_size: Annotated[
        bool, typer.Option("--compressed-size", help="Show the compressed size of each file.")
    ] = False,
    compression_rate: Annotated[
        bool, typer.Option("--compression-rate", help="Show the compression rate of each file.")
    ] = False,
    keep_going: Annotated[
        bool, typer.Option("--keep-going", help="Report unreadable archives and continue with the rest.")
    ] = False,
    jobs: Annotated[int | None, typer.Option("--jobs", min=1, help="Archives to read concurrently.")] = None,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Load defaults from a YAML or TOML file.", dir_okay=False),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output to stderr.")] = False,
    version: Annotated[
        bool | None,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit."),
    ] = None,
) -> None:
    """Show size and compression statistics for every entry of each archive."""
    _configure_logging(verbose)

    try:
        base = load_config(config) if config is not None else ReportConfig()
        cfg = merge_cli(
            base,
            json=json,
            pretty_json=pretty_json,
            exclude=exclude,
            toggles={
                "compression_type": compression_type,
                "original_size": original_size,
                "compressed_size": compressed_size,
                "compression_rate": compression_rate,
            },
            keep_going=keep_going,
            jobs=jobs,
        )
        batch = build_batch_report(
            paths,
            selection=cfg.selection,
            exclude=cfg.exclude,
            on_error=cfg.on_error,
            jobs=cfg.jobs,
        )
    except ConfigurationError as e:
        raise _fail(str(e), EXIT_CONFIG_ERROR) from e
    except ArchiveError as e:
        raise _fail(str(e), EXIT_ARCHIVE_ERROR) from e

    typer.echo(formatter_for(cfg.output).format_string(batch))

    if batch.failures:
        for failure in batch.failures:
            typer.echo(f"error: {failure.message}", err=True)
        raise typer.Exit(code=EXIT_ARCHIVE_ERROR)


def main() -> None:
    """Run the ``zi`` command."""
    app()


if __name__ == "__main__":
    main()
