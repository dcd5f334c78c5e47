"""Typer based command line entry points for SheetDoc."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer

from sheetdoc.config import DEFAULT_TIME_FORMAT, TIME_FORMATS, load_job
from sheetdoc.core.errors import ConfigError, ConversionError
from sheetdoc.core.logger import get_logger
from sheetdoc.services.convert import convert_job, dump_documents
from sheetdoc.services.hooks import build_hooks
from sheetdoc_io import SheetDocError, SheetReader, documents_to_frame

app = typer.Typer(help="Convert schema-annotated spreadsheets into JSON documents.")


def _validate_time_format(value: str) -> str:
    value = value.lower()
    if value not in TIME_FORMATS:
        raise typer.BadParameter(f"time-format must be one of {', '.join(TIME_FORMATS)}")
    return value


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        help="Set global logging level (e.g. DEBUG/INFO/WARNING).",
    ),
) -> None:
    """Configure global CLI behaviour before executing commands."""

    logger = get_logger()

    level_value = getattr(logging, log_level.upper(), None)
    if not isinstance(level_value, int):
        raise typer.BadParameter(f"Unknown log level: {log_level}")

    logger.setLevel(level_value)
    logging.getLogger("sheetdoc_io").setLevel(level_value)


def _open_reader(workbook: Path, file_root: Path | None = None, time_format: str = DEFAULT_TIME_FORMAT) -> SheetReader:
    logger = get_logger()
    try:
        return SheetReader.open(workbook, hooks=build_hooks(file_root=file_root, time_format=time_format))
    except FileNotFoundError as exc:
        logger.error("sheetdoc.cli workbook_missing path=%s", workbook)
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2) from exc


def _fail(exc: Exception, action: str) -> typer.Exit:
    get_logger().error("sheetdoc.cli %s_failed: %s", action, exc)
    typer.secho(f"{action.capitalize()} failed: {exc}", fg=typer.colors.RED, err=True)
    return typer.Exit(code=1)


@app.command("convert")
def convert_command(
    workbook: Path = typer.Argument(..., exists=True, dir_okay=False, resolve_path=True, help="Source .xlsx workbook"),
    sheet: str = typer.Argument(..., help="Sheet to convert"),
    header_row: int = typer.Option(1, "--header-row", min=0, help="Zero-based header row index."),
    skip: int = typer.Option(0, "--skip", min=0, help="Rows between the header and the first data row."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write JSON here instead of stdout."),
    indent: int = typer.Option(2, "--indent", min=0, help="JSON indentation."),
    file_root: Optional[Path] = typer.Option(None, "--file-root", help="Resolve and check file fields under this directory."),
    time_format: str = typer.Option(DEFAULT_TIME_FORMAT, "--time-format", callback=_validate_time_format, help="iso, epoch or keep."),
) -> None:
    """Convert one sheet (and the sheets it references) to JSON."""

    reader = _open_reader(workbook, file_root=file_root, time_format=time_format)
    try:
        documents = reader.read(sheet, header_row=header_row, skip=skip)
    except SheetDocError as exc:
        raise _fail(exc, "convert") from exc

    text = dump_documents(documents, indent=indent)
    if output is None:
        typer.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    typer.secho(f"Wrote {len(documents)} rows to {output}", fg=typer.colors.GREEN, err=True)


@app.command("schema")
def schema_command(
    workbook: Path = typer.Argument(..., exists=True, dir_okay=False, resolve_path=True, help="Source .xlsx workbook"),
    sheet: str = typer.Argument(..., help="Sheet whose header to parse"),
    header_row: int = typer.Option(1, "--header-row", min=0, help="Zero-based header row index."),
) -> None:
    """Print the parsed field descriptors of a header row."""

    reader = _open_reader(workbook)
    try:
        schema = reader.parse_header(sheet, header_row)
    except SheetDocError as exc:
        raise _fail(exc, "schema") from exc
    payload = [descriptor.to_dict() for descriptor in schema.fields]
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))


@app.command("preview")
def preview_command(
    workbook: Path = typer.Argument(..., exists=True, dir_okay=False, resolve_path=True, help="Source .xlsx workbook"),
    sheet: str = typer.Argument(..., help="Sheet to preview"),
    header_row: int = typer.Option(1, "--header-row", min=0, help="Zero-based header row index."),
    skip: int = typer.Option(0, "--skip", min=0, help="Rows between the header and the first data row."),
    limit: int = typer.Option(20, "--limit", min=1, help="Maximum rows to display."),
) -> None:
    """Show converted rows as a flattened table."""

    reader = _open_reader(workbook)
    try:
        documents = reader.read(sheet, header_row=header_row, skip=skip)
    except SheetDocError as exc:
        raise _fail(exc, "preview") from exc
    frame = documents_to_frame(documents)
    if frame.empty:
        typer.echo("(no rows)")
        return
    typer.echo(frame.head(limit).to_string(index=False))
    if len(frame) > limit:
        typer.echo(f"... {len(frame) - limit} more rows")


@app.command("run")
def run_command(
    job_file: Path = typer.Argument(..., exists=True, dir_okay=False, resolve_path=True, help="Job YAML file"),
) -> None:
    """Execute a conversion job described in YAML."""

    try:
        job = load_job(job_file)
    except ConfigError as exc:
        get_logger().error("sheetdoc.cli config_error: %s", exc)
        typer.secho(f"Unable to load job: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2) from exc

    try:
        result = convert_job(job)
    except ConversionError as exc:
        raise _fail(exc, "run") from exc

    for item in result.sheets:
        typer.echo(f"{item.sheet}: {item.rows} rows -> {item.output_path}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
