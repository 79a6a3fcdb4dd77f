"""Command-line interface for subcue using Typer.

Features:
- `decode` command for turning a SubRip file or an MP4 WebVTT sample into
  display events, written as json, jsonl, srt, vtt or txt.
- `formats` command listing the available decoders and output formats.
- Verbose mode for detailed logging.
"""

from __future__ import annotations

import logging
import pathlib
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from subcue import __version__
from subcue.api import decode_with_config
from subcue.config import DecoderConfig, OutputConfig, OutputOptions, UIConfig
from subcue.decoders import DECODERS, detect_format, get_decoder_spec
from subcue.errors import PreconditionViolationError, SubtitleDecodeError
from subcue.formatting import FORMATTERS, format_result, get_formatter_spec
from subcue.utils.constant import DEFAULT_OUTPUT_FORMAT
from subcue.utils.logging_config import configure_logging

logger = logging.getLogger(__name__)


def version_callback(value: bool) -> None:
    """Show the application's version and exit.

    Args:
        value: When True, print the version and exit.

    Raises:
        typer.Exit: Always raised after printing when value is True.

    """
    if value:
        print(f"subcue version: {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="subcue",
    help="A CLI for decoding SubRip files and MP4-boxed WebVTT samples into timed cues.",
    add_completion=False,
)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show the application's version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Show help when no subcommand is given.

    Args:
        ctx: Typer context.
        version: Whether to print version and exit.

    Raises:
        typer.Exit: Raised to terminate after displaying help or version.

    """
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _display_settings(
    input_file: pathlib.Path, decoder_config: DecoderConfig, output_config: OutputConfig
) -> None:
    """Render the effective decode settings as a Rich table on stderr."""
    console = Console(stderr=True)
    table = Table(title="Decode Settings", show_header=True, header_style="bold magenta")
    table.add_column("Category", style="cyan", no_wrap=True)
    table.add_column("Setting", style="green")
    table.add_column("Value", style="yellow")

    options = decoder_config.output_options
    table.add_row("Input", "File", str(input_file))
    table.add_row("Input", "Format", str(decoder_config.format_name))
    table.add_row("Input", "Encoding", decoder_config.encoding or "auto")
    table.add_row("Input", "Offset", str(decoder_config.offset))
    length = "to end" if decoder_config.length is None else str(decoder_config.length)
    table.add_row("Input", "Length", length)
    table.add_row("Events", "Start Time (us)", str(options.start_time_us))
    table.add_row("Events", "All Cues", str(options.output_all_cues))
    table.add_row("Output", "Format", output_config.output_format)
    table.add_row("Output", "Keep Styles", str(output_config.keep_styles))

    console.print(table)


def _build_output_options(start_time_us: int | None, all_cues: bool) -> OutputOptions:
    if start_time_us is None:
        if all_cues:
            raise typer.BadParameter("--all-cues requires --start-time-us.")
        return OutputOptions.all_cues()
    if all_cues:
        return OutputOptions.cues_after_then_remaining_before(start_time_us)
    return OutputOptions.only_cues_after(start_time_us)


@app.command()
def decode(
    input_file: Annotated[
        pathlib.Path,
        typer.Argument(
            help="SubRip file or MP4 WebVTT sample to decode.",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ],
    input_format: Annotated[
        str | None,
        typer.Option(
            "--format",
            help=f"Input format {list(DECODERS)}; detected when omitted.",
            case_sensitive=False,
        ),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option(
            "--output-format",
            help=f"Output format {list(FORMATTERS)}.",
            case_sensitive=False,
        ),
    ] = DEFAULT_OUTPUT_FORMAT,
    encoding: Annotated[
        str | None,
        typer.Option(
            "--encoding",
            help="Text encoding for SubRip input without a byte-order mark.",
        ),
    ] = None,
    offset: Annotated[
        int,
        typer.Option("--offset", help="Byte offset where decoding starts."),
    ] = 0,
    length: Annotated[
        int | None,
        typer.Option("--length", help="Number of bytes to decode; defaults to the rest."),
    ] = None,
    start_time_us: Annotated[
        int | None,
        typer.Option(
            "--start-time-us",
            help="Only emit events ending after this time (microseconds).",
        ),
    ] = None,
    all_cues: Annotated[
        bool,
        typer.Option(
            "--all-cues",
            help="With --start-time-us, append the earlier events instead of dropping them.",
        ),
    ] = False,
    no_styles: Annotated[
        bool,
        typer.Option(
            "--no-styles",
            help="Do not re-emit <b>/<i>/<u> tags in srt/vtt output.",
        ),
    ] = False,
    output: Annotated[
        pathlib.Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the result to this file instead of stdout.",
            dir_okay=False,
            writable=True,
            resolve_path=True,
        ),
    ] = None,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            help="Suppress log messages, including skipped-block warnings.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            help="Enable verbose output.",
        ),
    ] = False,
) -> None:
    """Decode a subtitle file and print its display events.

    Args:
        input_file: Path of the input file.
        input_format: Decoder key, or None to detect it.
        output_format: Formatter key.
        encoding: Encoding hint for BOM-less SubRip input.
        offset: Start of the byte range.
        length: Length of the byte range.
        start_time_us: Optional event window start.
        all_cues: Keep the events before ``start_time_us`` after the others.
        no_styles: Drop style tags from srt/vtt output.
        output: Optional output path.
        quiet: Suppress non-error output.
        verbose: Enable verbose logging.

    Raises:
        typer.BadParameter: For unknown formats or inconsistent options.
        typer.Exit: With code 1 on decode errors, 2 on invalid ranges or
            encodings.

    """
    ui_config = UIConfig(verbose=verbose, quiet=quiet)
    # Configure logging as early as possible to honor --quiet/--verbose
    configure_logging(verbose=ui_config.verbose, quiet=ui_config.quiet)

    try:
        get_formatter_spec(output_format)
        if input_format is not None:
            get_decoder_spec(input_format)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    data = input_file.read_bytes()
    if input_format is None:
        try:
            input_format = detect_format(data, input_file, offset, length)
        except PreconditionViolationError as exc:
            typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=2) from exc
        logger.info("Detected input format '%s' for %s", input_format, input_file.name)

    decoder_config = DecoderConfig(
        format_name=input_format.lower(),
        encoding=encoding,
        offset=offset,
        length=length,
        output_options=_build_output_options(start_time_us, all_cues),
    )
    output_config = OutputConfig(output_format=output_format.lower(), keep_styles=not no_styles)
    if ui_config.verbose:
        _display_settings(input_file, decoder_config, output_config)

    try:
        result = decode_with_config(data, decoder_config)
    except PreconditionViolationError as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2) from exc
    except SubtitleDecodeError as exc:
        typer.secho(f"Error: cannot decode {input_file.name}: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    logger.info("Decoded %d event(s) from %s", len(result.events), input_file.name)
    text = format_result(result, output_config.output_format, keep_styles=output_config.keep_styles)
    if output is None:
        typer.echo(text, nl=not text.endswith("\n"))
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text if text.endswith("\n") else text + "\n", encoding="utf-8")
        if not ui_config.quiet:
            typer.secho(f"Wrote {output}", fg=typer.colors.GREEN, err=True)


@app.command()
def formats() -> None:
    """List the available input decoders and output formatters."""
    console = Console()

    decoders = Table(title="Input Formats", show_header=True, header_style="bold magenta")
    decoders.add_column("Name", style="cyan", no_wrap=True)
    decoders.add_column("Description", style="green")
    decoders.add_column("Replacement", style="yellow")
    for name, spec in DECODERS.items():
        decoders.add_row(name, spec.description, spec.cue_replacement_behavior.value)
    console.print(decoders)

    formatters = Table(title="Output Formats", show_header=True, header_style="bold magenta")
    formatters.add_column("Name", style="cyan", no_wrap=True)
    formatters.add_column("Extension", style="green")
    formatters.add_column("Styles", style="yellow")
    for name, spec in FORMATTERS.items():
        formatters.add_row(name, spec.file_extension, str(spec.supports_styles))
    console.print(formatters)
