"""Main CLI entry point for the adf-convert command.

This module provides the Typer application that converts an ADF JSON
document into Markdown, plain text or HTML. It uses options on the main
command rather than subcommands for a simpler user experience.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from .. import __version__
from ..document.parser import AdfParser
from ..engine.diagnostics import CollectingDiagnosticSink, LoggingDiagnosticSink
from ..engine.traversal import run
from ..errors import AdfConvertError, FilesystemError, InvalidDocumentError
from ..formatters import available_formatters, get_formatter
from .config_loader import ConfigLoader
from .models import ConvertConfig, ExitCode
from .output import OutputHandler

app = typer.Typer(
    name="adf-convert",
    help="""Convert Atlassian Document Format (ADF) JSON to Markdown, text or HTML.

QUICK START:
  adf-convert page.json                      # Markdown to stdout
  adf-convert page.json -f html -o page.html # HTML to a file
  cat page.json | adf-convert -f text        # Read from stdin""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=False,
)

# Module logger
logger = logging.getLogger(__name__)

# Logger namespace configured by the CLI (library modules log below it)
APP_LOGGER_NAME = "adf_convert"


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'adf_convert' namespace logger to avoid affecting
    third-party libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # verbosity >= 2
        level = logging.DEBUG

    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.setLevel(level)
    app_logger.handlers.clear()

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"adf-convert_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _load_config(config_path: Optional[str]) -> ConvertConfig:
    """Load the explicit config file, or the default one if it exists."""
    if config_path:
        return ConfigLoader.load(config_path)
    return ConfigLoader.load_or_default()


def _read_input(input_path: Optional[str]) -> str:
    """Read the ADF JSON text from a file, or stdin for None / "-"."""
    if input_path in (None, "-"):
        return sys.stdin.read()
    try:
        return Path(input_path).read_text(encoding="utf-8")
    except FileNotFoundError:
        raise FilesystemError(input_path, 'read', 'File not found')
    except OSError as e:
        raise FilesystemError(input_path, 'read', str(e))


def _write_output(result: str, output_path: Optional[str]) -> None:
    """Write the converted document to a file, or stdout when no path is given."""
    if output_path is None:
        typer.echo(result, nl=False)
        return
    try:
        Path(output_path).write_text(result, encoding="utf-8")
    except OSError as e:
        raise FilesystemError(output_path, 'write', str(e))


def _run_convert(
    input_path: Optional[str],
    output_format: Optional[str],
    output_path: Optional[str],
    config_path: Optional[str],
    strict: bool,
    logdir: Optional[str],
    verbosity: int,
    no_color: bool,
) -> None:
    """Run the conversion.

    Args:
        input_path: ADF JSON file (None or "-" reads stdin)
        output_format: Formatter name overriding the config
        output_path: Output file (None writes to stdout)
        config_path: Explicit configuration file
        strict: Fail with DIAGNOSTICS_REPORTED when a warning is reported
        logdir: Directory for log files
        verbosity: Verbosity level
        no_color: Whether to disable colored output
    """
    _configure_logging(verbosity, logdir)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)
    sink = CollectingDiagnosticSink(forward_to=LoggingDiagnosticSink())

    try:
        config = _load_config(config_path)
        if output_format is not None:
            config.format = output_format
        if strict:
            config.strict = True

        formatter = get_formatter(config.format, **config.formatter_options())
        output.debug(f"Using {formatter.name} formatter")

        output.info(f"Reading ADF document from {input_path or 'stdin'}")
        document = AdfParser().parse_from_string(_read_input(input_path))
        result = run(document, formatter, diagnostics=sink)
        _write_output(result, output_path)

    except InvalidDocumentError as e:
        logger.error(f"Conversion failed: {e}")
        output.error(str(e))
        raise typer.Exit(ExitCode.INVALID_DOCUMENT)

    except (AdfConvertError, ValueError) as e:
        logger.error(f"Conversion failed: {e}")
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    except Exception as e:
        logger.exception("Unexpected error during conversion")
        output.error(f"Unexpected error: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    output.print_diagnostics_summary(sink.diagnostics)
    output.success(
        f"Converted {input_path or 'stdin'} to {config.format}"
        + (f" ({output_path})" if output_path else "")
    )

    if config.strict and sink.warnings:
        output.error(f"{len(sink.warnings)} warning(s) reported in strict mode")
        raise typer.Exit(ExitCode.DIAGNOSTICS_REPORTED)

    if sink.warnings:
        output.warning(
            f"{len(sink.warnings)} warning(s) reported (use --strict to fail on warnings)"
        )

    raise typer.Exit(ExitCode.SUCCESS)


@app.command()
def main_command(
    input_path: Optional[str] = typer.Argument(
        None,
        help="ADF JSON file to convert (omit or use '-' to read stdin)",
        metavar="INPUT",
    ),
    output_format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help=f"Output format: {', '.join(available_formatters())} (default: markdown)",
        metavar="FORMAT",
    ),
    output_path: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the result to this file instead of stdout",
        metavar="FILE",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help=f"Configuration file (default: {ConfigLoader.DEFAULT_CONFIG_PATH} if present)",
        metavar="PATH",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Exit with code 3 when a warning is reported (e.g. non-doc root)",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
) -> None:
    """Convert Atlassian Document Format (ADF) JSON to Markdown, text or HTML.

    \b
    QUICK START:
      adf-convert page.json                      # Markdown to stdout
      adf-convert page.json -f html -o page.html # HTML to a file
      cat page.json | adf-convert -f text        # Read from stdin
    """
    if version:
        typer.echo(f"adf-convert version {__version__}")
        raise typer.Exit()

    _run_convert(
        input_path,
        output_format,
        output_path,
        config_path,
        strict,
        logdir,
        verbosity,
        no_color,
    )


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m adf_convert.cli.main
if __name__ == "__main__":
    main()
