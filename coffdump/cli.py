"""
coffdump CLI -- COFF Object File Inspector
===========================================

Click-based command-line interface.  Decodes one object file and prints its
header, sections, relocations and symbols.

Usage::

    # Classic text dump
    coffdump hello.o

    # Rich tables
    coffdump hello.o --format table

    # JSON to stdout, or to a report file alongside the dump
    coffdump hello.o --format json
    coffdump hello.o --output hello.json

    # Debug logging (stderr)
    coffdump hello.o --verbose

Exit status is 0 on success, 1 when the file cannot be read or decoded and
2 on usage errors.

References:
    - Click documentation: https://click.palletsprojects.com/
"""

from __future__ import annotations

import sys
import tomllib

import click

from shared.config import OUTPUT_FORMATS, CoffdumpConfig
from shared.console import CoffConsole
from shared.logger import CoffLogger

from coffdump import __version__
from coffdump.core.engine import CoffEngine
from coffdump.core.errors import CoffError
from coffdump.output.console import CoffConsoleOutput
from coffdump.output.report import CoffReportGenerator


@click.command("coffdump")
@click.argument("path", type=click.Path(dir_okay=False))
@click.option(
    "--format", "-f",
    "output_format",
    type=click.Choice(list(OUTPUT_FORMATS), case_sensitive=False),
    default=None,
    help="Output style.  Default: output_format from the config (text).",
)
@click.option(
    "--output", "-o",
    "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Also write a JSON report to this path.",
)
@click.option(
    "--config", "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="TOML configuration file.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Enable debug logging on stderr.",
)
@click.version_option(__version__, prog_name="coffdump")
def coffdump_cli(
    path: str,
    output_format: str | None,
    output_path: str | None,
    config_path: str | None,
    verbose: bool,
) -> None:
    """Decode and print the structure of a COFF object file.

    PATH is the object file to inspect.

    Examples:

    \b
        coffdump hello.o
        coffdump hello.o --format table
        coffdump hello.o --format json > hello.json
    """
    console = CoffConsole()

    try:
        config = CoffdumpConfig.load(config_path)
    except (OSError, ValueError, tomllib.TOMLDecodeError) as exc:
        console.error(f"Invalid configuration: {exc}")
        sys.exit(1)

    # Engine shares this logger; log_file must have a single handler.
    logger = CoffLogger.from_config("cli", config.global_settings, verbose=verbose)
    engine = CoffEngine(logger=logger)

    # Nothing is printed until the whole file has been decoded.
    try:
        image = engine.inspect(path)
    except CoffError as exc:
        logger.debug("Decode failed", exc_info=True)
        console.error(str(exc))
        sys.exit(1)

    style = (output_format or config.dump.output_format).lower()
    if style == "json":
        console.json(CoffReportGenerator().to_json(image))
    else:
        CoffConsoleOutput(console=console, settings=config.dump).display(image, style)

    if output_path:
        try:
            report_path = CoffReportGenerator().generate_json(image, output_path)
        except OSError as exc:
            console.error(f"Cannot write report: {exc}")
            sys.exit(1)
        console.success(f"JSON report saved: {report_path}")


def main() -> None:
    """Entry point for the ``coffdump`` script and ``python -m coffdump``."""
    coffdump_cli()


if __name__ == "__main__":
    main()
