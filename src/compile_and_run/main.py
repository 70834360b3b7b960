#!/usr/bin/env python3
"""
compile-and-run - Main Entry Point
"""
import sys
import re
import logging
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .core.config import ConfigError, build_run_config
from .core.console import StatusConsole
from .orchestrator.test_orchestrator import TestOrchestrator
from .test_runner.compiler import CompilationError

logger = logging.getLogger(__name__)


def setup_logging(level: int = logging.WARNING) -> None:
    """Send logs to stderr through rich so stdout only carries status lines"""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def validate_filters(ctx, param, value: Tuple[str, ...]) -> Tuple[str, ...]:
    for pattern in value:
        try:
            re.compile(pattern)
        except re.error as e:
            raise click.BadParameter(f"invalid regular expression '{pattern}': {e}")
    return value


@click.command()
@click.version_option(version=__version__)
@click.argument('source_file', type=click.Path())
@click.argument('filters', nargs=-1, callback=validate_filters)
@click.option(
    '--config', '-c',
    type=click.Path(exists=True, dir_okay=False),
    help='Path to configuration YAML file'
)
@click.option(
    '--output-dir',
    type=click.Path(file_okay=False),
    help='Directory for captured program output (default: system temp dir)'
)
@click.option(
    '--color/--no-color',
    default=None,
    help='Force or disable coloured output (default: only on a terminal)'
)
@click.option(
    '--verbose', '-v',
    is_flag=True,
    help='Enable verbose logging'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode with detailed logging'
)
def cli(
    source_file: str,
    filters: Tuple[str, ...],
    config: Optional[str],
    output_dir: Optional[str],
    color: Optional[bool],
    verbose: bool,
    debug: bool
):
    """
    Compile SOURCE_FILE and run it against every input file in the
    current directory.

    Input files are files whose name contains "in". When a file with the
    last "in" replaced by "out" exists, the output is diffed against it.
    FILTERS are regular expressions; only input files matching at least
    one of them are run.

    Example:
        compile-and-run sum.cpp
        compile-and-run Main.java 'sample' '^big'
    """
    if debug:
        setup_logging(logging.DEBUG)
    elif verbose:
        setup_logging(logging.INFO)
    else:
        setup_logging()

    console = StatusConsole(color=color)

    if not Path(source_file).is_file():
        console.console.print(
            f"ERROR: {source_file} doesn't exist or is a directory. Did you mistype something?",
            markup=False,
        )
        sys.exit(1)

    try:
        run_config = build_run_config(
            source_file,
            filters=filters,
            config_path=config,
            output_dir=output_dir,
        )
        logger.debug(f"Capturing output in {run_config.output_dir}, filters: {list(filters)}")
        TestOrchestrator(run_config, console).run()

    except (CompilationError, ConfigError) as e:
        console.error(str(e))
        sys.exit(1)

    except Exception as e:
        console.error(str(e))
        if debug:
            console.console.print_exception()
        sys.exit(1)


if __name__ == '__main__':
    cli()
