#!/usr/bin/env python3
"""
faultline command line interface

This module serves as the main entry point for the faultline CLI. It exposes the
engine's version and configuration, and hosts the demonstration programs that
show loaders, dispatch and post-hoc retrieval working together.

Usage:
    faultline --help
    faultline [command] [options]

Examples:
    faultline version
    faultline --config faultline.yaml config
    faultline demo print-file README.md

Environment Variables:
    FAULTLINE_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    FAULTLINE_DEBUG_CHECKS: Fail fast on loader misuse (true/false)
    FAULTLINE_DIAGNOSTIC_MAX_LENGTH: Maximum characters per payload in dumps
"""

import logging
import os
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from faultline import __version__
from faultline.cli.commands.print_file import demo_app
from faultline.config import get_config, load_config, set_config
from faultline.core.exceptions import ConfigurationError

console = Console()

# Configure logging with rich handler
logging.basicConfig(
    level=os.environ.get("FAULTLINE_LOG_LEVEL", "WARNING").upper(),
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True)]
)
logger = logging.getLogger(__name__)

app = typer.Typer(
    name="faultline",
    help="faultline error-context engine command line interface",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]}
)


@app.callback()
def main_callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose output.")] = False,
    config_path: Annotated[Optional[str], typer.Option("--config", "-c", help="Path to configuration file.")] = None,
):
    """
    faultline CLI.
    """
    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e.message)
        raise typer.Exit(code=1)
    set_config(config)

    if verbose:
        logging.getLogger("faultline").setLevel(logging.DEBUG)
        logger.debug("Verbose logging enabled")
    else:
        logging.getLogger("faultline").setLevel(config.log_level)


@app.command()
def version() -> None:
    """
    Show the installed faultline version.
    """
    console.print(f"faultline {__version__}", highlight=False)


@app.command("config")
def show_config() -> None:
    """
    Show the effective engine configuration.
    """
    config = get_config()
    table = Table(title="faultline configuration")
    table.add_column("Setting")
    table.add_column("Value")
    table.add_row("debug_checks", str(config.debug_checks))
    table.add_row("diagnostic_value_max_length", str(config.diagnostic_value_max_length))
    table.add_row("log_level", config.log_level)
    console.print(table)


app.add_typer(demo_app)


if __name__ == "__main__":
    app()
