"""
Helpers shared by the command handlers.
"""

import functools
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.text import Text

from glx.src.context import CliContext
from glx.src.models.gitlab import Pipeline
from glx.src.models.status import ColorMode
from glx.src.services.colorizer import build_console
from glx.src.services.errors import GlxError

logger = logging.getLogger(__name__)

PROJECT_OPTION = typer.Option(
    None, "--project", "-p", help="The project which owns the pipeline (namespace/name or id)"
)
REF_OPTION = typer.Option(None, "--ref", "-r", help="Reference (tag or branch)")

def report_error(error: GlxError, console: Optional[Console] = None) -> None:
    """Print an error as a single line, followed by its hint when it has one."""
    console = console or build_console(ColorMode.AUTO, stderr=True)
    console.print(Text(f"error: {error}", style="red"))
    if error.hint:
        console.print(Text(f"hint: {error.hint}", style="dim"))

def reports_errors(func):
    """Turn GlxError raised by a command into an error line and exit code 1."""

    @functools.wraps(func)
    def wrapper(ctx: typer.Context, *args, **kwargs):
        try:
            return func(ctx, *args, **kwargs)
        except GlxError as e:
            logger.debug("Command failed", exc_info=True)
            cli = ctx.obj if isinstance(ctx.obj, CliContext) else None
            report_error(e, cli.err if cli else None)
            raise typer.Exit(code=1)

    return wrapper

def link(cli: CliContext, url: str) -> None:
    """Print and/or open a web URL depending on the global options."""
    if not url:
        return
    if cli.show_urls:
        cli.colorizer.print(url)
    if cli.open_links:
        typer.launch(url)

def print_pipeline(cli: CliContext, pipeline: Pipeline, label: str = "pipeline") -> None:
    line = Text(f"{label} #{pipeline.id} ")
    if pipeline.ref:
        line.append(f"@ {pipeline.ref} ")
    line.append_text(cli.colorizer.status(pipeline.status))
    cli.colorizer.print(line)
    link(cli, pipeline.web_url)
