"""
glx - command-line client for GitLab pipelines and job logs.
"""

import logging
import sys
from typing import Optional

import typer

from glx.src.commands import branches_app, pipeline_app, project_app, tags_app
from glx.src.commands.common import report_error
from glx.src.config import load_settings
from glx.src.context import CliContext
from glx.src.git import discover
from glx.src.models.status import ColorMode
from glx.src.services.backend import GitLabBackend
from glx.src.services.colorizer import Colorizer, build_console
from glx.src.services.errors import GlxError

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="glx",
    help="Interact with the GitLab API",
    no_args_is_help=True,
    pretty_exceptions_enable=False,
)
app.add_typer(pipeline_app, name="pipeline")
app.add_typer(tags_app, name="tags")
app.add_typer(branches_app, name="branches")
app.add_typer(project_app, name="project")

def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

def build_context(
    config: Optional[str],
    verbose: bool,
    open_links: bool,
    show_urls: bool,
    color: Optional[ColorMode],
) -> CliContext:
    settings = load_settings(config)
    configure_logging("DEBUG" if verbose else settings.log_level)

    mode = color or settings.color
    logger.debug(f"Connecting to {settings.host}")
    backend = GitLabBackend(
        settings.host,
        token=settings.token,
        timeout=settings.request_timeout,
        per_page=settings.per_page,
    )
    return CliContext(
        settings,
        backend,
        Colorizer.for_mode(mode),
        repo=discover(),
        err=build_console(mode, stderr=True),
        open_links=open_links,
        show_urls=show_urls,
    )

@app.callback()
def callback(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(
        None, "--config", "-c", help="Configuration file containing GitLab connection parameters"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="More detailed output"),
    open_links: bool = typer.Option(False, "--open", "-o", help="Try to open links whenever possible"),
    show_urls: bool = typer.Option(False, "--url", "-u", help="Show urls"),
    color: Optional[ColorMode] = typer.Option(None, "--color", help="Color mode (default: auto)"),
):
    try:
        cli = build_context(config, verbose, open_links, show_urls, color)
    except GlxError as e:
        report_error(e)
        raise typer.Exit(code=1)
    ctx.obj = cli
    ctx.call_on_close(cli.close)

def main():
    """Main entry point."""
    app()

if __name__ == "__main__":
    main()
