"""
Project commands: information, archive and unarchive.
"""

from typing import Optional

import typer
from rich.text import Text

from glx.src.commands.common import PROJECT_OPTION, link, reports_errors
from glx.src.context import CliContext
from glx.src.models.gitlab import Tag
from glx.src.services.errors import BackendError

app = typer.Typer(help="Manage projects", no_args_is_help=True)

@app.command("info")
@reports_errors
def info(
    ctx: typer.Context,
    ref: Optional[str] = typer.Argument(None, help="Reference (tag or branch)"),
    project: Optional[str] = PROJECT_OPTION,
):
    """Display information about a project and the reference commands act on."""
    cli: CliContext = ctx.obj
    proj = cli.project(project)
    cli.colorizer.print(Text(f"{proj.name} ({proj.path_with_namespace}) #{proj.id}", style="bold"))

    resolved = cli.ref(ref, proj)
    if isinstance(resolved, Tag):
        cli.colorizer.print(f"tag {resolved.name} ({resolved.commit_sha})")
    elif resolved.commit_sha:
        cli.colorizer.print(f"branch {resolved.name} ({resolved.commit_sha})")
    else:
        cli.colorizer.print(f"branch {resolved.name}")
    link(cli, f"{proj.web_url}/-/tree/{resolved.name}" if proj.web_url else "")

@app.command("archive")
@reports_errors
def archive(ctx: typer.Context, project: Optional[str] = PROJECT_OPTION):
    """Archive a project."""
    cli: CliContext = ctx.obj
    proj = cli.project(project)
    try:
        cli.backend.archive_project(proj)
    except BackendError as e:
        raise e.wrap(f"Failed to archive project {proj.name}") from e
    cli.colorizer.print(f"project {proj.name}({proj.id}) has been archived")

@app.command("unarchive")
@reports_errors
def unarchive(ctx: typer.Context, project: Optional[str] = PROJECT_OPTION):
    """Unarchive a project."""
    cli: CliContext = ctx.obj
    proj = cli.project(project)
    try:
        cli.backend.unarchive_project(proj)
    except BackendError as e:
        raise e.wrap(f"Failed to unarchive project {proj.name}") from e
    cli.colorizer.print(f"project {proj.name}({proj.id}) has been unarchived")
