"""
Tag protection commands.
"""

from typing import Optional

import typer

from glx.src.commands.common import PROJECT_OPTION, reports_errors
from glx.src.context import CliContext
from glx.src.services.errors import BackendError

app = typer.Typer(help="Manage project tags", no_args_is_help=True)

TAG_ARGUMENT = typer.Argument("*", help="Tag expression")

@app.command("protect")
@reports_errors
def protect(
    ctx: typer.Context,
    tag: str = TAG_ARGUMENT,
    project: Optional[str] = PROJECT_OPTION,
):
    """Protect project tag(s)."""
    cli: CliContext = ctx.obj
    proj = cli.project(project)
    try:
        name = cli.backend.protect_tag(proj, tag)
    except BackendError as e:
        raise e.wrap(f"Failed to protect tag '{tag}' on project {proj.path_with_namespace}") from e
    cli.colorizer.print(f"tag '{name}' is protected on project {proj.path_with_namespace}")

@app.command("unprotect")
@reports_errors
def unprotect(
    ctx: typer.Context,
    tag: str = TAG_ARGUMENT,
    project: Optional[str] = PROJECT_OPTION,
):
    """Unprotect project tag(s)."""
    cli: CliContext = ctx.obj
    proj = cli.project(project)
    try:
        cli.backend.unprotect_tag(proj, tag)
    except BackendError as e:
        raise e.wrap(f"Failed to unprotect tag '{tag}' on project {proj.path_with_namespace}") from e
    cli.colorizer.print(f"tag '{tag}' is no longer protected on project {proj.path_with_namespace}")
