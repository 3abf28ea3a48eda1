"""
Branch protection commands.
"""

from typing import List, Optional

import typer

from glx.src.commands.common import PROJECT_OPTION, link, reports_errors
from glx.src.context import CliContext
from glx.src.models.gitlab import Project
from glx.src.services.errors import BackendError, NoRef

app = typer.Typer(help="Manage project branches", no_args_is_help=True)

BRANCH_ARGUMENT = typer.Argument(
    None, help="Branch name or wildcard expression (default: the current branch)"
)

def _branch(cli: CliContext, explicit: Optional[str], project: Project) -> str:
    branch = explicit or cli.repo.branch
    if not branch:
        raise NoRef(project.path_with_namespace)
    return branch

def _protected(cli: CliContext, project: Project) -> List[str]:
    try:
        return cli.backend.list_protected_branches(project)
    except BackendError as e:
        raise e.wrap(f"Failed to list protected branches of {project.path_with_namespace}") from e

@app.command("protect")
@reports_errors
def protect(
    ctx: typer.Context,
    branch: Optional[str] = BRANCH_ARGUMENT,
    project: Optional[str] = PROJECT_OPTION,
    force_push: bool = typer.Option(False, "--force-push", help="Allow force push"),
):
    """Protect project branch(es)."""
    cli: CliContext = ctx.obj
    proj = cli.project(project)
    name = _branch(cli, branch, proj)
    already_protected = name in _protected(cli, proj)

    try:
        # protection settings can't be updated in place: drop them first
        if already_protected:
            cli.backend.unprotect_branch(proj, name)
        protected = cli.backend.protect_branch(proj, name, allow_force_push=force_push)
    except BackendError as e:
        raise e.wrap(f"Failed to protect branch '{name}' on project {proj.path_with_namespace}") from e

    cli.colorizer.print(f"branch '{protected}' is protected on project {proj.path_with_namespace}")
    link(cli, f"{proj.web_url}/-/settings/repository" if proj.web_url else "")

@app.command("unprotect")
@reports_errors
def unprotect(
    ctx: typer.Context,
    branch: Optional[str] = BRANCH_ARGUMENT,
    project: Optional[str] = PROJECT_OPTION,
):
    """Unprotect project branch(es)."""
    cli: CliContext = ctx.obj
    proj = cli.project(project)
    name = _branch(cli, branch, proj)

    if name not in _protected(cli, proj):
        cli.colorizer.print(
            f"branch '{name}' protection not found on project {proj.path_with_namespace}"
        )
    else:
        try:
            cli.backend.unprotect_branch(proj, name)
        except BackendError as e:
            raise e.wrap(
                f"Failed to unprotect branch '{name}' on project {proj.path_with_namespace}"
            ) from e
        cli.colorizer.print(
            f"branch '{name}' protection has been removed on project {proj.path_with_namespace}"
        )
    link(cli, f"{proj.web_url}/-/settings/repository" if proj.web_url else "")
