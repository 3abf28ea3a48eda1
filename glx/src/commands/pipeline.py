"""
Pipeline commands: status, create, cancel, retry, jobs and log.
"""

from typing import Optional

import typer
from rich.table import Table
from rich.text import Text

from glx.src.commands.common import (
    PROJECT_OPTION,
    REF_OPTION,
    link,
    print_pipeline,
    reports_errors,
)
from glx.src.context import CliContext
from glx.src.models.log import LogFilter
from glx.src.services.errors import BackendError
from glx.src.services.log_renderer import LogRenderer
from glx.src.services.resolver import JobSelection

app = typer.Typer(help="Manage project pipelines", no_args_is_help=True)

PIPELINE_ID_ARGUMENT = typer.Argument(None, help="Pipeline id (default: latest for the ref)")

def _resolve_pipeline(cli: CliContext, project: Optional[str], ref: Optional[str], pipeline_id: Optional[int]):
    proj = cli.project(project)
    resolved_ref = cli.ref(ref, proj) if pipeline_id is None else None
    return proj, cli.resolver.resolve_pipeline(pipeline_id, proj, resolved_ref)

@app.command("status")
@reports_errors
def status(
    ctx: typer.Context,
    pipeline_id: Optional[int] = PIPELINE_ID_ARGUMENT,
    project: Optional[str] = PROJECT_OPTION,
    ref: Optional[str] = REF_OPTION,
):
    """Get pipeline status."""
    cli: CliContext = ctx.obj
    _, pipeline = _resolve_pipeline(cli, project, ref, pipeline_id)
    print_pipeline(cli, pipeline)

@app.command("create")
@reports_errors
def create(
    ctx: typer.Context,
    ref: Optional[str] = typer.Argument(None, help="Reference (tag or branch)"),
    project: Optional[str] = PROJECT_OPTION,
):
    """Create a new pipeline."""
    cli: CliContext = ctx.obj
    proj = cli.project(project)
    resolved_ref = cli.ref(ref, proj, strict=True)
    try:
        pipeline = cli.backend.create_pipeline(proj, resolved_ref.name)
    except BackendError as e:
        raise e.wrap(
            f"Failed to create pipeline for {proj.path_with_namespace} @ {resolved_ref.name}"
        ) from e
    print_pipeline(cli, pipeline, label="created pipeline")

@app.command("cancel")
@reports_errors
def cancel(
    ctx: typer.Context,
    pipeline_id: Optional[int] = PIPELINE_ID_ARGUMENT,
    project: Optional[str] = PROJECT_OPTION,
    ref: Optional[str] = REF_OPTION,
):
    """Cancel a pipeline."""
    cli: CliContext = ctx.obj
    proj, pipeline = _resolve_pipeline(cli, project, ref, pipeline_id)
    try:
        pipeline = cli.backend.cancel_pipeline(proj, pipeline.id)
    except BackendError as e:
        raise e.wrap(f"Failed to cancel pipeline #{pipeline.id}") from e
    print_pipeline(cli, pipeline)

@app.command("retry")
@reports_errors
def retry(
    ctx: typer.Context,
    pipeline_id: Optional[int] = PIPELINE_ID_ARGUMENT,
    project: Optional[str] = PROJECT_OPTION,
    ref: Optional[str] = REF_OPTION,
):
    """Retry the failed jobs of a pipeline."""
    cli: CliContext = ctx.obj
    proj, pipeline = _resolve_pipeline(cli, project, ref, pipeline_id)
    try:
        pipeline = cli.backend.retry_pipeline(proj, pipeline.id)
    except BackendError as e:
        raise e.wrap(f"Failed to retry pipeline #{pipeline.id}") from e
    print_pipeline(cli, pipeline)

def _jobs_table(cli: CliContext, selection: JobSelection) -> Table:
    table = Table(box=None, show_header=True, pad_edge=False)
    table.add_column("")
    table.add_column("id", justify="right")
    table.add_column("stage")
    table.add_column("name")
    table.add_column("status")
    for job in selection.candidates:
        marker = ">" if job.id == selection.job.id else ""
        table.add_row(marker, str(job.id), job.stage, job.name, cli.colorizer.status(job.status))
    return table

@app.command("jobs")
@reports_errors
def jobs(
    ctx: typer.Context,
    pipeline_id: Optional[int] = PIPELINE_ID_ARGUMENT,
    project: Optional[str] = PROJECT_OPTION,
    ref: Optional[str] = REF_OPTION,
):
    """List the jobs of a pipeline."""
    cli: CliContext = ctx.obj
    proj, pipeline = _resolve_pipeline(cli, project, ref, pipeline_id)
    try:
        job_list = cli.backend.list_pipeline_jobs(proj, pipeline, include_retried=True)
    except BackendError as e:
        raise e.wrap(f"Failed to list jobs of pipeline #{pipeline.id}") from e

    print_pipeline(cli, pipeline)
    table = Table(box=None, show_header=True, pad_edge=False)
    for column in ("id", "stage", "name", "status"):
        table.add_column(column)
    for job in job_list:
        table.add_row(str(job.id), job.stage, job.name, cli.colorizer.status(job.status))
    cli.colorizer.print(table)

@app.command("log")
@reports_errors
def log(
    ctx: typer.Context,
    job_id: Optional[int] = typer.Argument(None, help="The job id to extract the job log from"),
    project: Optional[str] = PROJECT_OPTION,
    ref: Optional[str] = REF_OPTION,
    pipeline_id: Optional[int] = typer.Option(None, "--pipeline", help="Pipeline id (default: latest for the ref)"),
    section: Optional[str] = typer.Option(
        None, "--section", "-s", help="A name that partially matches the section name(s) to show"
    ),
    show_all: bool = typer.Option(False, "--all", "-a", help="Show all sections"),
    headers: bool = typer.Option(False, "--headers", "-h", help="Show section headers"),
    only_headers: bool = typer.Option(
        False, "--only-headers", "-H", help="Show only section headers (all collapsed)"
    ),
):
    """Get the log of a job."""
    cli: CliContext = ctx.obj
    proj = cli.project(project)
    resolved_ref = cli.ref(ref, proj) if pipeline_id is None else None
    selection = cli.resolver.select_job(job_id, pipeline_id, proj, resolved_ref)

    if selection.ambiguous:
        cli.err.print(Text(
            f"Multiple jobs are available. Job #{selection.job.id} has been picked. "
            "Specify the id as argument to change:"
        ))
        cli.err.print(_jobs_table(cli, selection))

    try:
        raw = cli.backend.fetch_job_log(proj, selection.job)
    except BackendError as e:
        raise e.wrap(f"Failed to get the log of job #{selection.job.id}") from e

    log_filter = LogFilter(
        show_all=show_all,
        show_headers=headers,
        show_only_headers=only_headers,
        name_substring=section if section is not None else cli.settings.default_section,
    )
    renderer = LogRenderer(log_filter, colored=cli.colorizer.colored)
    cli.colorizer.write_lines(renderer.render(raw))
    link(cli, selection.job.web_url)
