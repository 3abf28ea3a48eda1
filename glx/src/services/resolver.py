"""
Resolve partial command line input into a concrete project, ref, pipeline and job.
"""

import logging
from typing import Iterable, List, Optional, Union

from pydantic import BaseModel

from glx.src.models.gitlab import Job, Pipeline, Project, Ref
from glx.src.models.status import LOG_SCOPES, Status, has_log
from glx.src.services.backend import Backend
from glx.src.services.errors import (
    BackendError,
    JobHasNoLog,
    JobNotInPipeline,
    NoJob,
    NoPipeline,
    NoProject,
    NoRef,
    RefDiverged,
)

logger = logging.getLogger(__name__)

class JobSelection(BaseModel):
    """The job picked for a pipeline and the jobs it was picked from."""
    pipeline: Pipeline
    job: Job
    candidates: List[Job] = []
    explicit: bool = False

    @property
    def ambiguous(self) -> bool:
        return not self.explicit and len(self.candidates) > 1

def pick_job(pipeline: Pipeline, jobs: List[Job]) -> Optional[Job]:
    """
    Pick the job whose log best represents the pipeline.

    Prefers the first job sharing the pipeline's status when that status has
    a log, otherwise the last job in API order that has one.
    """
    if has_log(pipeline.status):
        for job in jobs:
            if job.status == pipeline.status:
                return job
    for job in reversed(jobs):
        if has_log(job.status):
            return job
    return None

def _candidates(*names: Optional[str]) -> List[str]:
    unique: List[str] = []
    for name in names:
        if name and name not in unique:
            unique.append(name)
    return unique

class RunResolver:
    def __init__(self, backend: Backend):
        self.backend = backend

    def resolve_project(
        self,
        explicit: Optional[Union[str, int]] = None,
        local_hint: Optional[str] = None,
    ) -> Project:
        project_id = explicit if explicit not in (None, "") else local_hint
        if not project_id:
            raise NoProject()
        try:
            return self.backend.fetch_project(project_id)
        except BackendError as e:
            raise e.wrap(f"while resolving project {project_id}") from e

    def resolve_ref(
        self,
        explicit: Optional[str],
        project: Project,
        local_tag_hint: Optional[str] = None,
        local_branch_hint: Optional[str] = None,
    ) -> Ref:
        """
        Resolve a tag first, then a branch.

        Tags are tried for the explicit name then the local tag hint; branches
        for the explicit name then the local branch hint. Only "not found"
        answers move on to the next candidate.
        """
        for name in _candidates(explicit, local_tag_hint):
            try:
                return self.backend.fetch_tag(project, name)
            except BackendError as e:
                if not e.not_found:
                    raise e.wrap(f"while resolving tag {name} for {project.path_with_namespace}") from e
                logger.debug(f"No tag {name} in {project.path_with_namespace}, trying branches")

        for name in _candidates(explicit, local_branch_hint):
            try:
                return self.backend.fetch_branch(project, name)
            except BackendError as e:
                if not e.not_found:
                    raise e.wrap(f"while resolving branch {name} for {project.path_with_namespace}") from e
                logger.debug(f"No branch {name} in {project.path_with_namespace}")

        raise NoRef(project.path_with_namespace, explicit)

    def resolve_ref_strict(
        self,
        explicit: Optional[str],
        project: Project,
        local_tag_hint: Optional[str] = None,
        local_branch_hint: Optional[str] = None,
    ) -> Ref:
        """Like resolve_ref, but never substitutes a different ref for an explicit one."""
        ref = self.resolve_ref(explicit, project, local_tag_hint, local_branch_hint)
        if explicit and ref.name != explicit:
            raise RefDiverged(project.path_with_namespace, explicit, ref.name)
        return ref

    def resolve_pipeline(
        self,
        explicit_id: Optional[int],
        project: Project,
        ref: Optional[Ref] = None,
    ) -> Pipeline:
        if explicit_id is not None:
            try:
                return self.backend.fetch_pipeline(project, explicit_id)
            except BackendError as e:
                raise e.wrap(
                    f"while resolving pipeline #{explicit_id} for {project.path_with_namespace}"
                ) from e

        if ref is None:
            raise NoRef(project.path_with_namespace)
        try:
            pipelines = self.backend.list_pipelines(project, ref.name)
        except BackendError as e:
            raise e.wrap(
                f"while listing pipelines for {project.path_with_namespace} @ {ref.name}"
            ) from e

        if not pipelines:
            raise NoPipeline(project.path_with_namespace, ref.name)
        pipeline = pipelines[0]
        logger.info(f"Picked latest pipeline #{pipeline.id} for {project.path_with_namespace} @ {ref.name}")
        return pipeline

    def select_job(
        self,
        explicit_job_id: Optional[int],
        explicit_pipeline_id: Optional[int],
        project: Project,
        ref: Optional[Ref] = None,
        scopes: Iterable[Status] = LOG_SCOPES,
    ) -> JobSelection:
        pipeline = self.resolve_pipeline(explicit_pipeline_id, project, ref)
        path = project.path_with_namespace

        try:
            jobs = self.backend.list_pipeline_jobs(
                project, pipeline, scopes=tuple(scopes), include_retried=True
            )
        except BackendError as e:
            raise e.wrap(f"while listing jobs of pipeline #{pipeline.id} for {path}") from e

        if explicit_job_id is None:
            job = pick_job(pipeline, jobs)
            if job is None:
                raise NoJob(path, pipeline.ref or (ref.name if ref else ""), pipeline.id)
            logger.info(f"Picked job #{job.id} ({job.name}) of pipeline #{pipeline.id}")
            return JobSelection(pipeline=pipeline, job=job, candidates=jobs)

        job = next((j for j in jobs if j.id == explicit_job_id), None)
        if job is None:
            # The scopes may have filtered it out: ask for the job itself
            try:
                job = self.backend.fetch_job(project, explicit_job_id)
            except BackendError as e:
                if e.not_found:
                    raise JobNotInPipeline(path, explicit_job_id, pipeline.id) from e
                raise e.wrap(f"while resolving job #{explicit_job_id} for {path}") from e
            if job.pipeline_id != pipeline.id:
                raise JobNotInPipeline(path, explicit_job_id, pipeline.id)

        if not has_log(job.status):
            raise JobHasNoLog(path, job.id, job.status)
        return JobSelection(pipeline=pipeline, job=job, candidates=jobs, explicit=True)

    def resolve_job(
        self,
        explicit_job_id: Optional[int],
        explicit_pipeline_id: Optional[int],
        project: Project,
        ref: Optional[Ref] = None,
        scopes: Iterable[Status] = LOG_SCOPES,
    ) -> Job:
        return self.select_job(
            explicit_job_id, explicit_pipeline_id, project, ref, scopes
        ).job
