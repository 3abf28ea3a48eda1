"""Shared fixtures: an in-memory backend and record factories."""

from typing import Dict, Iterable, List, Optional

import pytest

from glx.src.models.gitlab import Branch, Job, Pipeline, Project, Tag
from glx.src.models.status import Status
from glx.src.services.errors import BackendError

class FakeBackend:
    """Backend serving fixed records, raising 404 BackendError for anything unknown."""

    def __init__(self):
        self.projects: Dict[str, Project] = {}
        self.tags: Dict[str, Tag] = {}
        self.branches: Dict[str, Branch] = {}
        self.pipelines: Dict[str, List[Pipeline]] = {}
        self.jobs: Dict[int, List[Job]] = {}
        self.logs: Dict[int, bytes] = {}
        self.protected: List[str] = []
        self.protected_branches: Dict[str, bool] = {}
        self.calls: List[tuple] = []
        self.failures: Dict[str, BackendError] = {}

    def _check(self, name: str, *args):
        self.calls.append((name, *args))
        if name in self.failures:
            raise self.failures[name]

    def add_project(self, project: Project) -> Project:
        self.projects[project.path_with_namespace] = project
        self.projects[str(project.id)] = project
        return project

    def add_pipeline(self, ref: str, pipeline: Pipeline, jobs: Iterable[Job] = ()) -> Pipeline:
        self.pipelines.setdefault(ref, []).append(pipeline)
        self.jobs[pipeline.id] = [
            job.model_copy(update={"pipeline_id": pipeline.id}) for job in jobs
        ]
        return pipeline

    def fetch_project(self, project_id):
        self._check("fetch_project", project_id)
        try:
            return self.projects[str(project_id)]
        except KeyError:
            raise BackendError(f"project {project_id} not found", status_code=404)

    def fetch_tag(self, project, name):
        self._check("fetch_tag", name)
        if name not in self.tags:
            raise BackendError(f"tag {name} not found", status_code=404)
        return self.tags[name]

    def fetch_branch(self, project, name):
        self._check("fetch_branch", name)
        if name not in self.branches:
            raise BackendError(f"branch {name} not found", status_code=404)
        return self.branches[name]

    def fetch_pipeline(self, project, pipeline_id):
        self._check("fetch_pipeline", pipeline_id)
        for pipelines in self.pipelines.values():
            for pipeline in pipelines:
                if pipeline.id == pipeline_id:
                    return pipeline
        raise BackendError(f"pipeline {pipeline_id} not found", status_code=404)

    def list_pipelines(self, project, ref):
        self._check("list_pipelines", ref)
        return sorted(self.pipelines.get(ref, []), key=lambda p: p.id, reverse=True)

    def fetch_job(self, project, job_id):
        self._check("fetch_job", job_id)
        for jobs in self.jobs.values():
            for job in jobs:
                if job.id == job_id:
                    return job
        raise BackendError(f"job {job_id} not found", status_code=404)

    def list_pipeline_jobs(self, project, pipeline, scopes=(), include_retried=False):
        self._check("list_pipeline_jobs", pipeline.id, tuple(scopes), include_retried)
        jobs = self.jobs.get(pipeline.id, [])
        scopes = set(scopes)
        return [job for job in jobs if not scopes or job.status in scopes]

    def fetch_job_log(self, project, job):
        self._check("fetch_job_log", job.id)
        return self.logs.get(job.id, b"")

    def create_pipeline(self, project, ref):
        self._check("create_pipeline", ref)
        pipeline = Pipeline(id=1000, status=Status.CREATED, ref=ref, web_url="https://gitlab.test/p/1000")
        return self.add_pipeline(ref, pipeline)

    def cancel_pipeline(self, project, pipeline_id):
        self._check("cancel_pipeline", pipeline_id)
        pipeline = self.fetch_pipeline(project, pipeline_id)
        return pipeline.model_copy(update={"status": Status.CANCELED})

    def retry_pipeline(self, project, pipeline_id):
        self._check("retry_pipeline", pipeline_id)
        pipeline = self.fetch_pipeline(project, pipeline_id)
        return pipeline.model_copy(update={"status": Status.PENDING})

    def protect_tag(self, project, pattern):
        self._check("protect_tag", pattern)
        self.protected.append(pattern)
        return pattern

    def unprotect_tag(self, project, pattern):
        self._check("unprotect_tag", pattern)
        if pattern not in self.protected:
            raise BackendError(f"protected tag {pattern} not found", status_code=404)
        self.protected.remove(pattern)

    def list_protected_branches(self, project):
        self._check("list_protected_branches")
        return list(self.protected_branches)

    def protect_branch(self, project, name, allow_force_push=False):
        self._check("protect_branch", name, allow_force_push)
        if name in self.protected_branches:
            raise BackendError(f"protected branch {name} already exists", status_code=409)
        self.protected_branches[name] = allow_force_push
        return name

    def unprotect_branch(self, project, name):
        self._check("unprotect_branch", name)
        if name not in self.protected_branches:
            raise BackendError(f"protected branch {name} not found", status_code=404)
        del self.protected_branches[name]

    def archive_project(self, project):
        self._check("archive_project", project.id)
        return project.model_copy(update={"archived": True})

    def unarchive_project(self, project):
        self._check("unarchive_project", project.id)
        return project.model_copy(update={"archived": False})

def make_job(job_id: int, status: Status, name: Optional[str] = None, stage: str = "test") -> Job:
    return Job(
        id=job_id,
        name=name or f"job-{job_id}",
        stage=stage,
        status=status,
        web_url=f"https://gitlab.test/group/app/-/jobs/{job_id}",
    )

def make_pipeline(pipeline_id: int, status: Status, ref: str = "main") -> Pipeline:
    return Pipeline(
        id=pipeline_id,
        status=status,
        ref=ref,
        sha="0123456789abcdef",
        web_url=f"https://gitlab.test/group/app/-/pipelines/{pipeline_id}",
    )

@pytest.fixture
def project() -> Project:
    return Project(
        id=42,
        name="app",
        path_with_namespace="group/app",
        web_url="https://gitlab.test/group/app",
    )

@pytest.fixture
def backend(project) -> FakeBackend:
    fake = FakeBackend()
    fake.add_project(project)
    return fake
