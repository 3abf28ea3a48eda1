"""
Remote API access: the Backend port and its HTTP implementation.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Protocol, Union
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from glx.src.models.gitlab import Branch, Job, Pipeline, Project, ProtectedRef, Tag
from glx.src.models.status import Status
from glx.src.services.errors import BackendError

logger = logging.getLogger(__name__)

class Backend(Protocol):
    def fetch_project(self, project_id: Union[str, int]) -> Project: ...

    def fetch_tag(self, project: Project, name: str) -> Tag: ...

    def fetch_branch(self, project: Project, name: str) -> Branch: ...

    def fetch_pipeline(self, project: Project, pipeline_id: int) -> Pipeline: ...

    def list_pipelines(self, project: Project, ref: str) -> List[Pipeline]: ...

    def fetch_job(self, project: Project, job_id: int) -> Job: ...

    def list_pipeline_jobs(
        self,
        project: Project,
        pipeline: Pipeline,
        scopes: Iterable[Status] = (),
        include_retried: bool = False,
    ) -> List[Job]: ...

    def fetch_job_log(self, project: Project, job: Job) -> bytes: ...

    def create_pipeline(self, project: Project, ref: str) -> Pipeline: ...

    def cancel_pipeline(self, project: Project, pipeline_id: int) -> Pipeline: ...

    def retry_pipeline(self, project: Project, pipeline_id: int) -> Pipeline: ...

    def protect_tag(self, project: Project, pattern: str) -> str: ...

    def unprotect_tag(self, project: Project, pattern: str) -> None: ...

    def list_protected_branches(self, project: Project) -> List[str]: ...

    def protect_branch(self, project: Project, name: str, allow_force_push: bool = False) -> str: ...

    def unprotect_branch(self, project: Project, name: str) -> None: ...

    def archive_project(self, project: Project) -> Project: ...

    def unarchive_project(self, project: Project) -> Project: ...

def encode_id(value: Union[str, int]) -> str:
    """Encode a numeric id or a namespace/name path for use in a URL."""
    return quote(str(value), safe="")

def _validate(model, data: Any):
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise BackendError(f"Unexpected {model.__name__} record: {e}") from e

class GitLabBackend:
    """Backend performing authenticated calls to the GitLab REST API (v4)."""

    def __init__(
        self,
        host: str,
        token: str = "",
        timeout: float = 30.0,
        per_page: int = 100,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        headers = {"Accept": "application/json"}
        if token:
            headers["PRIVATE-TOKEN"] = token
        self.per_page = per_page
        self.client = httpx.Client(
            base_url=host.rstrip("/") + "/api/v4",
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    def close(self):
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        logger.debug(f"{method} {path}")
        try:
            response = self.client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise BackendError(
                f"{method} {path} failed with status {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise BackendError(f"{method} {path} failed: {e}") from e
        return response

    def _json(self, method: str, path: str, **kwargs) -> Any:
        response = self._request(method, path, **kwargs)
        try:
            return response.json()
        except ValueError as e:
            raise BackendError(
                f"{method} {path} returned a response that is not JSON",
                status_code=response.status_code,
            ) from e

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._json("GET", path, params=params)

    def _get_all(self, path: str, params: Optional[Dict[str, Any]] = None) -> List[Any]:
        """Collect every page of a list endpoint by following X-Next-Page."""
        params = dict(params or {})
        params["per_page"] = self.per_page
        items: List[Any] = []
        page = "1"
        while page:
            params["page"] = page
            response = self._request("GET", path, params=params)
            try:
                items.extend(response.json())
            except (ValueError, TypeError) as e:
                raise BackendError(
                    f"GET {path} returned an unexpected page", status_code=response.status_code
                ) from e
            page = response.headers.get("X-Next-Page", "")
        return items

    def _project_path(self, project: Project) -> str:
        return f"/projects/{project.id}"

    def fetch_project(self, project_id: Union[str, int]) -> Project:
        return _validate(Project, self._get(f"/projects/{encode_id(project_id)}"))

    def fetch_tag(self, project: Project, name: str) -> Tag:
        data = self._get(f"{self._project_path(project)}/repository/tags/{encode_id(name)}")
        return _validate(Tag, data)

    def fetch_branch(self, project: Project, name: str) -> Branch:
        data = self._get(f"{self._project_path(project)}/repository/branches/{encode_id(name)}")
        return _validate(Branch, data)

    def fetch_pipeline(self, project: Project, pipeline_id: int) -> Pipeline:
        data = self._get(f"{self._project_path(project)}/pipelines/{pipeline_id}")
        return _validate(Pipeline, data)

    def list_pipelines(self, project: Project, ref: str) -> List[Pipeline]:
        # A single page is enough: only the newest entries are ever used
        data = self._get(
            f"{self._project_path(project)}/pipelines",
            params={"ref": ref, "order_by": "id", "sort": "desc", "per_page": self.per_page},
        )
        return [_validate(Pipeline, item) for item in data]

    def fetch_job(self, project: Project, job_id: int) -> Job:
        return _validate(Job, self._get(f"{self._project_path(project)}/jobs/{job_id}"))

    def list_pipeline_jobs(
        self,
        project: Project,
        pipeline: Pipeline,
        scopes: Iterable[Status] = (),
        include_retried: bool = False,
    ) -> List[Job]:
        params: Dict[str, Any] = {"include_retried": str(include_retried).lower()}
        scope_values = [Status(scope).value for scope in scopes]
        if scope_values:
            params["scope[]"] = scope_values
        data = self._get_all(f"{self._project_path(project)}/pipelines/{pipeline.id}/jobs", params)
        return [_validate(Job, item) for item in data]

    def fetch_job_log(self, project: Project, job: Job) -> bytes:
        response = self._request("GET", f"{self._project_path(project)}/jobs/{job.id}/trace")
        return response.content

    def create_pipeline(self, project: Project, ref: str) -> Pipeline:
        data = self._json("POST", f"{self._project_path(project)}/pipeline", params={"ref": ref})
        return _validate(Pipeline, data)

    def cancel_pipeline(self, project: Project, pipeline_id: int) -> Pipeline:
        data = self._json("POST", f"{self._project_path(project)}/pipelines/{pipeline_id}/cancel")
        return _validate(Pipeline, data)

    def retry_pipeline(self, project: Project, pipeline_id: int) -> Pipeline:
        data = self._json("POST", f"{self._project_path(project)}/pipelines/{pipeline_id}/retry")
        return _validate(Pipeline, data)

    def protect_tag(self, project: Project, pattern: str) -> str:
        data = self._json(
            "POST", f"{self._project_path(project)}/protected_tags", params={"name": pattern}
        )
        return _validate(ProtectedRef, data).name

    def unprotect_tag(self, project: Project, pattern: str) -> None:
        self._request(
            "DELETE", f"{self._project_path(project)}/protected_tags/{encode_id(pattern)}"
        )

    def list_protected_branches(self, project: Project) -> List[str]:
        data = self._get_all(f"{self._project_path(project)}/protected_branches")
        return [_validate(ProtectedRef, item).name for item in data]

    def protect_branch(self, project: Project, name: str, allow_force_push: bool = False) -> str:
        data = self._json(
            "POST",
            f"{self._project_path(project)}/protected_branches",
            params={"name": name, "allow_force_push": str(allow_force_push).lower()},
        )
        return _validate(ProtectedRef, data).name

    def unprotect_branch(self, project: Project, name: str) -> None:
        self._request(
            "DELETE", f"{self._project_path(project)}/protected_branches/{encode_id(name)}"
        )

    def archive_project(self, project: Project) -> Project:
        return _validate(Project, self._json("POST", f"{self._project_path(project)}/archive"))

    def unarchive_project(self, project: Project) -> Project:
        return _validate(Project, self._json("POST", f"{self._project_path(project)}/unarchive"))
