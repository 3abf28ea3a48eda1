"""
Records returned by the remote API.
"""

from datetime import datetime
from typing import Optional, Union

from pydantic import AliasPath, BaseModel, Field

from glx.src.models.status import Status

class Project(BaseModel):
    id: int
    name: str
    path_with_namespace: str
    web_url: str = ""
    archived: bool = False

class Tag(BaseModel):
    name: str
    commit_sha: str = Field(default="", validation_alias=AliasPath("commit", "id"))

    class Config:
        populate_by_name = True

class Branch(BaseModel):
    name: str
    commit_sha: Optional[str] = Field(default=None, validation_alias=AliasPath("commit", "id"))

    class Config:
        populate_by_name = True

Ref = Union[Tag, Branch]

class ProtectedRef(BaseModel):
    """A protected tag or branch name pattern."""
    name: str

class Pipeline(BaseModel):
    id: int
    status: Status
    ref: Optional[str] = None
    sha: str = ""
    created_at: Optional[datetime] = None
    web_url: str = ""

class Job(BaseModel):
    id: int
    name: str
    stage: str = ""
    status: Status
    pipeline_id: Optional[int] = Field(default=None, validation_alias=AliasPath("pipeline", "id"))
    created_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    web_url: str = ""

    class Config:
        populate_by_name = True
