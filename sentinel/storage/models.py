"""Pydantic models for the JSON documents Sentinel keeps on disk.

Field names are snake_case in Python and camelCase on disk; always
serialize with ``dump_document`` so the aliases are used.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

INBOX = "inbox"


class Document(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def dump_document(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class Task(Document):
    id: str
    description: str
    is_done: bool = Field(default=False, alias="isDone")
    created: int
    project_name: Optional[str] = Field(default=None, alias="projectName")
    completed: Optional[int] = None

    @property
    def group_key(self) -> str:
        """Project bucket used by reviews; tasks without a project land in the inbox."""
        return self.project_name if self.project_name is not None else INBOX


class Session(Document):
    id: str
    project_name: str = Field(alias="projectName")
    focus: str = ""
    session_start: int = Field(alias="sessionStart")
    session_end: Optional[int] = Field(default=None, alias="sessionEnd")

    @property
    def is_ongoing(self) -> bool:
        return self.session_end is None


class Project(Document):
    name: str
    working_dir: str = Field(alias="workingDir")
    on_start: Optional[str] = Field(default=None, alias="onStart")
    github: Optional[str] = None


class Store(Document):
    projects: dict[str, Project] = Field(default_factory=dict)
    ongoing_session: Optional[str] = Field(default=None, alias="ongoingSession")


class Config(Document):
    """Reserved; config.json is materialized as an empty object."""


class TaskIndex(Document):
    all: list[str] = Field(default_factory=list)
    inbox: list[str] = Field(default_factory=list)
    incomplete: list[str] = Field(default_factory=list)
    by_project: dict[str, list[str]] = Field(default_factory=dict, alias="byProject")
    by_creation_date: dict[str, list[str]] = Field(default_factory=dict, alias="byCreationDate")
    by_completion_date: dict[str, list[str]] = Field(default_factory=dict, alias="byCompletionDate")


class SessionIndex(Document):
    by_project: dict[str, list[str]] = Field(default_factory=dict, alias="byProject")
    by_date: dict[str, list[str]] = Field(default_factory=dict, alias="byDate")
    ordered: list[str] = Field(default_factory=list)
