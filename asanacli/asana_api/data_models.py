"""
Data models representing Asana objects (tasks, projects, etc.).
"""

from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

FieldValue = Union[str, int, float]


class AsanaModel(BaseModel):
    # Asana returns more fields than we model; keep them.
    model_config = ConfigDict(extra="allow")

    gid: str
    name: Optional[str] = None


class Workspace(AsanaModel):
    pass


class User(AsanaModel):
    email: Optional[str] = None


class EnumOption(AsanaModel):
    color: Optional[str] = None
    enabled: bool = True


class CustomField(AsanaModel):
    resource_subtype: Optional[str] = None
    enum_options: List[EnumOption] = Field(default_factory=list)


class CustomFieldSetting(BaseModel):
    model_config = ConfigDict(extra="allow")

    custom_field: CustomField


class Project(AsanaModel):
    color: Optional[str] = None
    archived: Optional[bool] = None
    custom_field_settings: List[CustomFieldSetting] = Field(default_factory=list)


class CreatedTask(AsanaModel):
    """A task as returned by Asana. Only gid and permalink_url are relied on."""

    permalink_url: str


class DraftTask(BaseModel):
    """User-entered task data, not yet submitted.

    ``custom_field_values`` is keyed by bare custom field gid.
    """

    workspace_id: str
    name: str
    project_ids: List[str] = Field(default_factory=list)
    description: str = ""
    assignee_id: Optional[str] = None
    due_date: Optional[Union[datetime, date]] = None
    custom_field_values: Dict[str, Optional[FieldValue]] = Field(default_factory=dict)


class TaskCreationRequest(BaseModel):
    """Wire shape of a create-task call. Unset optional keys are never sent."""

    model_config = ConfigDict(frozen=True)

    workspace: str
    name: str
    custom_fields: Dict[str, FieldValue] = Field(default_factory=dict)
    projects: Optional[List[str]] = None
    html_notes: Optional[str] = None
    assignee: Optional[str] = None
    due_on: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)
