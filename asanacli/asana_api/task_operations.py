"""Task creation: turn a draft into a create-task request and submit it."""
import html
from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, Optional, Union

from ..utils.logger import get_logger
from .client import AsanaClient
from .data_models import CreatedTask, DraftTask, FieldValue, TaskCreationRequest
from .errors import AsanaError, SubmissionError

log = get_logger(__name__)

SIGNATURE = "Created via <strong>asanacli</strong>"
NOTES_SEPARATOR = "\n--\n"


@dataclass(frozen=True)
class SubmissionOptions:
    append_signature: bool = False


@dataclass
class SubmissionResult:
    task: Optional[CreatedTask] = None
    error: Optional[SubmissionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.task is not None


def compose_html_notes(description: str, append_signature: bool) -> str:
    """Wrap the description, plus the signature if asked for, in a <body> envelope."""
    notes = f"<body>{html.escape(description, quote=False)}"
    if append_signature:
        if description:
            notes += NOTES_SEPARATOR
        notes += SIGNATURE
    return notes + "</body>"


def format_due_on(due: Union[datetime, date]) -> str:
    # The local calendar date as entered; no timezone conversion.
    if isinstance(due, datetime):
        due = due.date()
    return due.strftime("%Y-%m-%d")


def project_custom_fields(values: Dict[str, Optional[FieldValue]]) -> Dict[str, FieldValue]:
    """Drop custom field entries with no value."""
    return {gid: value for gid, value in values.items() if value is not None and value != ""}


def build_request(draft: DraftTask, options: SubmissionOptions) -> TaskCreationRequest:
    fields = {
        "workspace": draft.workspace_id,
        "name": draft.name,
        "custom_fields": project_custom_fields(draft.custom_field_values),
    }
    if draft.project_ids:
        fields["projects"] = list(draft.project_ids)
    if draft.description:
        fields["html_notes"] = compose_html_notes(draft.description, options.append_signature)
    if draft.assignee_id:
        fields["assignee"] = draft.assignee_id
    if draft.due_date:
        fields["due_on"] = format_due_on(draft.due_date)
    return TaskCreationRequest(**fields)


class TaskSubmissionService:
    """
    Submits one draft as one create-task call.

    Callers must check workspace and name are present first; failures come
    back in the result rather than as exceptions.
    """

    def __init__(self, client: AsanaClient):
        self.client = client

    def submit(self, draft: DraftTask, options: Optional[SubmissionOptions] = None) -> SubmissionResult:
        request = build_request(draft, options or SubmissionOptions())
        try:
            task = self.client.create_task(request)
        except AsanaError as e:
            log.debug("Task creation failed: %s", e)
            return SubmissionResult(error=e)
        return SubmissionResult(task=task)
