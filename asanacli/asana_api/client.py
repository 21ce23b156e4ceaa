"""Thin REST client for the parts of the Asana API the CLI needs."""
from typing import Any, Dict, Iterator, List, Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from ..utils.config import get_access_token, get_base_url, get_timeout, DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from ..utils.logger import get_logger
from .data_models import CreatedTask, Project, TaskCreationRequest, User, Workspace
from .errors import ConfigError, MalformedResponseError, NetworkError, RejectedError

log = get_logger(__name__)

PAGE_LIMIT = 100  # Asana max per page

PROJECT_FIELDS = ",".join([
    "name",
    "color",
    "archived",
    "custom_field_settings.custom_field.name",
    "custom_field_settings.custom_field.resource_subtype",
    "custom_field_settings.custom_field.enum_options.name",
    "custom_field_settings.custom_field.enum_options.color",
    "custom_field_settings.custom_field.enum_options.enabled",
])
TASK_FIELDS = "name,permalink_url,due_on,completed,assignee.name,projects.name,workspace.name,notes"

M = TypeVar("M", bound=BaseModel)


def _error_message(body: Any, status_code: int) -> str:
    """Pull the first error message out of an Asana error payload."""
    if isinstance(body, dict):
        errors = body.get("errors") or []
        if errors and isinstance(errors[0], dict) and errors[0].get("message"):
            return errors[0]["message"]
    return f"Asana returned HTTP {status_code}"


def _parse(model: Type[M], data: Any) -> M:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise MalformedResponseError(f"Unexpected {model.__name__} payload from Asana: {e}") from e


class AsanaClient:
    """
    Calls the Asana REST API with a personal access token.

    Every method issues its request(s) once; nothing is retried.
    """

    def __init__(
        self,
        access_token: Optional[str],
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        if not access_token:
            raise ConfigError(
                "ASANA_ACCESS_TOKEN is not set. Add it to $HOME/.asanacli.env or your environment."
            )
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/json",
        })

    @classmethod
    def from_config(cls) -> "AsanaClient":
        return cls(get_access_token(), base_url=get_base_url(), timeout=get_timeout())

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        log.debug("%s %s", method, path)
        try:
            response = self.session.request(
                method,
                f"{self.base_url}{path}",
                params=params,
                json=json,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise NetworkError(f"Could not reach Asana: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if not 200 <= response.status_code < 300:
            raise RejectedError(_error_message(body, response.status_code), status_code=response.status_code)
        if not isinstance(body, dict) or "data" not in body:
            raise MalformedResponseError("Asana response has no data payload")
        return body

    def _paginate(self, path: str, params: Optional[Dict[str, Any]] = None) -> Iterator[Any]:
        params = {**(params or {}), "limit": PAGE_LIMIT}
        while True:
            body = self._request("GET", path, params=params)
            data = body["data"]
            if not isinstance(data, list):
                raise MalformedResponseError(f"Expected a list from {path}")
            yield from data
            next_page = body.get("next_page")
            if not next_page or not next_page.get("offset"):
                break
            params = {**params, "offset": next_page["offset"]}

    def create_task(self, request: TaskCreationRequest) -> CreatedTask:
        body = self._request("POST", "/tasks", json={"data": request.to_payload()})
        task = _parse(CreatedTask, body["data"])
        log.info("Created task %s", task.gid)
        return task

    def get_task(self, task_gid: str) -> CreatedTask:
        body = self._request("GET", f"/tasks/{task_gid}", params={"opt_fields": TASK_FIELDS})
        return _parse(CreatedTask, body["data"])

    def list_workspaces(self) -> List[Workspace]:
        return [_parse(Workspace, w) for w in self._paginate("/workspaces", {"opt_fields": "name"})]

    def list_projects(self, workspace_gid: str) -> List[Project]:
        params = {"workspace": workspace_gid, "archived": "false", "opt_fields": PROJECT_FIELDS}
        return [_parse(Project, p) for p in self._paginate("/projects", params)]

    def list_users(self, workspace_gid: str) -> List[User]:
        params = {"workspace": workspace_gid, "opt_fields": "name,email"}
        return [_parse(User, u) for u in self._paginate("/users", params)]

    def get_me(self) -> User:
        body = self._request("GET", "/users/me", params={"opt_fields": "name,email"})
        return _parse(User, body["data"])
