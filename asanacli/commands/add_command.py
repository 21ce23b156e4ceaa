import json
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..asana_api.client import AsanaClient
from ..asana_api.custom_fields import collect_custom_fields, resolve_field_values
from ..asana_api.data_models import DraftTask
from ..asana_api.errors import AsanaError
from ..asana_api.lookups import NotFoundError, resolve_project, resolve_user, resolve_workspace
from ..asana_api.task_operations import SubmissionOptions, TaskSubmissionService
from ..utils.config import get_config, save_config, signature_enabled
from ..utils.dates import parse_due_date
from ..utils.drafts import clear_draft, load_draft, save_draft
from ..utils.logger import get_logger

log = get_logger(__name__)

ME = "me"


def gather_draft_values(
    name: Optional[str],
    workspace: Optional[str],
    projects: Optional[List[str]],
    description: Optional[str],
    assignee: Optional[str],
    due: Optional[str],
    fields: Optional[List[str]],
) -> Dict[str, Any]:
    """
    Merge command-line values over the saved draft. Projects and assignee
    stay None when neither gives them, so remembered ones can fill in;
    `-p ""` and `-a ""` clear them instead.
    """
    draft = load_draft()
    return {
        "name": name if name is not None else draft.get("name"),
        "workspace": workspace or draft.get("workspace") or get_config().get("workspace"),
        "projects": [p for p in projects if p.strip()] if projects else draft.get("projects"),
        "description": description if description is not None else draft.get("description", ""),
        "assignee": assignee if assignee is not None else draft.get("assignee"),
        "due": due if due is not None else draft.get("due"),
        "fields": fields or draft.get("fields") or [],
    }


def build_draft(client: AsanaClient, values: Dict[str, Any]) -> DraftTask:
    """Resolve names in ``values`` against Asana and build the DraftTask."""
    workspace = resolve_workspace(client.list_workspaces(), values["workspace"])

    project_queries = values["projects"]
    assignee_query = values["assignee"]
    cfg = get_config()
    # Remembered projects/assignee only make sense in the remembered workspace.
    if cfg.get("workspace") == workspace.gid:
        if project_queries is None:
            project_queries = cfg.get("projects")
        if assignee_query is None:
            assignee_query = cfg.get("assignee")

    selected_projects = []
    if project_queries:
        all_projects = client.list_projects(workspace.gid)
        selected_projects = [resolve_project(all_projects, q) for q in project_queries]

    assignee_id = None
    if assignee_query:
        if assignee_query.strip().lower() == ME:
            assignee_id = client.get_me().gid
        else:
            assignee_id = resolve_user(client.list_users(workspace.gid), assignee_query).gid

    custom_field_values = {}
    if values["fields"]:
        custom_field_values = resolve_field_values(collect_custom_fields(selected_projects), values["fields"])

    return DraftTask(
        workspace_id=workspace.gid,
        name=values["name"],
        project_ids=[p.gid for p in selected_projects],
        description=values["description"] or "",
        assignee_id=assignee_id,
        due_date=parse_due_date(values["due"]),
        custom_field_values=custom_field_values,
    )


def handle_add(
    name: Optional[str] = None,
    workspace: Optional[str] = None,
    projects: Optional[List[str]] = None,
    description: Optional[str] = None,
    assignee: Optional[str] = None,
    due: Optional[str] = None,
    fields: Optional[List[str]] = None,
    signature: Optional[bool] = None,
    open_task: bool = False,
    json_output: bool = False,
):
    """
    Creates a new task in Asana from the given options and the saved draft.
    """
    console = Console()
    try:
        values = gather_draft_values(name, workspace, projects, description, assignee, due, fields)
    except AsanaError as e:
        console.print(f"[red]Failed to create task:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)

    missing = [label for label, key in (("--workspace", "workspace"), ("--name", "name")) if not values[key]]
    if missing:
        console.print(f"[red]Error:[/red] {' and '.join(missing)} required.")
        raise typer.Exit(code=2)

    try:
        client = AsanaClient.from_config()
        draft = build_draft(client, values)
        log.debug("Resolved draft: %s", draft)
    except (AsanaError, NotFoundError, ValueError) as e:
        save_draft(values)
        console.print(f"[red]Failed to create task:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)

    options = SubmissionOptions(append_signature=signature if signature is not None else signature_enabled())
    with console.status("Creating task"):
        result = TaskSubmissionService(client).submit(draft, options)

    if not result.ok:
        save_draft(values)
        console.print(f"[red]Failed to create task:[/red] {escape(str(result.error))}")
        console.print("Your draft was saved; run `asanacli add` again to retry.")
        raise typer.Exit(code=1)

    task = result.task
    clear_draft()
    save_config({
        "workspace": draft.workspace_id,
        "projects": draft.project_ids,
        "assignee": draft.assignee_id,
    })

    if json_output:
        print(json.dumps(task.model_dump(mode="json"), indent=2))
    else:
        console.print(f"[green]Created task[/green] '{escape(task.name or draft.name)}' (ID: {task.gid})")
        console.print(task.permalink_url, soft_wrap=True, highlight=False)
    if open_task:
        typer.launch(task.permalink_url)
