import json

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..asana_api.client import AsanaClient
from ..asana_api.errors import AsanaError


def _name_of(value) -> str:
    if isinstance(value, dict):
        return value.get("name") or value.get("gid") or ""
    return ""


def handle_show(task_gid: str, json_output: bool = False):
    """Show a single task, e.g. one just created."""
    console = Console()
    try:
        task = AsanaClient.from_config().get_task(task_gid)
    except AsanaError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)

    data = task.model_dump(mode="json")
    if json_output:
        print(json.dumps(data, indent=2))
        return

    table = Table(show_header=False, title=task.name or task.gid)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("ID", task.gid)
    table.add_row("Workspace", _name_of(data.get("workspace")))
    table.add_row("Projects", ", ".join(_name_of(p) for p in data.get("projects") or []))
    table.add_row("Assignee", _name_of(data.get("assignee")) or "Unassigned")
    table.add_row("Due", data.get("due_on") or "")
    table.add_row("Completed", "yes" if data.get("completed") else "no")
    table.add_row("URL", task.permalink_url)
    console.print(table)
    if data.get("notes"):
        console.print(data["notes"], highlight=False)
