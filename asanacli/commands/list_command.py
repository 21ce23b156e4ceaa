"""
Read-only listings of the reference data a new task can point at.
"""
import json
from typing import List, Optional, Sequence

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..asana_api.client import AsanaClient
from ..asana_api.custom_fields import collect_custom_fields
from ..asana_api.data_models import AsanaModel
from ..asana_api.errors import AsanaError
from ..asana_api.lookups import NotFoundError, resolve_project, resolve_workspace
from ..utils.config import get_config


def _fail(console: Console, message) -> None:
    console.print(f"[red]Error:[/red] {escape(str(message))}")
    raise typer.Exit(code=1)


def _print_items(console: Console, title: str, items: Sequence[AsanaModel], columns: Sequence[str], json_output: bool):
    if json_output:
        print(json.dumps([item.model_dump(mode="json") for item in items], indent=2))
        return
    if not items:
        console.print(f"No {title.lower()} found.")
        return
    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    for column in columns:
        table.add_column(column.replace("_", " ").title())
    for item in items:
        table.add_row(item.gid, *[str(getattr(item, c, None) or "") for c in columns])
    console.print(table)


def _workspace_gid(client: AsanaClient, workspace: Optional[str]) -> str:
    workspace = workspace or get_config().get("workspace")
    if not workspace:
        raise NotFoundError("No workspace given and none remembered; pass --workspace.")
    return resolve_workspace(client.list_workspaces(), workspace).gid


def handle_workspaces(json_output: bool = False):
    console = Console()
    try:
        workspaces = AsanaClient.from_config().list_workspaces()
    except AsanaError as e:
        _fail(console, e)
    _print_items(console, "Workspaces", workspaces, ["name"], json_output)


def handle_projects(workspace: Optional[str] = None, json_output: bool = False):
    console = Console()
    try:
        client = AsanaClient.from_config()
        projects = client.list_projects(_workspace_gid(client, workspace))
    except (AsanaError, NotFoundError) as e:
        _fail(console, e)
    _print_items(console, "Projects", projects, ["name", "color"], json_output)


def handle_users(workspace: Optional[str] = None, json_output: bool = False):
    console = Console()
    try:
        client = AsanaClient.from_config()
        users = client.list_users(_workspace_gid(client, workspace))
    except (AsanaError, NotFoundError) as e:
        _fail(console, e)
    _print_items(console, "Users", users, ["name", "email"], json_output)


def handle_me(json_output: bool = False):
    console = Console()
    try:
        me = AsanaClient.from_config().get_me()
    except AsanaError as e:
        _fail(console, e)
    _print_items(console, "Me", [me], ["name", "email"], json_output)


def handle_fields(workspace: Optional[str] = None, projects: Optional[List[str]] = None, json_output: bool = False):
    """List the custom fields of the given projects, with enum options."""
    console = Console()
    if not projects:
        _fail(console, "At least one --project is required.")
    try:
        client = AsanaClient.from_config()
        all_projects = client.list_projects(_workspace_gid(client, workspace))
        selected = [resolve_project(all_projects, q) for q in projects]
    except (AsanaError, NotFoundError) as e:
        _fail(console, e)

    fields = collect_custom_fields(selected)
    if json_output:
        print(json.dumps([f.model_dump(mode="json") for f in fields], indent=2))
        return
    if not fields:
        console.print("No custom fields on the selected projects.")
        return
    table = Table(title="Custom fields")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Options")
    for field in fields:
        options = ", ".join(o.name for o in field.enum_options if o.enabled and o.name)
        table.add_row(field.gid, field.name or "", field.resource_subtype or "", options)
    console.print(table)
