#!/usr/bin/env python3
import logging
from typing import List, Optional

import typer

from . import __version__
from .utils.config import load_env_vars
from .utils.logger import configure_logging

# Create app instance
app = typer.Typer(
    name="asanacli",
    help="asanacli - Create Asana tasks from the command line.",
    no_args_is_help=True,
)

from .commands.add_command import handle_add
from .commands.list_command import handle_fields, handle_me, handle_projects, handle_users, handle_workspaces
from .commands.show_command import handle_show


def _version_callback(value: bool):
    if value:
        print(f"asanacli {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log API requests."),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit."
    ),
):
    """asanacli - Create Asana tasks from the command line."""
    load_env_vars()
    configure_logging(logging.DEBUG if verbose else logging.WARNING)


@app.command("add")
def add(
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Short title for the task."),
    workspace: Optional[str] = typer.Option(None, "--workspace", "-w", help="Workspace name or ID (remembered)."),
    projects: Optional[List[str]] = typer.Option(None, "--project", "-p", help="Project name or ID. Repeatable."),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="More detail for the task."),
    assignee: Optional[str] = typer.Option(None, "--assignee", "-a", help="User name, ID, or 'me'. Empty for unassigned."),
    due: Optional[str] = typer.Option(None, "--due", help="Due date (YYYY-MM-DD or natural language)."),
    fields: Optional[List[str]] = typer.Option(None, "--field", "-f", help="Custom field as FIELD=VALUE. Repeatable."),
    signature: Optional[bool] = typer.Option(
        None, "--signature/--no-signature", help="Append the asanacli signature to the description."
    ),
    open_task: bool = typer.Option(False, "--open", help="Open the created task in the browser."),
    json_output: bool = typer.Option(False, "--json", help="Print the created task as JSON."),
):
    """Create a task in Asana. Missing values come from the saved draft."""
    handle_add(
        name=name,
        workspace=workspace,
        projects=projects,
        description=description,
        assignee=assignee,
        due=due,
        fields=fields,
        signature=signature,
        open_task=open_task,
        json_output=json_output,
    )


@app.command("workspaces")
def workspaces(json_output: bool = typer.Option(False, "--json", help="Output in JSON format.")):
    """List the workspaces you belong to."""
    handle_workspaces(json_output=json_output)


@app.command("projects")
def projects(
    workspace: Optional[str] = typer.Option(None, "--workspace", "-w", help="Workspace name or ID."),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format."),
):
    """List the active projects of a workspace."""
    handle_projects(workspace=workspace, json_output=json_output)


@app.command("users")
def users(
    workspace: Optional[str] = typer.Option(None, "--workspace", "-w", help="Workspace name or ID."),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format."),
):
    """List the users of a workspace."""
    handle_users(workspace=workspace, json_output=json_output)


@app.command("me")
def me(json_output: bool = typer.Option(False, "--json", help="Output in JSON format.")):
    """Show the user the access token belongs to."""
    handle_me(json_output=json_output)


@app.command("fields")
def fields(
    projects: Optional[List[str]] = typer.Option(None, "--project", "-p", help="Project name or ID. Repeatable."),
    workspace: Optional[str] = typer.Option(None, "--workspace", "-w", help="Workspace name or ID."),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format."),
):
    """List the custom fields a task in the given projects can set."""
    handle_fields(workspace=workspace, projects=projects, json_output=json_output)


@app.command("show")
def show(
    task_id: str = typer.Argument(..., help="Task ID."),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format."),
):
    """Show a task."""
    handle_show(task_id, json_output=json_output)


if __name__ == "__main__":
    app()
