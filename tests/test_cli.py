"""
Test suite for the main CLI interface.
"""

import json
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from asanacli import __version__
from asanacli.asana_api.client import AsanaClient
from asanacli.asana_api.data_models import CreatedTask, Project, User, Workspace
from asanacli.asana_api.errors import RejectedError
from asanacli.cli import app
from asanacli.utils.config import get_config
from asanacli.utils.drafts import load_draft, save_draft

runner = CliRunner()

TASK = CreatedTask(gid="T1", name="Ship report", permalink_url="https://app.asana.com/0/0/T1")


@pytest.fixture
def fake_client():
    client = MagicMock()
    client.list_workspaces.return_value = [Workspace(gid="W1", name="Acme"), Workspace(gid="W2", name="Personal")]
    client.list_projects.return_value = [
        Project(gid="P1", name="Launch", custom_field_settings=[{"custom_field": {
            "gid": "F1",
            "name": "Priority",
            "resource_subtype": "enum",
            "enum_options": [{"gid": "E1", "name": "High"}],
        }}]),
        Project(gid="P2", name="Roadmap"),
    ]
    client.list_users.return_value = [User(gid="U1", name="Ada Lovelace"), User(gid="U2", name="Grace Hopper")]
    client.get_me.return_value = User(gid="U9", name="Me Myself")
    client.create_task.return_value = TASK
    with patch.object(AsanaClient, "from_config", return_value=client):
        yield client


def _sent_request(client):
    return client.create_task.call_args.args[0].to_payload()


class TestCLI:
    """Test cases for the main CLI application."""

    def test_cli_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "Asana" in result.stdout

    def test_cli_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    @patch("asanacli.cli.load_env_vars")
    def test_env_loading(self, mock_load_env, fake_client):
        runner.invoke(app, ["workspaces"])
        mock_load_env.assert_called_once()

    def test_invalid_command(self):
        result = runner.invoke(app, ["nonexistent-command"])
        assert result.exit_code != 0


class TestAddCommand:
    def test_minimal_task(self, fake_client):
        result = runner.invoke(app, ["add", "--workspace", "Acme", "--name", "Ship report", "--no-signature"])

        assert result.exit_code == 0, result.stdout
        assert _sent_request(fake_client) == {"workspace": "W1", "name": "Ship report", "custom_fields": {}}
        assert "Created task" in result.stdout
        assert TASK.permalink_url in result.stdout

    def test_full_task(self, fake_client):
        result = runner.invoke(app, [
            "add",
            "-w", "W1",
            "-n", "Ship report",
            "-p", "Launch",
            "-p", "Roadmap",
            "-d", "Draft v1",
            "-a", "grace hopper",
            "--due", "2024-05-01",
            "-f", "Priority=High",
            "--signature",
        ])

        assert result.exit_code == 0, result.stdout
        sent = _sent_request(fake_client)
        assert sent["projects"] == ["P1", "P2"]
        assert sent["assignee"] == "U2"
        assert sent["due_on"] == "2024-05-01"
        assert sent["custom_fields"] == {"F1": "E1"}
        assert sent["html_notes"].startswith("<body>Draft v1\n--\n")
        fake_client.list_projects.assert_called_once_with("W1")

    def test_assign_to_me(self, fake_client):
        result = runner.invoke(app, ["add", "-w", "Acme", "-n", "Ship report", "-a", "me"])
        assert result.exit_code == 0, result.stdout
        assert _sent_request(fake_client)["assignee"] == "U9"
        fake_client.list_users.assert_not_called()

    def test_signature_preference_from_environment(self, fake_client, monkeypatch):
        monkeypatch.setenv("ASANACLI_SIGNATURE", "true")
        runner.invoke(app, ["add", "-w", "Acme", "-n", "Ship report", "-d", "Draft v1"])
        assert "--" in _sent_request(fake_client)["html_notes"]

    def test_missing_required_fields(self, fake_client):
        result = runner.invoke(app, ["add", "--description", "no name"])
        assert result.exit_code == 2
        assert "--workspace and --name required" in result.stdout
        fake_client.create_task.assert_not_called()

    def test_success_remembers_selection_and_clears_draft(self, fake_client):
        save_draft({"name": "Old draft", "workspace": "Acme"})

        result = runner.invoke(app, ["add", "-w", "Acme", "-n", "Ship report", "-p", "Launch", "-a", "Ada"])

        assert result.exit_code == 0, result.stdout
        assert load_draft() == {}
        assert get_config() == {"workspace": "W1", "projects": ["P1"], "assignee": "U1"}

    def test_remembered_selection_is_reused(self, fake_client):
        runner.invoke(app, ["add", "-w", "Acme", "-n", "First", "-p", "Launch"])
        fake_client.create_task.reset_mock()

        result = runner.invoke(app, ["add", "-n", "Second"])

        assert result.exit_code == 0, result.stdout
        sent = _sent_request(fake_client)
        assert sent["workspace"] == "W1"
        assert sent["projects"] == ["P1"]

    def test_blank_project_clears_remembered_selection(self, fake_client):
        runner.invoke(app, ["add", "-w", "Acme", "-n", "First", "-p", "Launch"])
        fake_client.create_task.reset_mock()
        fake_client.list_projects.reset_mock()

        result = runner.invoke(app, ["add", "-w", "Acme", "-n", "No project", "-p", ""])

        assert result.exit_code == 0, result.stdout
        assert "projects" not in _sent_request(fake_client)
        fake_client.list_projects.assert_not_called()

    def test_corrupt_config_is_reported(self, fake_client, asanacli_home):
        asanacli_home.mkdir(parents=True)
        (asanacli_home / "config.json").write_text("{not json")

        result = runner.invoke(app, ["add", "-n", "Ship report"])

        assert result.exit_code == 1
        assert "Failed to create task" in result.stdout
        fake_client.create_task.assert_not_called()

    def test_rejection_saves_draft(self, fake_client):
        fake_client.create_task.side_effect = RejectedError("Invalid custom field", status_code=400)

        result = runner.invoke(app, ["add", "-w", "Acme", "-n", "Ship report", "-d", "Draft v1"])

        assert result.exit_code == 1
        assert "Failed to create task" in result.stdout
        assert "Invalid custom field" in result.stdout
        assert load_draft() == {"workspace": "Acme", "name": "Ship report", "description": "Draft v1"}

    def test_resume_from_saved_draft(self, fake_client):
        save_draft({"workspace": "Acme", "name": "Ship report", "description": "Draft v1"})

        result = runner.invoke(app, ["add", "--no-signature"])

        assert result.exit_code == 0, result.stdout
        assert _sent_request(fake_client)["html_notes"] == "<body>Draft v1</body>"

    def test_unknown_project_fails_before_submitting(self, fake_client):
        result = runner.invoke(app, ["add", "-w", "Acme", "-n", "Ship report", "-p", "zzzz"])
        assert result.exit_code == 1
        assert "No project matching 'zzzz'" in result.stdout
        fake_client.create_task.assert_not_called()

    def test_json_output(self, fake_client):
        result = runner.invoke(app, ["add", "-w", "Acme", "-n", "Ship report", "--json"])
        assert result.exit_code == 0, result.stdout
        assert json.loads(result.stdout)["gid"] == "T1"

    @patch("asanacli.commands.add_command.typer.launch")
    def test_open_in_browser(self, mock_launch, fake_client):
        result = runner.invoke(app, ["add", "-w", "Acme", "-n", "Ship report", "--open"])
        assert result.exit_code == 0, result.stdout
        mock_launch.assert_called_once_with(TASK.permalink_url)


class TestListCommands:
    def test_workspaces_json(self, fake_client):
        result = runner.invoke(app, ["workspaces", "--json"])
        assert result.exit_code == 0
        assert [w["gid"] for w in json.loads(result.stdout)] == ["W1", "W2"]

    def test_users_table(self, fake_client):
        result = runner.invoke(app, ["users", "--workspace", "Acme"])
        assert result.exit_code == 0
        assert "Grace Hopper" in result.stdout
        fake_client.list_users.assert_called_once_with("W1")

    def test_projects_need_a_workspace(self, fake_client):
        result = runner.invoke(app, ["projects"])
        assert result.exit_code == 1
        assert "--workspace" in result.stdout

    def test_fields(self, fake_client):
        result = runner.invoke(app, ["fields", "-w", "Acme", "-p", "Launch", "--json"])
        assert result.exit_code == 0
        fields = json.loads(result.stdout)
        assert fields[0]["name"] == "Priority"

    def test_api_error_is_reported(self, fake_client):
        fake_client.list_workspaces.side_effect = RejectedError("Not Authorized", status_code=401)
        result = runner.invoke(app, ["workspaces"])
        assert result.exit_code == 1
        assert "Not Authorized" in result.stdout


class TestShowCommand:
    def test_show(self, fake_client):
        fake_client.get_task.return_value = CreatedTask(
            gid="T1",
            name="Ship report",
            permalink_url="https://app.asana.com/0/0/T1",
            assignee={"gid": "U1", "name": "Ada Lovelace"},
            due_on="2024-05-01",
        )
        result = runner.invoke(app, ["show", "T1"])
        assert result.exit_code == 0
        assert "Ada Lovelace" in result.stdout
        assert "2024-05-01" in result.stdout
