from unittest.mock import MagicMock

import pytest

from asanacli.asana_api.client import AsanaClient


def make_response(status_code=200, payload=None):
    """Fake requests.Response; payload=None means the body is not JSON."""
    response = MagicMock()
    response.status_code = status_code
    if payload is None:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def client(session):
    return AsanaClient("token-123", base_url="https://asana.test/api/1.0", timeout=5, session=session)


@pytest.fixture(autouse=True)
def asanacli_home(tmp_path, monkeypatch):
    """Keep config and drafts out of the real home directory."""
    home = tmp_path / "asanacli-home"
    monkeypatch.setenv("ASANACLI_HOME", str(home))
    monkeypatch.delenv("ASANACLI_SIGNATURE", raising=False)
    monkeypatch.delenv("ASANA_TIMEOUT", raising=False)
    monkeypatch.delenv("ASANA_BASE_URL", raising=False)
    monkeypatch.setenv("ASANA_ACCESS_TOKEN", "token-123")
    return home
