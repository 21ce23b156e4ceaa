import json
from datetime import date, timedelta

import pytest

from asanacli.asana_api.errors import ConfigError
from asanacli.utils.config import get_config, save_config, signature_enabled
from asanacli.utils.dates import parse_due_date
from asanacli.utils.drafts import clear_draft, load_draft, save_draft


class TestParseDueDate:
    def test_iso_date(self):
        assert parse_due_date("2024-05-01") == date(2024, 5, 1)

    def test_iso_datetime_drops_time(self):
        assert parse_due_date("2024-05-01T23:59:00-07:00") == date(2024, 5, 1)

    def test_natural_language(self):
        assert parse_due_date("tomorrow") == date.today() + timedelta(days=1)

    def test_empty(self):
        assert parse_due_date(None) is None
        assert parse_due_date("  ") is None

    def test_nonsense(self):
        with pytest.raises(ValueError):
            parse_due_date("qwxzv plmk")


class TestConfig:
    def test_save_merges_and_invalidates_cache(self, asanacli_home):
        assert get_config() == {}
        save_config({"workspace": "W1"})
        save_config({"assignee": "U1"})

        assert get_config() == {"workspace": "W1", "assignee": "U1"}
        on_disk = json.loads((asanacli_home / "config.json").read_text())
        assert on_disk == {"workspace": "W1", "assignee": "U1"}

    def test_corrupt_config(self, asanacli_home):
        asanacli_home.mkdir(parents=True)
        (asanacli_home / "config.json").write_text("{not json")
        with pytest.raises(ConfigError):
            get_config()

    def test_signature_from_env_wins(self, monkeypatch):
        save_config({"signature": True})
        assert signature_enabled() is True
        monkeypatch.setenv("ASANACLI_SIGNATURE", "no")
        assert signature_enabled() is False
        monkeypatch.setenv("ASANACLI_SIGNATURE", "yes")
        assert signature_enabled() is True


class TestDrafts:
    def test_round_trip_skips_empty_values(self):
        save_draft({"name": "Ship report", "description": "", "projects": [], "workspace": "W1", "bogus": 1})
        assert load_draft() == {"name": "Ship report", "workspace": "W1"}

    def test_clear(self):
        save_draft({"name": "Ship report"})
        clear_draft()
        assert load_draft() == {}
        clear_draft()

    def test_unreadable_draft_is_ignored(self, asanacli_home):
        asanacli_home.mkdir(parents=True)
        (asanacli_home / "draft.json").write_text("[oops")
        assert load_draft() == {}
