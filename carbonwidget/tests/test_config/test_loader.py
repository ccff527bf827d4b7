"""Tests for config loading, snapshot persistence, and get/set."""

import json
import sqlite3
from pathlib import Path

import pytest
from pydantic import ValidationError

from carbonwidget.config.loader import (
    config_hash,
    get_config_value,
    load_config,
    redacted_dump,
    set_config_value,
    snapshot_config,
)
from carbonwidget.config.schema import ReloadKind, SourceKind, WidgetConfig
from carbonwidget.models.location import Location
from carbonwidget.storage.database import connect, run_migrations

REPO_CONFIGS = Path(__file__).parents[3] / "configs"


@pytest.fixture
def tmp_db(tmp_path: Path) -> sqlite3.Connection:
    conn = connect(tmp_path / "test.db")
    run_migrations(conn)
    return conn


class TestLoadConfig:
    def test_load_from_yaml(self, config_yaml_path: Path):
        config = load_config(config_yaml_path)
        assert config.api.base_url == "https://test-adapt.example.com"
        assert config.location is Location.BELGIUM

    def test_empty_yaml_uses_defaults(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        config = load_config(path)
        assert config == WidgetConfig()

    def test_missing_file_uses_defaults(self, tmp_path: Path):
        assert load_config(tmp_path / "nope.yaml") == WidgetConfig()

    def test_api_key_from_env(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("ADAPT_API_KEY", "secret")
        config = load_config(tmp_path / "nope.yaml")
        assert config.api.api_key == "secret"

    def test_explicit_api_key_wins(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("ADAPT_API_KEY", "from-env")
        path = tmp_path / "c.yaml"
        path.write_text("api:\n  api_key: from-file\n")
        assert load_config(path).api.api_key == "from-file"

    def test_shipped_configs(self):
        default = load_config(REPO_CONFIGS / "default.yaml")
        assert default.timeline.source == SourceKind.LIVE
        assert default.location is Location.FRANCE_CONTINENTALE
        demo = load_config(REPO_CONFIGS / "demo.yaml")
        assert demo.timeline.entry_count == 5
        assert demo.timeline.reload == ReloadKind.AT_END


class TestConfigHash:
    def test_deterministic(self):
        assert config_hash(WidgetConfig()) == config_hash(WidgetConfig())

    def test_different_config_different_hash(self):
        assert config_hash(WidgetConfig()) != config_hash(WidgetConfig(location="be"))

    def test_api_key_rotation_keeps_hash(self):
        a = WidgetConfig(api={"api_key": "old-key"})
        b = WidgetConfig(api={"api_key": "new-key"})
        assert config_hash(a) == config_hash(b)

    def test_empty_key_differs_from_set_key(self):
        assert config_hash(WidgetConfig()) != config_hash(WidgetConfig(api={"api_key": "k"}))


class TestRedactedDump:
    def test_masks_api_key(self):
        data = redacted_dump(WidgetConfig(api={"api_key": "s3cret"}))
        assert data["api"]["api_key"] == "***"

    def test_empty_key_left_empty(self):
        assert redacted_dump(WidgetConfig())["api"]["api_key"] == ""

    def test_location_as_code(self):
        assert redacted_dump(WidgetConfig(location="be"))["location"] == "be"
        assert redacted_dump(WidgetConfig())["location"] == "fr"


class TestSnapshotConfig:
    def test_persists_to_db(self, default_config: WidgetConfig, tmp_db: sqlite3.Connection):
        h = snapshot_config(default_config, tmp_db)
        row = tmp_db.execute(
            "SELECT config_json FROM config_snapshots WHERE config_hash = ?", (h,)
        ).fetchone()
        assert row is not None

    def test_idempotent(self, default_config: WidgetConfig, tmp_db: sqlite3.Connection):
        h1 = snapshot_config(default_config, tmp_db)
        h2 = snapshot_config(default_config, tmp_db)
        assert h1 == h2
        count = tmp_db.execute("SELECT COUNT(*) FROM config_snapshots").fetchone()[0]
        assert count == 1

    def test_secret_not_persisted(self, tmp_db: sqlite3.Connection):
        h = snapshot_config(WidgetConfig(api={"api_key": "s3cret"}), tmp_db)
        row = tmp_db.execute(
            "SELECT config_json FROM config_snapshots WHERE config_hash = ?", (h,)
        ).fetchone()
        assert "s3cret" not in row["config_json"]
        assert json.loads(row["config_json"])["api"]["api_key"] == "***"


class TestGetConfigValue:
    def test_dotted_key(self, default_config: WidgetConfig):
        assert get_config_value(default_config, "timeline.refresh_minutes") == 15

    def test_invalid_key(self, default_config: WidgetConfig):
        with pytest.raises(KeyError):
            get_config_value(default_config, "nonexistent.key")

    def test_leaf_is_not_walked(self, default_config: WidgetConfig):
        with pytest.raises(KeyError):
            get_config_value(default_config, "timeline.refresh_minutes.x")

    def test_location_as_code(self):
        assert get_config_value(WidgetConfig(location="nl"), "location") == "nl"

    def test_enum_as_value(self, default_config: WidgetConfig):
        assert get_config_value(default_config, "timeline.reload") == "after"


class TestSetConfigValue:
    def test_set_nullable_validation(self, default_config: WidgetConfig):
        config = set_config_value(default_config, "validation.required_status", "ok")
        assert config.validation.required_status == "ok"
        cleared = set_config_value(config, "validation.required_status", "null")
        assert cleared.validation.required_status is None

    def test_set_enum(self, default_config: WidgetConfig):
        config = set_config_value(default_config, "timeline.source", "fixture")
        assert config.timeline.source == SourceKind.FIXTURE

    def test_section_is_not_a_leaf(self, default_config: WidgetConfig):
        with pytest.raises(KeyError):
            set_config_value(default_config, "timeline", "1")

    def test_set_string_coercion(self, default_config: WidgetConfig):
        new_config = set_config_value(default_config, "timeline.refresh_minutes", "30")
        assert new_config.timeline.refresh_minutes == 30

    def test_set_float(self, default_config: WidgetConfig):
        new_config = set_config_value(default_config, "api.timeout_seconds", "5")
        assert new_config.api.timeout_seconds == 5.0

    def test_set_location_code(self, default_config: WidgetConfig):
        new_config = set_config_value(default_config, "location", "nl")
        assert new_config.location is Location.NETHERLANDS

    def test_unknown_key(self, default_config: WidgetConfig):
        with pytest.raises(KeyError):
            set_config_value(default_config, "timeline.bogus", "1")

    def test_invalid_value_raises(self, default_config: WidgetConfig):
        with pytest.raises(ValidationError):
            set_config_value(default_config, "timeline.refresh_minutes", "0")
