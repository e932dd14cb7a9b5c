"""Tests for configuration models and YAML loading."""

from pathlib import Path
from textwrap import dedent

import pytest
from pydantic import ValidationError

from bizdash.core.config import (
    DatabaseConfig,
    EntitySearchConfig,
    JobsConfig,
    SearchSettings,
    Settings,
)


class TestEntitySearchConfig:
    def test_fields_stripped(self) -> None:
        c = EntitySearchConfig(fields=[" name ", "", "type"], category_field="location")
        assert c.fields == ["name", "type"]

    def test_fields_required(self) -> None:
        with pytest.raises(ValidationError):
            EntitySearchConfig(fields=["  "], category_field="location")


class TestSearchSettings:
    def test_defaults(self) -> None:
        s = SearchSettings()
        assert s.all_category == "All"
        assert s.marker == ("<mark>", "</mark>")
        assert s.entities["equipment"].fields == ["name", "type", "serial_number"]
        assert s.entities["equipment"].category_field == "location"
        assert s.entities["jobs"].category_field == "status"
        assert s.entities["employees"].category_field == "position"

    def test_partial_override_keeps_other_kinds(self) -> None:
        s = SearchSettings(entities={"employees": {"fields": ["name", "email"],
                                                   "category_field": "position"}})
        assert s.entities["employees"].fields == ["name", "email"]
        assert s.entities["customers"].fields == ["name", "email", "phone"]

    def test_unknown_kind_rejected(self) -> None:
        with pytest.raises(ValidationError, match="unknown record kinds"):
            SearchSettings(entities={"invoices": {"fields": ["id"], "category_field": "x"}})


class TestJobsConfig:
    def test_defaults(self) -> None:
        j = JobsConfig()
        assert j.page_size == 6
        assert j.timezone == "UTC"

    def test_page_size_bounds(self) -> None:
        with pytest.raises(ValidationError):
            JobsConfig(page_size=0)
        with pytest.raises(ValidationError):
            JobsConfig(page_size=101)

    def test_timezone_validated(self) -> None:
        assert JobsConfig(timezone="America/Denver").timezone == "America/Denver"
        with pytest.raises(ValidationError, match="unknown time zone"):
            JobsConfig(timezone="Mars/Olympus_Mons")


class TestDatabaseConfig:
    def test_default_path(self) -> None:
        assert DatabaseConfig().path == "data/bizdash.db"


class TestSettings:
    def test_defaults_without_yaml(self) -> None:
        s = Settings()
        assert s.jobs.page_size == 6
        assert s.search.all_category == "All"

    def test_load_from_yaml(self, tmp_path: Path) -> None:
        yaml_content = dedent("""\
            database:
              path: data/test.db
            search:
              all_category: Any
              highlight_open: "["
              highlight_close: "]"
              entities:
                equipment:
                  fields: [name]
                  category_field: type
            jobs:
              page_size: 10
              timezone: America/Denver
        """)
        config_file = tmp_path / "settings.yaml"
        config_file.write_text(yaml_content)

        s = Settings.from_yaml(config_file)
        assert s.database.path == "data/test.db"
        assert s.search.all_category == "Any"
        assert s.search.marker == ("[", "]")
        assert s.search.entities["equipment"].category_field == "type"
        assert s.search.entities["jobs"].fields == ["job_name", "description"]
        assert s.jobs.page_size == 10
        assert s.jobs.timezone == "America/Denver"

    def test_empty_yaml_uses_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "settings.yaml"
        config_file.write_text("")
        assert Settings.from_yaml(config_file) == Settings()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            Settings.from_yaml(tmp_path / "nope.yaml")

    def test_invalid_value(self, tmp_path: Path) -> None:
        config_file = tmp_path / "settings.yaml"
        config_file.write_text("jobs:\n  page_size: -1\n")
        with pytest.raises(ValidationError):
            Settings.from_yaml(config_file)

    def test_example_config_is_valid(self) -> None:
        path = Path(__file__).parents[2] / "config" / "settings.example.yaml"
        s = Settings.from_yaml(path)
        assert s.jobs.timezone == "America/Denver"
