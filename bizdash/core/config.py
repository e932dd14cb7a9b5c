"""Configuration models and YAML loader for the dashboard core."""

from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from pydantic import BaseModel, Field, field_validator

from bizdash.core.schemas import RECORD_KINDS


class EntitySearchConfig(BaseModel):
    """Which fields of a record kind are searched, and which one is its category."""

    fields: list[str]
    category_field: str

    @field_validator("fields")
    @classmethod
    def fields_not_empty(cls, v: list[str]) -> list[str]:
        cleaned = [f.strip() for f in v if f.strip()]
        if not cleaned:
            msg = "fields must not be empty"
            raise ValueError(msg)
        return cleaned


def _default_entities() -> dict[str, EntitySearchConfig]:
    return {
        "equipment": EntitySearchConfig(
            fields=["name", "type", "serial_number"], category_field="location",
        ),
        "jobs": EntitySearchConfig(fields=["job_name", "description"], category_field="status"),
        "employees": EntitySearchConfig(fields=["name"], category_field="position"),
        "customers": EntitySearchConfig(
            fields=["name", "email", "phone"], category_field="address",
        ),
    }


class SearchSettings(BaseModel):
    """List search and highlight settings."""

    all_category: str = "All"
    highlight_open: str = "<mark>"
    highlight_close: str = "</mark>"
    entities: dict[str, EntitySearchConfig] = Field(default_factory=_default_entities)

    @field_validator("entities")
    @classmethod
    def known_kinds(cls, v: dict[str, EntitySearchConfig]) -> dict[str, EntitySearchConfig]:
        unknown = sorted(set(v) - set(RECORD_KINDS))
        if unknown:
            msg = f"unknown record kinds in search.entities: {unknown}"
            raise ValueError(msg)
        # Kinds omitted from the YAML keep their defaults
        merged = _default_entities()
        merged.update(v)
        return merged

    @property
    def marker(self) -> tuple[str, str]:
        return (self.highlight_open, self.highlight_close)


class JobsConfig(BaseModel):
    """Job list and date settings."""

    page_size: int = Field(default=6, ge=1, le=100)
    timezone: str = "UTC"

    @field_validator("timezone")
    @classmethod
    def timezone_known(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            msg = f"unknown time zone: '{v}'"
            raise ValueError(msg) from None
        return v


class DatabaseConfig(BaseModel):
    """Database configuration."""

    path: str = "data/bizdash.db"


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    search: SearchSettings = Field(default_factory=SearchSettings)
    jobs: JobsConfig = Field(default_factory=JobsConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
