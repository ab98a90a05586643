"""Pydantic models for report query definitions."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from hoopsql.errors import ConfigError

DEFAULT_QUERIES_FILE = Path(__file__).parent / "queries.yaml"


class ReportQuery(BaseModel):
    """A titled query shown as one section of a report."""

    name: str = Field(..., description="Unique key, e.g. 'starters'")
    title: str = Field(default="", description="Section heading (default: name)")
    description: str = Field(default="", description="Text shown above the result")
    sql: str = Field(..., min_length=1)

    @field_validator("sql")
    @classmethod
    def _strip_sql(cls, value: str) -> str:
        return value.strip()

    @property
    def heading(self) -> str:
        return self.title or self.name.replace("_", " ").title()


class ReportDefinition(BaseModel):
    """A list of report queries loaded from YAML."""

    title: str = Field(default="Player statistics and salaries")
    queries: list[ReportQuery] = Field(default_factory=list)

    @field_validator("queries")
    @classmethod
    def _unique_names(cls, queries: list[ReportQuery]) -> list[ReportQuery]:
        names = [q.name for q in queries]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate query names: {', '.join(duplicates)}")
        return queries


def load_report_definition(path: Path | str | None = None) -> ReportDefinition:
    """Load report queries from YAML (default: the bundled queries.yaml).

    Expected format::

        title: My report
        queries:
          - name: starters
            title: Started every game
            sql: SELECT Player FROM stats WHERE G = GS
    """
    path = Path(path) if path is not None else DEFAULT_QUERIES_FILE
    if not path.exists():
        raise ConfigError("Report queries file not found", {"path": str(path)})

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}", {"path": str(path)}) from e

    if isinstance(data, list):
        data = {"queries": data}
    if not isinstance(data, dict):
        raise ConfigError("Report file must contain a mapping or a list", {"path": str(path)})

    try:
        return ReportDefinition(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid report definition: {e}", {"path": str(path)}) from e
