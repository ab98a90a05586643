"""📊 Report builder - run every report query and render one HTML page."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import pandas as pd

from hoopsql.logging_config import get_logger
from hoopsql.render.html import build_section, render_page
from hoopsql.runner import QueryOutcome, QueryRunner

from .models import ReportDefinition

logger = get_logger(__name__)


def run_report(
    runner: QueryRunner,
    tables: Mapping[str, pd.DataFrame],
    definition: ReportDefinition,
) -> dict[str, QueryOutcome]:
    """Evaluate every query of ``definition``; failures are kept per query."""
    queries = {q.name: q.sql for q in definition.queries}
    return runner.execute_many(queries, tables)


def build_report(
    runner: QueryRunner,
    tables: Mapping[str, pd.DataFrame],
    definition: ReportDefinition,
    title: str | None = None,
) -> tuple[str, dict[str, QueryOutcome]]:
    """Run the report queries and render them as one page.

    Returns:
        Tuple of (html, outcomes by query name)
    """
    outcomes = run_report(runner, tables, definition)
    max_rows = runner.config.render.max_rows
    anchors: set[str] = set()

    sections = []
    for query in definition.queries:
        outcome = outcomes[query.name]
        sections.append(
            build_section(
                query.heading,
                outcome.result,
                max_rows=max_rows,
                description=query.description,
                sql=query.sql,
                error=None if outcome.ok else str(outcome.error),
                used_anchors=anchors,
            )
        )

    failed = [name for name, o in outcomes.items() if not o.ok]
    logger.info(
        "Report built: %d queries, %d failed",
        len(outcomes),
        len(failed),
    )
    return render_page(title or definition.title, sections, tables), outcomes


def write_report(html: str, path: Path | str) -> Path:
    """Write a rendered page, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
    return path
