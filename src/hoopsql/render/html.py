"""🌐 HTML rendering - self-contained pages with sortable, filterable tables.

Pages have no external assets: the stylesheet and the small sort/filter
script are inlined so a report can be opened straight from disk.
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

import pandas as pd
from jinja2 import Environment

_PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{{ title }}</title>
<style>
body { font-family: -apple-system, "Segoe UI", Helvetica, Arial, sans-serif; margin: 2rem; color: #222; }
h1 { margin-bottom: 0.2rem; }
.meta { color: #777; font-size: 0.85rem; margin-bottom: 1.5rem; }
section { margin-bottom: 2.5rem; }
pre.sql { background: #f6f8fa; padding: 0.75rem; border-radius: 4px; overflow-x: auto; }
input.filter { margin: 0.5rem 0; padding: 0.3rem; width: 18rem; }
table.data { border-collapse: collapse; font-size: 0.9rem; }
table.data th, table.data td { border: 1px solid #ddd; padding: 0.3rem 0.6rem; }
table.data th { background: #f0f0f0; cursor: pointer; user-select: none; }
table.data td.num { text-align: right; font-variant-numeric: tabular-nums; }
table.data tr:nth-child(even) td { background: #fafafa; }
.error { color: #b00020; background: #fdecea; padding: 0.75rem; border-radius: 4px; }
.note { color: #777; font-size: 0.85rem; }
</style>
</head>
<body>
<h1>{{ title }}</h1>
<div class="meta">Generated {{ generated_at }}</div>
{% if datasets %}
<section>
<h2>Datasets</h2>
<table class="data">
<thead><tr><th>Name</th><th>Rows</th><th>Columns</th></tr></thead>
<tbody>
{% for ds in datasets %}
<tr><td>{{ ds.name }}</td><td class="num">{{ ds.rows }}</td><td>{{ ds.columns | join(", ") }}</td></tr>
{% endfor %}
</tbody>
</table>
</section>
{% endif %}
{% for section in sections %}
<section id="{{ section.anchor }}">
<h2>{{ section.title }}</h2>
{% if section.description %}<p>{{ section.description }}</p>{% endif %}
{% if section.sql %}<pre class="sql">{{ section.sql }}</pre>{% endif %}
{% if section.error %}
<div class="error">{{ section.error }}</div>
{% else %}
<input class="filter" type="search" placeholder="Filter rows..." data-table="{{ section.anchor }}-table">
<table class="data" id="{{ section.anchor }}-table">
<thead><tr>{% for col in section.columns %}<th data-col="{{ loop.index0 }}">{{ col }}</th>{% endfor %}</tr></thead>
<tbody>
{% for row in section.rows %}
<tr>{% for cell in row %}<td{% if cell.numeric %} class="num"{% endif %} data-value="{{ cell.sort }}">{{ cell.text }}</td>{% endfor %}</tr>
{% endfor %}
</tbody>
</table>
<p class="note">{{ section.row_count }} row{{ "" if section.row_count == 1 else "s" }}{% if section.truncated %}, showing first {{ section.rows | length }}{% endif %}</p>
{% endif %}
</section>
{% endfor %}
<script>
document.querySelectorAll("input.filter").forEach(function (input) {
  input.addEventListener("input", function () {
    var needle = input.value.toLowerCase();
    var rows = document.getElementById(input.dataset.table).tBodies[0].rows;
    for (var i = 0; i < rows.length; i++) {
      rows[i].style.display = rows[i].textContent.toLowerCase().indexOf(needle) === -1 ? "none" : "";
    }
  });
});
document.querySelectorAll("table.data th[data-col]").forEach(function (th) {
  th.addEventListener("click", function () {
    var table = th.closest("table");
    var body = table.tBodies[0];
    var col = Number(th.dataset.col);
    var asc = th.dataset.dir !== "asc";
    th.dataset.dir = asc ? "asc" : "desc";
    var rows = Array.prototype.slice.call(body.rows);
    rows.sort(function (a, b) {
      var x = a.cells[col].dataset.value, y = b.cells[col].dataset.value;
      var nx = parseFloat(x), ny = parseFloat(y);
      var cmp = (!isNaN(nx) && !isNaN(ny)) ? nx - ny : x.localeCompare(y);
      return asc ? cmp : -cmp;
    });
    rows.forEach(function (r) { body.appendChild(r); });
  });
});
</script>
</body>
</html>
"""

_env = Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True)
_page = _env.from_string(_PAGE_TEMPLATE)


@dataclass
class Cell:
    """A rendered table cell."""

    text: str
    sort: str
    numeric: bool = False


@dataclass
class Section:
    """One titled block of a page: a result table or an error."""

    title: str
    anchor: str
    columns: list[str]
    rows: list[list[Cell]]
    row_count: int = 0
    truncated: bool = False
    description: str = ""
    sql: str | None = None
    error: str | None = None


def format_cell(value: Any) -> Cell:
    """Format a scalar for display, keeping the raw value for sorting."""
    if value is None or (isinstance(value, float) and math.isnan(value)) or value is pd.NA:
        return Cell(text="", sort="")
    if isinstance(value, bool):
        return Cell(text=str(value).lower(), sort=str(int(value)))
    if isinstance(value, numbers.Integral):
        return Cell(text=f"{int(value):,}", sort=str(int(value)), numeric=True)
    if isinstance(value, numbers.Real):
        number = float(value)
        if not math.isfinite(number):
            return Cell(text="" if math.isnan(number) else str(number), sort="")
        text = f"{number:,.0f}" if number.is_integer() else f"{number:,.3f}".rstrip("0").rstrip(".")
        return Cell(text=text, sort=repr(number), numeric=True)
    return Cell(text=str(value), sort=str(value))


def _slug(text: str, used: set[str]) -> str:
    base = "".join(ch.lower() if ch.isalnum() else "-" for ch in text).strip("-") or "section"
    slug, n = base, 2
    while slug in used:
        slug = f"{base}-{n}"
        n += 1
    used.add(slug)
    return slug


def build_section(
    title: str,
    df: pd.DataFrame | None = None,
    *,
    max_rows: int = 500,
    description: str = "",
    sql: str | None = None,
    error: str | None = None,
    used_anchors: set[str] | None = None,
) -> Section:
    """Build a page section from a result table or an error message."""
    anchor = _slug(title, used_anchors if used_anchors is not None else set())

    if error is not None or df is None:
        return Section(
            title=title,
            anchor=anchor,
            columns=[],
            rows=[],
            description=description,
            sql=sql,
            error=error or "No result",
        )

    shown = df.head(max_rows)
    rows = [[format_cell(v) for v in record] for record in shown.itertuples(index=False, name=None)]
    return Section(
        title=title,
        anchor=anchor,
        columns=[str(c) for c in df.columns],
        rows=rows,
        row_count=len(df),
        truncated=len(df) > max_rows,
        description=description,
        sql=sql,
    )


def _column_names(data) -> list:
    if hasattr(data, "column_names"):
        return list(data.column_names)
    return list(data.columns)


def render_page(
    title: str,
    sections: Sequence[Section],
    datasets: Mapping[str, pd.DataFrame] | None = None,
) -> str:
    """Render a full HTML page."""
    summary = [
        {"name": name, "rows": len(df), "columns": [str(c) for c in _column_names(df)]}
        for name, df in (datasets or {}).items()
    ]
    return _page.render(
        title=title,
        generated_at=datetime.now().strftime("%Y-%m-%d %H:%M"),
        sections=sections,
        datasets=summary,
    )


def render_html_table(
    df: pd.DataFrame,
    title: str = "Query result",
    sql: str | None = None,
    max_rows: int = 500,
) -> str:
    """Render one result table as a standalone interactive page.

    Example:
        html = render_html_table(result, "Starters", sql=query)
        Path("starters.html").write_text(html, encoding="utf-8")
    """
    return render_page(title, [build_section(title, df, max_rows=max_rows, sql=sql)])
