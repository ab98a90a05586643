"""Rich console output for result tables."""

from __future__ import annotations

import pandas as pd
from rich.console import Console
from rich.table import Table

from .html import format_cell


def build_table(df: pd.DataFrame, max_rows: int = 20, title: str | None = None) -> Table:
    """Convert a DataFrame into a Rich table."""
    table = Table(title=title, show_header=True, header_style="bold", padding=(0, 1))

    for col, dtype in zip(df.columns, df.dtypes):
        table.add_column(str(col), justify="right" if pd.api.types.is_numeric_dtype(dtype) else "left")

    for record in df.head(max_rows).itertuples(index=False, name=None):
        table.add_row(*[format_cell(v).text for v in record])

    if len(df) > max_rows:
        table.add_row(*["..." for _ in df.columns])

    return table


def print_table(
    df: pd.DataFrame,
    console: Console | None = None,
    max_rows: int = 20,
    title: str | None = None,
) -> None:
    """Print a DataFrame as a Rich table followed by its row count."""
    console = console or Console()
    console.print(build_table(df, max_rows=max_rows, title=title))
    noun = "row" if len(df) == 1 else "rows"
    console.print(f"[dim]{len(df)} {noun}[/dim]")
