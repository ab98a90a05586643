#!/usr/bin/env python3
"""
🏀 hoopsql CLI - SQL over player statistics and salaries.

Usage:
    hoopsql query <sql>        Run a query and print the result
    hoopsql report             Run the report queries and write an HTML page
    hoopsql datasets           Show the loaded datasets
    hoopsql --help             Show help
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

import pandas as pd
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from hoopsql import __version__
from hoopsql.config import HoopsqlConfig, get_settings, load_config
from hoopsql.errors import HoopsqlError, QueryError, TypeMismatchError
from hoopsql.logging_config import setup_logging

console = Console()


def parse_table_args(values: Sequence[str] | None) -> dict[str, Path]:
    """Parse repeated ``NAME=PATH`` options; without any, use the sample data."""
    from hoopsql.data import dataset_name, sample_datasets

    if not values:
        return sample_datasets()

    sources: dict[str, Path] = {}
    for value in values:
        if "=" in value:
            name, _, path = value.partition("=")
            name = name.strip()
        else:
            path = value
            name = dataset_name(path)
        if not name or not path:
            raise argparse.ArgumentTypeError(f"Expected NAME=PATH, got '{value}'")
        sources[name] = Path(path)
    return sources


def _load_tables(table_args: Sequence[str] | None, config: HoopsqlConfig) -> dict[str, pd.DataFrame]:
    from hoopsql.data import load_datasets

    return load_datasets(parse_table_args(table_args), config.loader)


def _fail(error: Exception) -> None:
    if isinstance(error, TypeMismatchError):
        label = "Type mismatch"
    elif isinstance(error, QueryError):
        label = "Query error"
    else:
        label = "Error"
    console.print(f"[red]{label}:[/red] {escape(str(error))}", highlight=False)
    sys.exit(1)


def run_query(
    sql: str,
    config: HoopsqlConfig,
    table_args: Sequence[str] | None = None,
    html: Path | None = None,
    max_rows: int | None = None,
) -> None:
    """Run a single query and print (or write) the result."""
    from hoopsql.render import print_table, render_html_table
    from hoopsql.report import write_report
    from hoopsql.runner import QueryRunner

    try:
        tables = _load_tables(table_args, config)
        result = QueryRunner(config=config).execute(sql, tables)
    except HoopsqlError as e:
        _fail(e)
        return

    print_table(result, console, max_rows=max_rows or config.render.console_rows)

    if html:
        page = render_html_table(result, "Query result", sql=sql, max_rows=config.render.max_rows)
        path = write_report(page, html)
        console.print(f"[green]✓[/green] HTML written to [cyan]{path}[/cyan]")


def run_report_command(
    config: HoopsqlConfig,
    table_args: Sequence[str] | None = None,
    queries: Path | None = None,
    out: Path = Path("report.html"),
    title: str | None = None,
) -> None:
    """Run every report query and write one HTML page."""
    from hoopsql.report import build_report, load_report_definition, write_report
    from hoopsql.runner import QueryRunner

    try:
        definition = load_report_definition(queries)
        tables = _load_tables(table_args, config)
        html, outcomes = build_report(QueryRunner(config=config), tables, definition, title)
    except HoopsqlError as e:
        _fail(e)
        return

    for outcome in outcomes.values():
        if outcome.ok:
            console.print(
                f"[green]✅ {outcome.name}[/green] [dim]({outcome.row_count} rows, {outcome.duration_ms}ms)[/dim]"
            )
        else:
            console.print(f"[red]❌ {outcome.name}[/red] {escape(str(outcome.error))}", highlight=False)

    path = write_report(html, out)
    console.print(f"[bold]📊 Report written to[/bold] [cyan]{path}[/cyan]")

    if any(not o.ok for o in outcomes.values()):
        sys.exit(1)


def show_datasets(config: HoopsqlConfig, table_args: Sequence[str] | None = None) -> None:
    """Print columns, types and null counts of each dataset."""
    from hoopsql.data import report_nulls

    try:
        tables = _load_tables(table_args, config)
    except HoopsqlError as e:
        _fail(e)
        return

    for name, df in tables.items():
        nulls = report_nulls(df)
        table = Table(
            title=f"{name} ({len(df)} rows)",
            show_header=True,
            header_style="bold",
            padding=(0, 1),
        )
        table.add_column("Column")
        table.add_column("Type")
        table.add_column("Nulls", justify="right")
        for col in df.columns:
            table.add_row(str(col), str(df[col].dtype), str(nulls["columns"].get(str(col), 0)))
        console.print(table)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hoopsql",
        description="🏀 hoopsql - SQL over player statistics and salaries",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  hoopsql query "SELECT Player, G, GS FROM stats WHERE G = GS"
  hoopsql query "SELECT * FROM s" -t s=data/stats.csv --html out.html
  hoopsql report --out report.html
  hoopsql report --queries my_queries.yaml -t stats=stats.csv -t salaries=pay.csv
  hoopsql datasets
        """,
    )
    parser.add_argument("--config", "-c", type=Path, help="YAML configuration file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only log errors")
    parser.add_argument("--log-file", type=Path, help="Also append log records to this file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    table_help = "Dataset as NAME=PATH (repeatable; default: bundled stats and salaries)"

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # query command
    query_parser = subparsers.add_parser("query", help="Run a SQL query")
    query_parser.add_argument("sql", help="SQL query to execute")
    query_parser.add_argument("--table", "-t", action="append", dest="tables", help=table_help)
    query_parser.add_argument("--html", type=Path, help="Also write the result as an HTML page")
    query_parser.add_argument("--max-rows", "-n", type=int, help="Rows to print")

    # report command
    report_parser = subparsers.add_parser("report", help="Write an HTML report")
    report_parser.add_argument("--table", "-t", action="append", dest="tables", help=table_help)
    report_parser.add_argument("--queries", type=Path, help="YAML file of report queries")
    report_parser.add_argument(
        "--out", "-o", type=Path, default=Path("report.html"), help="Output file (default: report.html)"
    )
    report_parser.add_argument("--title", help="Page title")

    # datasets command
    datasets_parser = subparsers.add_parser("datasets", help="Show loaded datasets")
    datasets_parser.add_argument("--table", "-t", action="append", dest="tables", help=table_help)

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Main CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(
        verbose=args.verbose,
        quiet=args.quiet,
        log_file=args.log_file,
        level=settings.log_level,
    )

    try:
        config = load_config(args.config)
    except HoopsqlError as e:
        _fail(e)
        return

    try:
        if args.command == "query":
            run_query(args.sql, config, args.tables, html=args.html, max_rows=args.max_rows)
        elif args.command == "report":
            run_report_command(config, args.tables, args.queries, args.out, args.title)
        elif args.command == "datasets":
            show_datasets(config, args.tables)
        else:
            parser.print_help()
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))


if __name__ == "__main__":
    main()
