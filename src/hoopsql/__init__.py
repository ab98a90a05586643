"""🏀 hoopsql - SQL over player statistics and salary tables.

Quick Start:
    from hoopsql import QueryRunner, load_datasets, sample_datasets

    tables = load_datasets(sample_datasets())
    runner = QueryRunner()

    runner.execute("SELECT Player, G, GS FROM stats WHERE G = GS", tables)
    runner.execute(
        "SELECT s.Player, p.Salary FROM stats s LEFT JOIN salaries p USING (Player)",
        tables,
    )

Every call builds its own in-memory DuckDB store and discards it before
returning, so nothing is shared between queries.
"""

from hoopsql.errors import (
    ConfigError,
    DatasetError,
    EncodingError,
    HoopsqlError,
    QueryError,
    TypeMismatchError,
)

__version__ = "0.1.0"

_LAZY = {
    "QueryRunner": ("hoopsql.runner", "QueryRunner"),
    "HoopsqlConfig": ("hoopsql.config", "HoopsqlConfig"),
    "load_csv": ("hoopsql.data", "load_csv"),
    "load_datasets": ("hoopsql.data", "load_datasets"),
    "sample_datasets": ("hoopsql.data", "sample_datasets"),
}


# Lazy imports keep `import hoopsql` free of duckdb/pandas
def __getattr__(name: str) -> object:
    if name in _LAZY:
        import importlib

        module_name, attr = _LAZY[name]
        return getattr(importlib.import_module(module_name), attr)
    raise AttributeError(f"module 'hoopsql' has no attribute '{name}'")


__all__ = [
    "ConfigError",
    "DatasetError",
    "EncodingError",
    "HoopsqlError",
    "QueryError",
    "TypeMismatchError",
    "QueryRunner",
    "HoopsqlConfig",
    "load_csv",
    "load_datasets",
    "sample_datasets",
    "__version__",
]
