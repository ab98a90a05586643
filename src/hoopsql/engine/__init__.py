"""🦆 Query backends.

The runner only talks to :class:`QueryBackend`; DuckDB is the default
implementation.
"""

from .base import Dataset, QueryBackend
from .duckdb import DuckDBBackend, translate_error

__all__ = [
    "Dataset",
    "QueryBackend",
    "DuckDBBackend",
    "translate_error",
]
