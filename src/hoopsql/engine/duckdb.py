"""🦆 DuckDB backend - an in-memory store per query.

DuckDB fits the query runner because:
- Embedded: No separate service to manage
- Registers pandas and Arrow data without copying
- Covers filtering, grouping, joins, CASE and aggregates out of the box
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager

import duckdb
import pandas as pd

from hoopsql.config import EngineConfig
from hoopsql.engine.base import Dataset, QueryBackend
from hoopsql.errors import HoopsqlError, QueryError, TypeMismatchError
from hoopsql.logging_config import get_logger

logger = get_logger(__name__)

# Binder messages that describe a type problem rather than a missing name
_TYPE_MISMATCH_MARKERS = (
    "no function matches",
    "cannot compare",
    "cannot mix",
    "could not convert",
    "implicit cast",
)


def _prepare(df: Dataset) -> Dataset:
    """Give empty object columns a text type so DuckDB can bind them."""
    if not isinstance(df, pd.DataFrame) or len(df) > 0:
        return df
    object_cols = [col for col in df.columns if df[col].dtype == object]
    if not object_cols:
        return df
    return df.astype({col: "string" for col in object_cols})


def translate_error(error: duckdb.Error) -> HoopsqlError:
    """Map a DuckDB exception onto the hoopsql error taxonomy."""
    message = str(error).strip()
    details = {"engine": type(error).__name__}

    if isinstance(error, (duckdb.ConversionException, duckdb.TypeMismatchException)):
        return TypeMismatchError(message, details)

    if isinstance(error, duckdb.BinderException):
        lowered = message.lower()
        if any(marker in lowered for marker in _TYPE_MISMATCH_MARKERS):
            return TypeMismatchError(message, details)
        return QueryError(message, details)

    return QueryError(message, details)


class DuckDBBackend(QueryBackend):
    """Evaluate queries in a throwaway in-memory DuckDB connection.

    Example:
        backend = DuckDBBackend()
        df = backend.execute("SELECT * FROM stats WHERE G = GS", {"stats": stats})
    """

    name = "duckdb"

    def __init__(self, config: EngineConfig | None = None):
        self.config = config or EngineConfig()

    def _create_connection(self) -> duckdb.DuckDBPyConnection:
        """Create a new connection with engine settings applied."""
        conn = duckdb.connect(":memory:", config=self.config.to_connect_options())
        try:
            for key, value in self.config.to_duckdb_settings().items():
                conn.execute(f"SET {key} = {value}")
        except duckdb.Error:
            conn.close()
            raise
        return conn

    @contextmanager
    def store(self, tables: Mapping[str, Dataset]) -> Iterator[duckdb.DuckDBPyConnection]:
        """Context manager yielding a connection with ``tables`` registered.

        The connection is closed on every exit path.
        """
        conn = self._create_connection()
        registered: list[str] = []
        try:
            for name, data in tables.items():
                conn.register(name, _prepare(data))
                registered.append(name)
            yield conn
        finally:
            for name in registered:
                try:
                    conn.unregister(name)
                except duckdb.Error as e:
                    logger.debug("Could not unregister %s: %s", name, e)
            conn.close()

    def execute(self, query: str, tables: Mapping[str, Dataset]) -> pd.DataFrame:
        """Execute a SQL query and return results as DataFrame."""
        try:
            with self.store(tables) as conn:
                cursor = conn.execute(query)
                names = [column[0] for column in cursor.description]
                result = cursor.df()
        except duckdb.Error as e:
            raise translate_error(e) from e

        # .df() suffixes repeated names; keep the projection as written
        result.columns = names
        return result

    def __repr__(self) -> str:
        return (
            f"DuckDBBackend("
            f"threads={self.config.threads}, "
            f"memory_limit={self.config.memory_limit})"
        )
