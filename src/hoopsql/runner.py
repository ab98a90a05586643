"""🏀 Query Runner - evaluate SQL against named in-memory datasets.

Example:
    from hoopsql.runner import QueryRunner

    runner = QueryRunner()
    starters = runner.execute(
        "SELECT Player, G, GS FROM stats WHERE G = GS",
        {"stats": stats_df},
    )
"""

from __future__ import annotations

import re
import time
from collections.abc import Mapping
from dataclasses import dataclass

import pandas as pd
import pyarrow as pa

from hoopsql.config import HoopsqlConfig
from hoopsql.dialect import check_query
from hoopsql.engine import Dataset, DuckDBBackend, QueryBackend
from hoopsql.errors import DatasetError, HoopsqlError
from hoopsql.logging_config import get_logger

logger = get_logger(__name__)

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass
class QueryOutcome:
    """Result of one named query in :meth:`QueryRunner.execute_many`."""

    name: str
    query: str
    result: pd.DataFrame | None = None
    error: HoopsqlError | None = None
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def row_count(self) -> int:
        return 0 if self.result is None else len(self.result)


def validate_tables(tables: Mapping[str, Dataset]) -> None:
    """Check a name -> dataset mapping before it is handed to a backend.

    Raises:
        DatasetError: Non-identifier or duplicate names, unsupported
            dataset types, or datasets without columns
    """
    if not isinstance(tables, Mapping):
        raise DatasetError("Tables must be a mapping of name to dataset")

    seen: set[str] = set()
    for name, data in tables.items():
        if not isinstance(name, str) or not _IDENTIFIER_RE.match(name):
            raise DatasetError("Dataset name is not a valid identifier", {"name": str(name)})
        if name.lower() in seen:
            raise DatasetError("Duplicate dataset name (names are case-insensitive)", {"name": name})
        seen.add(name.lower())

        if isinstance(data, pd.DataFrame):
            columns = list(data.columns)
        elif isinstance(data, pa.Table):
            columns = data.column_names
        else:
            raise DatasetError(
                "Unsupported dataset type",
                {"name": name, "type": type(data).__name__},
            )
        if not columns:
            raise DatasetError("Dataset has no columns", {"name": name})


class QueryRunner:
    """Evaluates declarative queries through a swappable backend.

    The runner keeps no state between calls. Each :meth:`execute` builds a
    fresh backing store, so a dataset is visible only to the query it was
    passed with.
    """

    def __init__(
        self,
        backend: QueryBackend | None = None,
        config: HoopsqlConfig | None = None,
    ):
        self.config = config or HoopsqlConfig()
        self.backend = backend or DuckDBBackend(self.config.engine)

    def execute(self, query: str, tables: Mapping[str, Dataset] | None = None) -> pd.DataFrame:
        """Evaluate ``query`` against ``tables`` and return a new DataFrame.

        Args:
            query: A single SELECT-style statement
            tables: Datasets keyed by the name the query uses

        Returns:
            Result table with the columns of the query's projection

        Raises:
            QueryError: Invalid query, unsupported statement or join,
                unknown dataset or column
            TypeMismatchError: Operation on incompatible column types
            DatasetError: Invalid ``tables`` mapping
        """
        tables = {} if tables is None else tables
        statement = check_query(query)
        validate_tables(tables)

        logger.debug(
            "Executing on %s with %d dataset(s): %s",
            self.backend.name,
            len(tables),
            statement[:200],
        )
        result = self.backend.execute(statement, tables)
        logger.debug("Query returned %d rows, %d columns", len(result), len(result.columns))
        return result

    def execute_many(
        self,
        queries: Mapping[str, str],
        tables: Mapping[str, Dataset] | None = None,
    ) -> dict[str, QueryOutcome]:
        """Evaluate several named queries, each in its own store.

        A failing query records its error and does not stop the others.
        """
        outcomes: dict[str, QueryOutcome] = {}

        for name, query in queries.items():
            outcome = QueryOutcome(name=name, query=query)
            start = time.perf_counter()
            try:
                outcome.result = self.execute(query, tables)
            except HoopsqlError as e:
                logger.warning("Query %s failed: %s", name, e)
                outcome.error = e
            outcome.duration_ms = max(0, int((time.perf_counter() - start) * 1000))
            outcomes[name] = outcome

        return outcomes

    def __repr__(self) -> str:
        return f"QueryRunner(backend={self.backend!r})"
