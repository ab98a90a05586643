"""Base class for query backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Union

import pandas as pd
import pyarrow as pa

Dataset = Union[pd.DataFrame, pa.Table]


class QueryBackend(ABC):
    """Evaluates one query against a set of named datasets.

    Implementations must not keep any state between calls: every call
    builds its own store and tears it down before returning.
    """

    name: str = "backend"

    @abstractmethod
    def execute(self, query: str, tables: Mapping[str, Dataset]) -> pd.DataFrame:
        """Evaluate ``query`` and return the result as a new DataFrame.

        Args:
            query: A single retrieval statement
            tables: Datasets keyed by the table name used in the query

        Raises:
            QueryError: Invalid query or unknown table/column
            TypeMismatchError: Operation on incompatible column types
        """
