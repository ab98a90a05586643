"""📝 Statement guard for the supported query surface.

Only single data-retrieval statements are accepted. RIGHT and FULL outer
joins are rejected; swap the operands and use LEFT JOIN instead.
"""

from __future__ import annotations

import re

from hoopsql.errors import QueryError

# String literals, quoted identifiers and comments, in match priority order
_MASK_PATTERN = re.compile(
    r"'(?:[^']|'')*'"
    r'|"(?:[^"]|"")*"'
    r"|--[^\n]*"
    r"|/\*.*?\*/",
    re.DOTALL,
)

_LEADING_KEYWORD = re.compile(r"^[\s(]*([A-Za-z]+)")
_TRAILING_TERMINATORS = re.compile(r"[\s;]+$")
_UNSUPPORTED_JOIN = re.compile(r"\b(RIGHT|FULL)\s+(?:OUTER\s+)?JOIN\b", re.IGNORECASE)

RETRIEVAL_KEYWORDS = frozenset({"SELECT", "WITH", "FROM", "VALUES", "TABLE", "DESCRIBE", "SHOW"})


def mask_literals(sql: str) -> str:
    """Blank out literals and comments so keyword checks ignore their contents.

    The result has the same length as the input.
    """

    def _blank(match: re.Match[str]) -> str:
        text = match.group(0)
        if text.startswith(("--", "/*")):
            return " " * len(text)
        return text[0] + " " * (len(text) - 2) + text[-1]

    return _MASK_PATTERN.sub(_blank, sql)


def check_query(sql: str) -> str:
    """Validate a query and return it without trailing terminators.

    Raises:
        QueryError: Empty text, several statements, a non-retrieval
            statement, or a RIGHT/FULL outer join
    """
    if not isinstance(sql, str):
        raise QueryError("Query must be a string", {"type": type(sql).__name__})

    masked = mask_literals(sql)

    trailing = _TRAILING_TERMINATORS.search(masked)
    end = trailing.start() if trailing else len(masked)
    statement, masked = sql[:end], masked[:end]

    if not masked.strip():
        raise QueryError("Query is empty")

    if ";" in masked:
        raise QueryError("Only one statement per query is supported")

    match = _LEADING_KEYWORD.match(masked)
    keyword = match.group(1).upper() if match else ""
    if keyword not in RETRIEVAL_KEYWORDS:
        raise QueryError(
            "Only data-retrieval statements are supported",
            {"statement": keyword or masked.strip()[:20]},
        )

    join = _UNSUPPORTED_JOIN.search(masked)
    if join:
        raise QueryError(
            f"{join.group(1).upper()} OUTER JOIN is not supported; "
            "swap the table order and use LEFT JOIN instead",
        )

    return statement.strip()
