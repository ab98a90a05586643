"""🧹 Column-name and text normalization for loaded datasets.

Every function here is idempotent: normalizing an already normalized
value or DataFrame returns it unchanged.
"""

from __future__ import annotations

import math
import re
import unicodedata
from collections.abc import Iterable
from typing import Any

import numpy as np
import pandas as pd

from hoopsql.config import DEFAULT_NULL_VALUES
from hoopsql.errors import EncodingError
from hoopsql.logging_config import get_logger

logger = get_logger(__name__)

_NON_IDENTIFIER_RE = re.compile(r"[^A-Za-z0-9_]+")
_NUMERIC_TEXT_RE = re.compile(r"^(?:-\$?|\$-?)?(?:\d[\d,]*(?:\.\d*)?|\.\d+)%?$")


# ---------------------------------------------------------------------------
# Column names
# ---------------------------------------------------------------------------

def _fold_ascii(text: str) -> str:
    """Drop combining marks after compatibility decomposition: 'Jokić' -> 'Jokic'."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_column_name(name: Any) -> str:
    """Turn a raw header into a bare SQL identifier.

    e.g., 'FG%' -> 'FG_pct', '3P' -> '_3P', 'Salary ($)' -> 'Salary'
    """
    text = _fold_ascii(str(name)).strip()
    text = text.replace("%", "_pct")
    text = _NON_IDENTIFIER_RE.sub("_", text)
    text = re.sub(r"_+", "_", text).strip("_")
    if not text:
        return "column"
    if text[0].isdigit():
        text = f"_{text}"
    return text


def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Rename every column to a unique identifier.

    Identifiers are case-insensitive in SQL, so 'G' and 'g' collide and the
    second one becomes 'g_2'.
    """
    seen: set[str] = set()
    renamed: list[str] = []

    for col in df.columns:
        base = normalize_column_name(col)
        candidate = base
        n = 2
        while candidate.lower() in seen:
            candidate = f"{base}_{n}"
            n += 1
        seen.add(candidate.lower())
        renamed.append(candidate)

    out = df.copy()
    out.columns = renamed
    return out


# ---------------------------------------------------------------------------
# Text values
# ---------------------------------------------------------------------------

def _to_encoding(text: str, encoding: str) -> str:
    """Return text representable in ``encoding`` or raise EncodingError."""
    text = unicodedata.normalize("NFKC", text).strip()
    try:
        text.encode(encoding)
        return text
    except UnicodeEncodeError:
        pass

    folded = _fold_ascii(text)
    try:
        folded.encode(encoding)
        return folded
    except UnicodeEncodeError as e:
        raise EncodingError(text, encoding) from e


def normalize_text(
    value: Any,
    encoding: str = "utf-8",
    null_values: Iterable[str] = DEFAULT_NULL_VALUES,
) -> Any:
    """Normalize a single cell.

    - Text is NFKC-normalized and stripped
    - Accents are folded when the target encoding cannot hold them
    - Text that still cannot be encoded becomes an empty string
    - Null-like strings ('NA', 'N/A', '-', ...) become None; blank text stays blank
    - Non-text values pass through unchanged

    Example:
        normalize_text("  Nikola Jokić ", "ascii")  # -> "Nikola Jokic"
    """
    if isinstance(value, bytes):
        try:
            value = value.decode("utf-8")
        except UnicodeDecodeError:
            logger.warning("Undecodable bytes value replaced with empty string")
            return ""

    if not isinstance(value, str):
        return value

    try:
        text = _to_encoding(value, encoding)
    except EncodingError as e:
        logger.info("%s; substituting empty value", e)
        return ""

    # Null markers are matched on the normalized text
    if text and text in null_values:
        return None
    return text


def _is_text_column(series: pd.Series) -> bool:
    return series.dtype == object or isinstance(series.dtype, pd.StringDtype)


def normalize_text_columns(
    df: pd.DataFrame,
    encoding: str = "utf-8",
    null_values: Iterable[str] = DEFAULT_NULL_VALUES,
) -> pd.DataFrame:
    """Apply :func:`normalize_text` to every text column of a copy of ``df``."""
    df = df.copy()
    nulls = frozenset(null_values)

    for col in df.columns:
        if _is_text_column(df[col]):
            df[col] = pd.Series(
                [normalize_text(x, encoding, nulls) for x in df[col]],
                index=df.index,
                dtype=object,
            )

    return df


# ---------------------------------------------------------------------------
# Numeric text
# ---------------------------------------------------------------------------

def _parse_number(text: str) -> float:
    return float(re.sub(r"[\$,%]", "", text))


def parse_numeric_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Convert text columns that only hold numbers into numeric columns.

    Handles currency and thousands separators ("$47,607,350") and percent
    signs ("45.1%" -> 45.1). Columns with any non-numeric text are left as-is.
    Whole-number columns without nulls become int64.
    """
    df = df.copy()

    for col in df.columns:
        series = df[col]
        if not _is_text_column(series):
            continue

        present = series.dropna()
        present = present[present.map(lambda v: isinstance(v, str))]
        if present.empty or len(present) != len(series.dropna()):
            continue
        if not present.map(lambda v: bool(_NUMERIC_TEXT_RE.match(v))).all():
            continue

        parsed = series.map(lambda v: _parse_number(v) if isinstance(v, str) else np.nan)
        parsed = parsed.astype("float64")
        if not parsed.isna().any() and parsed.map(lambda v: math.isfinite(v) and v.is_integer()).all():
            parsed = parsed.astype("int64")
        df[col] = parsed

    return df


def report_nulls(df: pd.DataFrame) -> dict:
    """Count missing values per column after loading.

    Used by `hoopsql datasets` to show where null markers such as "NA"
    landed. Columns without nulls are left out of ``columns``.
    """
    per_column = {str(col): int(count) for col, count in df.isna().sum().items() if count}
    missing = sum(per_column.values())

    return {
        "rows": len(df),
        "missing": missing,
        "share": missing / df.size if df.size else 0.0,
        "columns": per_column,
    }
