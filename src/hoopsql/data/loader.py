"""📥 Load delimited files into normalized DataFrames.

Each file is read once: the raw bytes are decoded with the first working
source encoding, parsed with pandas, then normalized (column names, text
encoding, numeric text).
"""

from __future__ import annotations

import io
import re
from collections.abc import Mapping
from pathlib import Path

import pandas as pd

from hoopsql.config import LoaderConfig
from hoopsql.data.normalize import (
    normalize_column_name,
    normalize_columns,
    normalize_text_columns,
    parse_numeric_columns,
)
from hoopsql.errors import DatasetError
from hoopsql.logging_config import get_logger

logger = get_logger(__name__)

SAMPLE_DATA_DIR = Path(__file__).parent.parent / "sample_data"


def sample_datasets() -> dict[str, Path]:
    """Bundled player statistics and salaries files."""
    return {
        "stats": SAMPLE_DATA_DIR / "player_stats.csv",
        "salaries": SAMPLE_DATA_DIR / "player_salaries.csv",
    }


def dataset_name(path: Path | str) -> str:
    """Derive a table name from a file name.

    e.g., 'Player Stats 2023.csv' -> 'Player_Stats_2023'
    """
    return normalize_column_name(Path(path).stem)


def _decode(raw: bytes, encodings: list[str], path: Path) -> str:
    for encoding in encodings:
        try:
            text = raw.decode(encoding)
        except UnicodeDecodeError:
            continue
        logger.info("Decoded %s as %s", path.name, encoding)
        return text

    raise DatasetError(
        "File could not be decoded",
        {"path": str(path), "tried": ", ".join(encodings)},
    )


def load_csv(path: Path | str, config: LoaderConfig | None = None) -> pd.DataFrame:
    """Load and normalize a delimited file with a header row.

    Args:
        path: File to read
        config: Loader settings (default: LoaderConfig())

    Returns:
        DataFrame with identifier column names and normalized text

    Example:
        stats = load_csv("data/player_stats.csv")
    """
    config = config or LoaderConfig()
    path = Path(path)

    if not path.is_file():
        raise DatasetError("Dataset file not found", {"path": str(path)})

    raw = path.read_bytes()
    text = _decode(raw, config.source_encodings, path)
    if not text.strip():
        raise DatasetError("Dataset file is empty", {"path": str(path)})

    try:
        df = pd.read_csv(
            io.StringIO(text),
            sep=config.delimiter,
            na_values=config.null_values,
            keep_default_na=False,
            skipinitialspace=True,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise DatasetError(f"Could not parse dataset: {e}", {"path": str(path)}) from e

    if any(re.fullmatch(r"Unnamed: \d+", str(col)) for col in df.columns):
        logger.warning("%s has blank header cells; they were given generated names", path.name)

    df = normalize_columns(df)
    df = normalize_text_columns(df, config.target_encoding, config.null_values)
    if config.parse_numbers:
        df = parse_numeric_columns(df)

    logger.info("Loaded %s: %d rows, %d columns", path.name, len(df), len(df.columns))
    return df


def load_datasets(
    sources: Mapping[str, Path | str],
    config: LoaderConfig | None = None,
) -> dict[str, pd.DataFrame]:
    """Load several files keyed by table name.

    Names are normalized to identifiers; two names that collide
    case-insensitively raise DatasetError.
    """
    datasets: dict[str, pd.DataFrame] = {}
    seen: dict[str, str] = {}

    for raw_name, path in sources.items():
        name = normalize_column_name(raw_name)
        if name.lower() in seen:
            raise DatasetError(
                "Duplicate dataset name",
                {"name": name, "first": seen[name.lower()], "second": str(path)},
            )
        seen[name.lower()] = str(path)
        datasets[name] = load_csv(path, config)

    return datasets
