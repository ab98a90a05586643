"""🧪 Pytest configuration and shared fixtures."""

from pathlib import Path

import pandas as pd
import pytest


@pytest.fixture(scope="session")
def project_root():
    """Get project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def games_df():
    """Two players: one started every game, one did not."""
    return pd.DataFrame(
        {
            "Player": ["Bam Adebayo", "Josh Hart"],
            "G": [10, 12],
            "GS": [10, 8],
        }
    )


@pytest.fixture
def stats_df():
    """Small player statistics table."""
    return pd.DataFrame(
        {
            "Player": ["Nikola Jokić", "Jamal Murray", "Jalen Brunson", "Josh Hart", "Bobby Portis"],
            "Tm": ["DEN", "DEN", "NYK", "NYK", "MIL"],
            "G": [79, 59, 77, 81, 82],
            "GS": [79, 59, 77, 18, 10],
            "PTS": [26.4, 21.2, 28.7, 9.4, 13.8],
        }
    )


@pytest.fixture
def salaries_df():
    """Salaries for some of the players in stats_df plus one extra."""
    return pd.DataFrame(
        {
            "Player": ["Nikola Jokić", "Jamal Murray", "Jalen Brunson", "Chris Paul"],
            "Salary": [47607350, 33833400, 26346666, 30800000],
        }
    )


@pytest.fixture
def tables(stats_df, salaries_df):
    return {"stats": stats_df, "salaries": salaries_df}


@pytest.fixture
def runner():
    from hoopsql.runner import QueryRunner

    return QueryRunner()


@pytest.fixture
def sample_tables():
    """The bundled CSV files, loaded and normalized."""
    from hoopsql.data import load_datasets, sample_datasets

    return load_datasets(sample_datasets())


@pytest.fixture
def write_csv(tmp_path):
    """Write raw bytes (or text as UTF-8) to a CSV file in tmp_path."""

    def _write(name: str, content: str | bytes) -> Path:
        path = tmp_path / name
        if isinstance(content, str):
            content = content.encode("utf-8")
        path.write_bytes(content)
        return path

    return _write


# Environment setup for tests
@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch):
    """Start every test without hoopsql environment overrides."""
    from hoopsql.config import get_settings

    monkeypatch.delenv("HOOPSQL_CONFIG_FILE", raising=False)
    monkeypatch.delenv("HOOPSQL_LOG_LEVEL", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
