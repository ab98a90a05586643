"""🧪 Tests for column-name and text normalization."""

import numpy as np
import pandas as pd
import pytest

from hoopsql.data.normalize import (
    normalize_column_name,
    normalize_columns,
    normalize_text,
    normalize_text_columns,
    parse_numeric_columns,
    report_nulls,
)


class TestNormalizeColumnName:
    """Tests for header -> identifier conversion."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("FG%", "FG_pct"),
            ("3P", "_3P"),
            ("3P%", "_3P_pct"),
            ("Salary ($)", "Salary"),
            ("Player Name", "Player_Name"),
            ("Jokić", "Jokic"),
            ("   ", "column"),
            (2023, "_2023"),
        ],
    )
    def test_known_headers(self, raw, expected):
        assert normalize_column_name(raw) == expected

    def test_idempotent(self):
        """Normalizing a normalized name changes nothing."""
        for raw in ["FG%", "3P%", "Salary ($)", "__x__", "a--b", "é"]:
            once = normalize_column_name(raw)
            assert normalize_column_name(once) == once


class TestNormalizeColumns:
    """Tests for DataFrame column renaming."""

    def test_deduplicates_case_insensitively(self):
        df = pd.DataFrame([[1, 2, 3]], columns=["G", "g", "G "])
        result = normalize_columns(df)

        assert list(result.columns) == ["G", "g_2", "G_3"]

    def test_does_not_mutate_input(self):
        df = pd.DataFrame({"FG%": [0.5]})
        normalize_columns(df)

        assert list(df.columns) == ["FG%"]

    def test_idempotent(self):
        df = pd.DataFrame([[1, 2, 3, 4]], columns=["3P%", "FG%", "g", "G"])
        once = normalize_columns(df)
        twice = normalize_columns(once)

        assert list(twice.columns) == list(once.columns)


class TestNormalizeText:
    """Tests for single-value text normalization."""

    def test_strips_and_composes(self):
        assert normalize_text("  Nikola Jokić ") == "Nikola Jokić"
        assert normalize_text("Jokic\u0301") == "Jokić"

    def test_folds_accents_for_ascii(self):
        assert normalize_text("Nikola Jokić", "ascii") == "Nikola Jokic"
        assert normalize_text("Alperen Şengün", "ascii") == "Alperen Sengun"

    def test_folds_when_latin1_cannot_hold(self):
        assert normalize_text("Luka Dončić", "latin-1") == "Luka Doncic"
        assert normalize_text("José", "latin-1") == "José"

    def test_unencodable_becomes_empty(self):
        """Text with no representation in the target encoding is replaced."""
        assert normalize_text("東京", "ascii") == ""

    def test_null_strings_become_none(self):
        for value in ["NA", "N/A", "-", "null", " NULL "]:
            assert normalize_text(value) is None

    def test_blank_stays_blank(self):
        assert normalize_text("   ") == ""
        assert normalize_text("") == ""

    def test_non_text_passes_through(self):
        assert normalize_text(5) == 5
        assert normalize_text(None) is None
        assert np.isnan(normalize_text(np.nan))

    def test_bytes(self):
        assert normalize_text(b"Bam Adebayo") == "Bam Adebayo"
        assert normalize_text(b"\xff\xfe\xfa") == ""

    @pytest.mark.parametrize("encoding", ["utf-8", "ascii", "latin-1", "cp1252"])
    def test_idempotent(self, encoding):
        """Applying normalization twice equals applying it once."""
        values = [
            "  Nikola Jokić ",
            "Alperen Şengün",
            "ﬁnal",
            "東京",
            "Dereck Lively II",
            "NA",
            "ＮＡ",
            "－",
            "Ñ/Á",
            "ć",
            b"Luka Don\xc4\x8di\xc4\x87",
            7,
            None,
        ]
        for value in values:
            once = normalize_text(value, encoding)
            assert normalize_text(once, encoding) == once

    @pytest.mark.parametrize(
        "value, encoding",
        [("ＮＡ", "utf-8"), ("－", "utf-8"), ("Ñ/Á", "ascii")],
    )
    def test_markers_found_after_normalization(self, value, encoding):
        """Text that only reads as a null marker once normalized is null."""
        assert normalize_text(value, encoding) is None


class TestNormalizeTextColumns:
    """Tests for DataFrame-wide text normalization."""

    def test_only_text_columns_change(self):
        df = pd.DataFrame({"Player": [" Jokić ", "NA"], "G": [79, 59]})
        result = normalize_text_columns(df, "ascii")

        assert result["Player"].tolist() == ["Jokic", None]
        assert result["G"].tolist() == [79, 59]

    def test_string_dtype_keeps_none(self):
        df = pd.DataFrame({"Player": pd.Series([" Jokić ", "NA"], dtype="string")})
        result = normalize_text_columns(df, "ascii")

        assert result["Player"].dtype == object
        assert result["Player"].tolist() == ["Jokic", None]

    def test_does_not_mutate_input(self):
        df = pd.DataFrame({"Player": [" Jokić "]})
        normalize_text_columns(df)

        assert df["Player"].iloc[0] == " Jokić "

    def test_idempotent(self):
        df = pd.DataFrame({"Player": [" Jokić ", "東京", "-", "Hart"], "Tm": ["DEN", "X", "Y", "NYK"]})
        once = normalize_text_columns(df, "ascii")
        twice = normalize_text_columns(once, "ascii")

        pd.testing.assert_frame_equal(once, twice)


class TestParseNumericColumns:
    """Tests for numeric-text detection."""

    def test_currency(self):
        df = pd.DataFrame({"Salary": ["$47,607,350", "$4,379,527"]})
        result = parse_numeric_columns(df)

        assert result["Salary"].dtype == np.int64
        assert result["Salary"].tolist() == [47607350, 4379527]

    def test_percent_and_decimals(self):
        df = pd.DataFrame({"FG": ["45.1%", ".5%"]})
        result = parse_numeric_columns(df)

        assert result["FG"].tolist() == pytest.approx([45.1, 0.5])

    def test_nulls_give_float(self):
        df = pd.DataFrame({"Salary": ["$1,000", None]})
        result = parse_numeric_columns(df)

        assert result["Salary"].dtype == np.float64
        assert result["Salary"].iloc[0] == 1000.0
        assert pd.isna(result["Salary"].iloc[1])

    def test_mixed_text_left_alone(self):
        df = pd.DataFrame({"Pos": ["C", "12"], "Tm": ["DEN", "NYK"]})
        result = parse_numeric_columns(df)

        assert result["Pos"].tolist() == ["C", "12"]
        assert result["Tm"].tolist() == ["DEN", "NYK"]


class TestReportNulls:
    def test_counts(self):
        df = pd.DataFrame({"a": [1, None, 3], "b": ["x", "y", None]})
        report = report_nulls(df)

        assert report["rows"] == 3
        assert report["missing"] == 2
        assert report["share"] == pytest.approx(2 / 6)
        assert report["columns"] == {"a": 1, "b": 1}

    def test_empty(self):
        assert report_nulls(pd.DataFrame())["share"] == 0.0
