"""🧪 Tests for the command line interface."""

from pathlib import Path

import pytest

from hoopsql.cli import build_parser, main, parse_table_args
from hoopsql.data import sample_datasets


class TestParseTableArgs:
    def test_defaults_to_sample_data(self):
        assert parse_table_args(None) == sample_datasets()

    def test_name_and_path(self):
        assert parse_table_args(["s=data/stats.csv"]) == {"s": Path("data/stats.csv")}

    def test_bare_path_uses_file_stem(self):
        sources = parse_table_args(["data/player_stats.csv"])

        assert list(sources.values()) == [Path("data/player_stats.csv")]


class TestParser:
    def test_query_options(self):
        args = build_parser().parse_args(["query", "SELECT 1", "-t", "a=a.csv", "-n", "5"])

        assert args.command == "query"
        assert args.tables == ["a=a.csv"]
        assert args.max_rows == 5

    def test_report_default_out(self):
        args = build_parser().parse_args(["report"])
        assert args.out == Path("report.html")

    def test_log_file_option(self):
        args = build_parser().parse_args(["--log-file", "run.log", "datasets"])
        assert args.log_file == Path("run.log")


class TestMain:
    """End-to-end runs against the bundled sample data."""

    def test_query_prints_result(self, capsys):
        main(["query", "SELECT Player FROM stats WHERE Player LIKE 'Nikola%'"])

        assert "Nikola" in capsys.readouterr().out

    def test_query_writes_html(self, tmp_path):
        out = tmp_path / "result.html"

        main(["query", "SELECT Player, G, GS FROM stats WHERE G = GS", "--html", str(out)])

        html = out.read_text(encoding="utf-8")
        assert "<th data-col=\"0\">Player</th>" in html

    def test_bad_query_exits_nonzero(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["query", "SELECT nope FROM stats"])

        assert exc.value.code == 1
        assert "Query error" in capsys.readouterr().out

    def test_unsupported_join_exits_nonzero(self):
        with pytest.raises(SystemExit) as exc:
            main(["query", "SELECT * FROM salaries RIGHT JOIN stats USING (Player)"])

        assert exc.value.code == 1

    def test_custom_table(self, write_csv, capsys):
        path = write_csv("roster.csv", "Player,Tm\nJalen Brunson,NYK\n")

        main(["query", "SELECT Player FROM roster", "-t", f"roster={path}"])

        assert "Jalen Brunson" in capsys.readouterr().out

    def test_missing_dataset_file(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["datasets", "-t", f"x={tmp_path / 'missing.csv'}"])

        assert exc.value.code == 1

    def test_report(self, tmp_path):
        out = tmp_path / "report.html"

        main(["report", "--out", str(out), "--title", "Season report"])

        assert "<title>Season report</title>" in out.read_text(encoding="utf-8")

    def test_datasets(self, capsys):
        main(["datasets"])

        output = capsys.readouterr().out
        assert "stats" in output
        assert "salaries" in output

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "hoopsql.log"

        main(["--log-file", str(log_file), "-v", "query", "SELECT Player FROM stats"])

        assert "Executing on duckdb" in log_file.read_text(encoding="utf-8")

    def test_bad_config_exits_nonzero(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["--config", str(tmp_path / "missing.yaml"), "datasets"])

        assert exc.value.code == 1
