"""
tests/test_cli.py

Covers:
  - date / festivals / upcoming / year subcommands
  - --strategy selection
  - CalendarError exit code
"""

import pandas as pd
import pytest

import panchang
from templecal.cli import build_parser, main


class TestParser:

    def test_strategy_choices(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--strategy", "lunar", "today"])

    def test_subcommand_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestCommands:

    def test_date(self, capsys):
        assert main(["--strategy", "approximate", "date", "2024-01-15"]) == 0
        out = capsys.readouterr().out
        assert "2024-01-15" in out
        assert "Thai 2, 67" in out
        assert "Pongal / பொங்கல்" in out

    def test_accurate_date_prints_tithi(self, capsys, monkeypatch, stub_panchang):
        monkeypatch.setattr(panchang, "DEFAULT_PROVIDER", stub_panchang)
        assert main(["--strategy", "accurate", "date", "2024-09-02"]) == 0
        out = capsys.readouterr().out
        assert "Tithi: Amavasya" in out
        assert "Aadi Amavasai" in out

    def test_accurate_unavailable(self, capsys, monkeypatch, failing_panchang):
        monkeypatch.setattr(panchang, "DEFAULT_PROVIDER", failing_panchang)
        assert main(["--strategy", "accurate", "date", "2024-09-02"]) == 1
        assert "unavailable" in capsys.readouterr().err

    def test_festivals_none(self, capsys):
        assert main(["--strategy", "approximate", "festivals", "2024-08-05"]) == 0
        assert "(no festivals)" in capsys.readouterr().out

    def test_festivals_with_holidays(self, capsys):
        assert main(["--strategy", "approximate", "festivals", "2024-08-15", "--holidays"]) == 0
        assert "Independence Day" in capsys.readouterr().out

    def test_upcoming(self, capsys):
        args = ["--strategy", "approximate", "upcoming", "--start", "2024-01-10", "--days", "10"]
        assert main(args) == 0
        out = capsys.readouterr().out
        assert "2024-01-15  Pongal" in out

    def test_year_csv(self, tmp_path, capsys):
        path = tmp_path / "year.csv"
        assert main(["--strategy", "approximate", "year", "68", "--csv", str(path)]) == 0
        df = pd.read_csv(path)
        assert "Pongal" in set(df["name"])
        assert "rows written" in capsys.readouterr().out

    def test_invalid_date_exit_code(self, caplog):
        assert main(["festivals", "not-a-date"]) == 2
        assert "Not a valid date" in caplog.text
