"""
Tests for the CLI module.

Covers ledger file discovery, loading, and the report output formats.
"""
import json
import pytest
from pathlib import Path

from acb_tracker.cli import find_ledger_files, load_ledger_file, main
from acb_tracker.config import settings
from acb_tracker.exceptions import InvalidTransactionError, LedgerFileError


@pytest.fixture
def ledger_file(tmp_path, raw_records):
    path = tmp_path / "vfv.json"
    path.write_text(json.dumps({
        "currency": "CAD",
        "security": {"name": "Vanguard S&P 500", "ticker": "VFV"},
        "transactions": raw_records,
    }))
    return path


class TestFindLedgerFiles:

    def test_single_file(self, ledger_file):
        assert find_ledger_files(ledger_file) == [ledger_file]

    def test_non_json_file_returns_empty(self, tmp_path):
        txt_file = tmp_path / "notes.txt"
        txt_file.touch()
        assert find_ledger_files(txt_file) == []

    def test_directory_sorted(self, tmp_path):
        (tmp_path / "z.json").touch()
        (tmp_path / "a.json").touch()
        (tmp_path / "b.csv").touch()

        result = find_ledger_files(tmp_path)

        assert [f.name for f in result] == ["a.json", "z.json"]

    def test_missing_path(self, tmp_path):
        assert find_ledger_files(tmp_path / "nope") == []


class TestLoadLedgerFile:

    def test_object_form(self, ledger_file):
        security, ledger = load_ledger_file(ledger_file)

        assert security.name == "Vanguard S&P 500"
        assert security.ticker == "VFV"
        assert security.currency == "CAD"
        assert len(ledger) == 3

    def test_bare_list_uses_file_name(self, tmp_path, raw_records):
        path = tmp_path / "xiu.json"
        path.write_text(json.dumps(raw_records))

        security, ledger = load_ledger_file(path, currency="USD")

        assert security.ticker == "XIU"
        assert security.currency == "USD"
        assert ledger.currency == "USD"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(LedgerFileError, match="not valid JSON"):
            load_ledger_file(path)

    def test_missing_transactions(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text(json.dumps({"currency": "CAD"}))
        with pytest.raises(LedgerFileError, match="no transaction list"):
            load_ledger_file(path)

    def test_invalid_record(self, tmp_path):
        path = tmp_path / "zero.json"
        path.write_text(json.dumps([{"date": "2024-01-01T00:00:00Z", "type": "buy",
                                     "num_shares": 0, "total_amount_cents": 100}]))
        with pytest.raises(InvalidTransactionError):
            load_ledger_file(path)


class TestMain:

    def test_json_report(self, ledger_file, capsys):
        code = main(["report", str(ledger_file), "--format", "json"])

        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["security"]["ticker"] == "VFV"
        assert data["total_shares"] == 50
        assert data["total_acb_cents"] == 45000
        assert data["acb_per_share_cents"] == 900
        assert data["capital_gains"][0]["transaction_id"] == "s1"
        assert data["capital_gains"][0]["capital_gain_loss_cents"] == 10000

    def test_markdown_report(self, ledger_file, capsys):
        code = main(["report", str(ledger_file), "--format", "markdown"])

        assert code == 0
        out = capsys.readouterr().out
        assert "# Vanguard S&P 500 (VFV)" in out
        assert "$450.00" in out

    def test_table_report(self, ledger_file, capsys):
        code = main(["report", str(ledger_file)])

        assert code == 0
        out = capsys.readouterr().out
        assert "Vanguard S&P 500" in out
        assert "Capital Gains/Losses" in out

    def test_directory_portfolio(self, tmp_path, raw_records, capsys):
        (tmp_path / "vfv.json").write_text(json.dumps(raw_records))
        (tmp_path / "xiu.json").write_text(json.dumps({
            "currency": "CAD",
            "transactions": [{"date": "2024-01-01T00:00:00Z", "type": "buy",
                              "num_shares": 10, "total_amount_cents": 3000}],
        }))

        code = main(["report", str(tmp_path), "--format", "json"])

        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert [h["ticker"] for h in data["holdings"]] == ["VFV", "XIU"]
        assert data["total_acb_cents"] == {"CAD": 48000}

    def test_invalid_input_exits_with_error(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text("[1, 2]")

        code = main(["report", str(path)])

        assert code == 1
        assert "Error" in capsys.readouterr().err

    def test_no_files(self, tmp_path, capsys):
        assert main(["report", str(tmp_path)]) == 1

    def test_directory_portfolio_table(self, tmp_path, raw_records, capsys):
        (tmp_path / "vfv.json").write_text(json.dumps(raw_records))
        (tmp_path / "xiu.json").write_text(json.dumps([{"date": "2024-01-01T00:00:00Z", "type": "buy",
                                                        "num_shares": 10, "total_amount_cents": 3000}]))

        code = main(["report", str(tmp_path)])

        assert code == 0
        out = capsys.readouterr().out
        assert "$100.00" in out  # realised gain on VFV
        assert "CAD: ACB $480.00, realised $100.00" in out

    def test_subcommand_required(self, ledger_file):
        with pytest.raises(SystemExit) as exc:
            main([str(ledger_file)])
        assert exc.value.code == 2

    def test_unknown_log_level_rejected(self, ledger_file, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["report", str(ledger_file), "--log-level", "verbose"])
        assert exc.value.code == 2
        assert "invalid choice" in capsys.readouterr().err

    def test_log_level_case_insensitive(self, ledger_file):
        assert main(["report", str(ledger_file), "--format", "json", "--log-level", "debug"]) == 0

    def test_bad_log_level_setting_exits_with_error(self, ledger_file, monkeypatch, capsys):
        monkeypatch.setattr(settings, "LOG_LEVEL", "VERBOSE")

        code = main(["report", str(ledger_file), "--format", "json"])

        assert code == 1
        assert "Unknown level" in capsys.readouterr().err
