"""Integration-style tests that exercise the CLI entrypoint."""
from pathlib import Path

import pytest
from openpyxl import load_workbook

QUOTATION_ANSWERS = ["acme", "ACME Corp", "1 Road Runner Way", "Audit", "3", "100", ""]


def test_cli_writes_markup_only_quotation(tmp_path: Path, run_cli, capsys):
    data_dir = tmp_path / "data"
    out_dir = tmp_path / "out"

    run_cli(
        ["quotation", "--data-dir", str(data_dir), "--output-dir", str(out_dir), "--markup-only"],
        QUOTATION_ANSWERS,
    )

    files = list(out_dir.iterdir())
    assert [path.suffix for path in files] == [".typ"]
    assert files[0].name.startswith("quotation_acme_00001_")
    markup = files[0].read_text(encoding="utf-8")
    assert markup.startswith("#let ")
    assert "300.00 EUR" in markup
    assert (data_dir / "quotation.json").exists()
    assert "Wrote" in capsys.readouterr().out


def test_cli_uses_data_dir_from_environment(tmp_path: Path, run_cli, monkeypatch):
    data_dir = tmp_path / "env-data"
    monkeypatch.setenv("INVOICEGEN_DATA_DIR", str(data_dir))

    run_cli(["quotation", "--output-dir", str(tmp_path), "--markup-only"], QUOTATION_ANSWERS)

    assert (data_dir / "contacts.json").exists()


def test_cli_rejects_unsupported_doctype(tmp_path: Path, run_cli, capsys):
    data_dir = tmp_path / "data"

    with pytest.raises(SystemExit) as excinfo:
        run_cli(["receipt", "--data-dir", str(data_dir)])

    assert excinfo.value.code == 1
    assert "Unsupported document type 'receipt'" in capsys.readouterr().err
    assert not data_dir.exists()


def test_cli_requires_a_data_dir(run_cli):
    with pytest.raises(SystemExit) as excinfo:
        run_cli(["invoice"])

    assert excinfo.value.code == 2


def test_cli_reports_interrupted_input(tmp_path: Path, run_cli, capsys):
    data_dir = tmp_path / "data"

    with pytest.raises(SystemExit) as excinfo:
        run_cli(["invoice", "--data-dir", str(data_dir), "--markup-only"], ["acme"])

    assert excinfo.value.code == 1
    assert "error:" in capsys.readouterr().err
    assert not (data_dir / "contacts.json").exists()


def test_cli_exports_history_to_excel(tmp_path: Path, run_cli):
    data_dir = tmp_path / "data"
    run_cli(
        ["invoice", "--data-dir", str(data_dir), "--output-dir", str(tmp_path), "--markup-only"],
        ["acme", "ACME Corp", "1 Road Runner Way", "Design", "2", "10", "", ""],
    )
    excel_output = tmp_path / "history.xlsx"

    run_cli(["--data-dir", str(data_dir), "--export-history", str(excel_output)])

    sheet = load_workbook(excel_output)["invoices"]
    rows = list(sheet.iter_rows(values_only=True))
    assert len(rows) == 2
    assert rows[1][2] == "acme"
