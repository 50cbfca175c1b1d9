"""Logging coverage to ensure problems are surfaced without stopping the run."""
import logging
from pathlib import Path

from invoicegen.core.logging import configure_logging
from invoicegen.pipeline import run_pipeline
from invoicegen.rendering.vault import import_fonts

ANSWERS = ["acme", "ACME", "Somewhere", "Audit", "1", "10", ""]


def test_missing_style_font_is_warned_about(tmp_path: Path, run_paths, fake_engine, scripted, today, caplog):
    """A font named in the style but absent from the fonts dir should not stop the run."""

    caplog.set_level(logging.WARNING)

    output_path = run_pipeline(
        "quotation", run_paths, tmp_path, prompter=scripted(*ANSWERS), engine=fake_engine, today=today
    )

    assert output_path.exists()
    assert "Font 'Roboto' is not installed" in caplog.text


def test_non_font_files_are_logged_and_skipped(tmp_path: Path, caplog):
    fonts_dir = tmp_path / "fonts"
    fonts_dir.mkdir()
    (fonts_dir / "notes.txt").write_text("hello", encoding="utf-8")

    caplog.set_level(logging.DEBUG, logger="invoicegen.rendering.vault")
    fonts = import_fonts(fonts_dir)

    assert fonts == []
    assert "notes.txt" in caplog.text


def test_pipeline_logs_summary(tmp_path: Path, run_paths, fake_engine, scripted, today, caplog):
    """Running the pipeline should emit a helpful summary message."""

    caplog.set_level("INFO")

    run_pipeline("quotation", run_paths, tmp_path, prompter=scripted(*ANSWERS), engine=fake_engine, today=today)

    assert any(message.startswith("Wrote ") for message in caplog.messages)
    assert any("Exported 1 contacts" in message for message in caplog.messages)


def test_configure_logging_reads_environment(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))
    monkeypatch.setenv("LOG_LEVEL", "debug")

    configure_logging()
    assert calls["level"] == "DEBUG"

    configure_logging("warning")
    assert calls["level"] == "WARNING"
