"""Pytest configuration to make the local package importable without installation."""
import sys
from datetime import date
from pathlib import Path
from typing import List

import pytest

# Ensure repository root is on sys.path for module resolution
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from invoicegen.cli import main as cli_main
from invoicegen.config import ConfigStore, WordDictionary
from invoicegen.core.models import Contact
from invoicegen.pipeline import RunPaths
from invoicegen.rendering.context import CompilationContext
from invoicegen.storage import Datastore
from invoicegen.ui.prompts import ScriptedPrompter

TODAY = date(2024, 3, 5)


class FakeEngine:
    """Stand-in for the typesetting engine recording what it was given."""

    suffix = ".pdf"

    def __init__(self) -> None:
        self.contexts: List[CompilationContext] = []

    def compile(self, context: CompilationContext) -> bytes:
        self.contexts.append(context)
        return b"%PDF-fake\n" + context.main().encode("utf-8")


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's environment from leaking into CLI defaults."""

    monkeypatch.delenv("INVOICEGEN_DATA_DIR", raising=False)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"


@pytest.fixture
def run_paths(data_dir: Path) -> RunPaths:
    return RunPaths.from_data_dir(data_dir)


@pytest.fixture
def config() -> ConfigStore:
    return ConfigStore.defaults()


@pytest.fixture
def words() -> WordDictionary:
    return WordDictionary.defaults()


@pytest.fixture
def datastore() -> Datastore:
    store = Datastore()
    store.contacts.add(Contact(slug="acme", name="ACME Corp", address="1 Road Runner Way"))
    return store


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def scripted():
    """Build a scripted prompter from a list of answers."""

    def _build(*answers: str) -> ScriptedPrompter:
        return ScriptedPrompter(answers)

    return _build


@pytest.fixture
def run_cli(monkeypatch: pytest.MonkeyPatch):
    """Helper to invoke the CLI with custom arguments and scripted stdin."""

    def _run(args: List[str], answers: List[str] = ()) -> None:
        pending = list(answers)

        def fake_input(prompt: str = "") -> str:
            if not pending:
                raise EOFError
            return pending.pop(0)

        monkeypatch.setattr("builtins.input", fake_input)
        monkeypatch.setattr(sys, "argv", ["invoicegen", *args])
        cli_main(args)

    return _run
