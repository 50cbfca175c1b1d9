"""Style cascade flattening into template bindings."""
from pathlib import Path

import pytest

from invoicegen.config import StyleCascade, to_literal
from invoicegen.core.errors import InvalidConfigError


@pytest.mark.parametrize(
    "value, expected",
    [
        ("11pt", "11pt"),
        ("8%", "8%"),
        ("3fr", "3fr"),
        ("rgb(110, 140, 180, 205)", "rgb(110, 140, 180, 205)"),
        ("Roboto", '"Roboto"'),
        ('say "hi"', '"say \\"hi\\""'),
        (12, "12"),
        (1.5, "1.5"),
        (True, "true"),
        (["a", "2pt"], '("a", 2pt, )'),
    ],
)
def test_to_literal(value, expected):
    assert to_literal(value) == expected


def test_to_literal_rejects_tables():
    with pytest.raises(InvalidConfigError):
        to_literal(None)


def test_other_document_types_do_not_leak():
    style = StyleCascade(
        {
            "general": {"margin_x": "4%"},
            "invoice": {"logo_width": "150pt"},
            "quotation": {"validity_color": "rgb(0, 0, 0)"},
        }
    )

    assert style.flatten("invoice") == {"margin_x": "4%", "logo_width": "150pt"}
    assert style.flatten("quotation") == {"margin_x": "4%", "validity_color": "rgb(0, 0, 0)"}


def test_document_type_overrides_shared_values_regardless_of_order():
    style = StyleCascade(
        {
            "invoice": {"font_size": "12pt"},
            "general": {"font_size": "11pt", "paper_type": "a4"},
        }
    )

    bindings = style.flatten("invoice")

    assert bindings["font_size"] == "12pt"
    assert bindings["paper_type"] == '"a4"'


def test_top_level_scalars_are_emitted():
    style = StyleCascade({"font_name": "Roboto", "general": {}})

    assert style.flatten("invoice") == {"font_name": '"Roboto"'}


def test_flatten_is_deterministic():
    style = StyleCascade.defaults()

    assert style.flatten("invoice") == style.flatten("invoice")
    assert style.prelude("invoice") == style.prelude("invoice")


def test_prelude_renders_let_bindings():
    style = StyleCascade({"general": {"margin_x": "4%", "font_name": "Roboto"}})

    assert style.prelude("invoice") == '#let margin_x = 4%\n#let font_name = "Roboto"\n'


def test_load_seeds_and_backfills_style(tmp_path: Path):
    path = tmp_path / "style.yaml"
    path.write_text("general:\n  font_name: Lato\n", encoding="utf-8")

    style = StyleCascade.load(path)
    bindings = style.flatten("invoice")

    assert bindings["font_name"] == '"Lato"'
    assert bindings["logo_width"] == "150pt"
    assert "paper_type" in bindings


def test_values_lists_shared_then_specific():
    style = StyleCascade({"general": {"font_name": "Roboto"}, "invoice": {"font_name": "Lato"}})

    assert style.values("invoice", "font_name") == ["Roboto", "Lato"]
    assert style.values("quotation", "font_name") == ["Roboto"]
