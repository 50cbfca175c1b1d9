"""Font and asset discovery."""
import struct
from pathlib import Path

from invoicegen.config import StyleCascade
from invoicegen.rendering.vault import (
    ResourceVault,
    faces_in,
    import_assets,
    import_fonts,
    missing_style_fonts,
)

TRUETYPE = b"\x00\x01\x00\x00" + b"\x00" * 28


def _collection(faces: int) -> bytes:
    return b"ttcf" + struct.pack(">HHI", 1, 0, faces) + b"\x00" * 20


def test_faces_in_recognizes_fonts():
    assert faces_in(TRUETYPE) == 1
    assert faces_in(b"OTTO" + b"\x00" * 8) == 1
    assert faces_in(_collection(3)) == 3
    assert faces_in(b"PNG not a font") == 0
    assert faces_in(b"ttcf") == 0


def test_import_fonts_indexes_collections_per_face(tmp_path: Path):
    fonts_dir = tmp_path / "fonts"
    (fonts_dir / "serif").mkdir(parents=True)
    (fonts_dir / "Roboto-Regular.ttf").write_bytes(TRUETYPE)
    (fonts_dir / "serif" / "Noto.ttc").write_bytes(_collection(2))
    (fonts_dir / "README.txt").write_text("not a font", encoding="utf-8")

    fonts = import_fonts(fonts_dir)

    assert [(font.name, font.path, font.index) for font in fonts] == [
        ("Roboto-Regular", "Roboto-Regular.ttf", 0),
        ("Noto", "serif/Noto.ttc", 0),
        ("Noto", "serif/Noto.ttc", 1),
    ]


def test_import_fonts_order_is_stable(tmp_path: Path):
    fonts_dir = tmp_path / "fonts"
    fonts_dir.mkdir()
    for name in ("b.ttf", "a.otf", "c.ttf"):
        (fonts_dir / name).write_bytes(TRUETYPE)

    first = [font.path for font in import_fonts(fonts_dir)]
    second = [font.path for font in import_fonts(fonts_dir)]

    assert first == second == ["a.otf", "b.ttf", "c.ttf"]


def test_missing_directories_are_created_empty(tmp_path: Path):
    fonts_dir = tmp_path / "fonts"
    assets_dir = tmp_path / "assets"

    vault = ResourceVault.from_directories(fonts_dir, assets_dir)

    assert fonts_dir.is_dir() and assets_dir.is_dir()
    assert vault.fonts == ()
    assert dict(vault.assets) == {}


def test_assets_are_keyed_by_relative_posix_path(tmp_path: Path):
    assets_dir = tmp_path / "assets"
    (assets_dir / "invoice").mkdir(parents=True)
    (assets_dir / "invoice" / "logo.png").write_bytes(b"png")
    (assets_dir / "stamp.svg").write_bytes(b"svg")

    assets = import_assets(assets_dir, assets_dir)

    assert assets == {"invoice/logo.png": b"png", "stamp.svg": b"svg"}


def test_missing_style_fonts_matches_by_prefix(tmp_path: Path):
    fonts_dir = tmp_path / "fonts"
    fonts_dir.mkdir()
    (fonts_dir / "Roboto-Bold.ttf").write_bytes(TRUETYPE)
    vault = ResourceVault(fonts=import_fonts(fonts_dir))
    style = StyleCascade({"general": {"font_name": "Roboto"}, "quotation": {"font_name": "Lato"}})

    assert missing_style_fonts(style, "invoice", vault) == []
    assert missing_style_fonts(style, "quotation", vault) == ["Lato"]
