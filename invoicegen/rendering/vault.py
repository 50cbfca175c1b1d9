"""In-memory pools of fonts and assets handed to the typesetting engine."""
from __future__ import annotations

import logging
import struct
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Tuple

from invoicegen.config.style import StyleCascade

logger = logging.getLogger(__name__)

COLLECTION_MAGIC = b"ttcf"
SINGLE_FONT_MAGICS = (b"\x00\x01\x00\x00", b"OTTO", b"true", b"typ1", b"wOFF", b"wOF2")


@dataclass(frozen=True)
class Font:
    """One face of a font file; collections contribute one entry per face."""

    name: str
    path: str
    index: int
    data: bytes = field(repr=False)


def faces_in(data: bytes) -> int:
    """Number of faces a font file holds, ``0`` when it is not a font."""

    magic = data[:4]
    if magic == COLLECTION_MAGIC:
        if len(data) < 12:
            return 0
        (count,) = struct.unpack(">I", data[8:12])
        return count
    if magic in SINGLE_FONT_MAGICS:
        return 1
    return 0


def _walk(directory: Path) -> Iterable[Path]:
    """Regular files below ``directory``, depth first, sorted by name per level."""

    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        if entry.is_dir():
            yield from _walk(entry)
        elif entry.is_file():
            yield entry


def import_fonts(fonts_dir: Path) -> List[Font]:
    """Load every font face below ``fonts_dir``.

    The position of a face in the returned list is the index the engine uses
    to request it, so the walk order must not change for unchanged contents.
    """

    fonts_dir.mkdir(parents=True, exist_ok=True)
    fonts: List[Font] = []
    for path in _walk(fonts_dir):
        data = path.read_bytes()
        count = faces_in(data)
        if not count:
            logger.debug("Skipping %s: not a font file", path)
            continue
        relative = path.relative_to(fonts_dir).as_posix()
        fonts.extend(Font(name=path.stem, path=relative, index=i, data=data) for i in range(count))
    logger.info("Imported %d font faces from %s", len(fonts), fonts_dir)
    return fonts


def import_assets(root: Path, assets_dir: Path) -> Dict[str, bytes]:
    """Map every file below ``assets_dir`` by its POSIX path relative to ``root``."""

    assets_dir.mkdir(parents=True, exist_ok=True)
    assets = {path.relative_to(root).as_posix(): path.read_bytes() for path in _walk(assets_dir)}
    logger.info("Imported %d assets from %s", len(assets), assets_dir)
    return assets


@dataclass(frozen=True)
class ResourceVault:
    fonts: Tuple[Font, ...] = ()
    assets: Mapping[str, bytes] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fonts", tuple(self.fonts))
        object.__setattr__(self, "assets", MappingProxyType(dict(self.assets)))

    @classmethod
    def from_directories(cls, fonts_dir: Path, assets_dir: Path) -> "ResourceVault":
        return cls(fonts=import_fonts(fonts_dir), assets=import_assets(assets_dir, assets_dir))


def _font_key(name: str) -> str:
    return name.replace(" ", "").lower()


def missing_style_fonts(style: StyleCascade, doctype: str, vault: ResourceVault) -> List[str]:
    """Font names required by the style that no vault entry provides.

    A font file matches when its stem, lowercased and without spaces, starts
    with the requested name (``Roboto`` matches ``Roboto-Bold.ttf``).
    """

    available = {_font_key(font.name) for font in vault.fonts}
    missing: List[str] = []
    for value in style.values(doctype, "font_name"):
        if not isinstance(value, str) or value in missing:
            continue
        wanted = _font_key(value)
        if not any(name.startswith(wanted) for name in available):
            missing.append(value)
    return missing
