"""Fonts, assets and the engine-facing compilation context."""
from invoicegen.rendering.context import MAIN_SOURCE_ID, CompilationContext, Engine
from invoicegen.rendering.engine import SourceEngine, TypstEngine
from invoicegen.rendering.vault import (
    Font,
    ResourceVault,
    import_assets,
    import_fonts,
    missing_style_fonts,
)

__all__ = [
    "MAIN_SOURCE_ID",
    "CompilationContext",
    "Engine",
    "Font",
    "ResourceVault",
    "SourceEngine",
    "TypstEngine",
    "import_assets",
    "import_fonts",
    "missing_style_fonts",
]
