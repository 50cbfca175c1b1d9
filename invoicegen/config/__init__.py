"""Configuration, style and word dictionary layers."""
from invoicegen.config.store import ConfigStore, backfill, load_with_defaults
from invoicegen.config.style import StyleCascade, to_literal
from invoicegen.config.words import WordDictionary

__all__ = [
    "ConfigStore",
    "StyleCascade",
    "WordDictionary",
    "backfill",
    "load_with_defaults",
    "to_literal",
]
