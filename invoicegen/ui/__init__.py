"""Operator interaction helpers."""
from invoicegen.ui.prompts import (
    ConsolePrompter,
    Prompter,
    ScriptedPrompter,
    ask_date,
    ask_float,
    ask_nonempty,
    collect_transactions,
    confirm,
    select_from_list,
)

__all__ = [
    "ConsolePrompter",
    "Prompter",
    "ScriptedPrompter",
    "ask_date",
    "ask_float",
    "ask_nonempty",
    "collect_transactions",
    "confirm",
    "select_from_list",
]
