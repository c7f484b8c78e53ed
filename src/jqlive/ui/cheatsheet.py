"""jq basics shown next to the query input."""

from __future__ import annotations

from typing import List, NamedTuple

JQ_MANUAL_URL = "https://jqlang.org/manual/#basic-filters"


class CheatSheetRow(NamedTuple):
    syntax: str
    example: str
    description: str


CHEAT_SHEET: List[CheatSheetRow] = [
    CheatSheetRow(".", ".", "Identity: returns the input unchanged"),
    CheatSheetRow(".field", ".name", "Object identifier index"),
    CheatSheetRow(".field?", ".name?", "Optional object identifier index"),
    CheatSheetRow(".[<string>]", '.["name"]', "Object index"),
    CheatSheetRow(".[<number>]", ".[0]", "Array index"),
    CheatSheetRow(".[]", ".children | .[]", "Array/object value iterator"),
    CheatSheetRow(",", ".username, .email", "Concatenation: run both filters"),
    CheatSheetRow("|", ".users[] | .email", "Pipe: feed left output into right"),
    CheatSheetRow("[...]", "[ .children[] | .name ]", "Array construction"),
    CheatSheetRow("{...}", "{ login: .email, (.role): true }", "Object construction"),
]

__all__ = ["CHEAT_SHEET", "CheatSheetRow", "JQ_MANUAL_URL"]
