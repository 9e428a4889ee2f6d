# pp_utils.py
# Brisnet PP Parser - Pure Text Utilities
# All functions are side-effect-free and operate on already-loaded strings.

from __future__ import annotations

import re
from collections.abc import Iterable

# ===================== Line Handling =====================


def normalize_line_endings(text: str | None) -> str:
    """CRLF and lone CR both become LF so patterns only deal with one convention."""
    if not text:
        return ""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def clean(value) -> str:
    return ("" if value is None else str(value)).strip()


def split_lines(block: str | None) -> list[str]:
    return normalize_line_endings(block).split("\n")


def non_empty_lines(block: str | None) -> list[str]:
    """Trimmed lines with blanks dropped."""
    return [ln for ln in (clean(line) for line in split_lines(block)) if ln]


def collapse_spaces(value: str) -> str:
    return " ".join(value.split())


# ===================== Regex Builders =====================


def alternation(tokens: Iterable[str], escape: bool = True) -> str:
    """
    Build a non-capturing alternation from a vocabulary.

    Tokens keep their given order, so callers list specific forms before
    general ones ("OC40k" before "OC").
    """
    parts = [re.escape(t) if escape else t for t in tokens]
    return "(?:" + "|".join(parts) + ")"


def label_pattern(label: str) -> str:
    """Escaped label, optionally indented. Callers add the blanks before the colon."""
    return r"[ \t]*" + re.escape(label)
