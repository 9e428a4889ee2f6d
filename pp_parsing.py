"""
PP Parsing Module - Brisnet horse block field extractors
=======================================================

Contains the independent field extractors run against one horse's raw text:
- Header recovery (post, name, tag)
- Key/value lines (Own, Sire, Dam, Brdr, Trnr)
- Morning line odds, sex/age, jockey, silks
- Prime Power, lifetime and year-by-year earnings
- Surface records, workouts, stat lines, QuickPlay notes

All functions are pure: they take text input and return structured data.
Scalar extractors return None when the field is absent; list/dict extractors
return an empty collection. Nothing here raises on malformed text.
"""

import logging
import re

from pp_config import (
    HEADER_LINES,
    JOCKEY_SCAN_LINES,
    MAX_SURFACE_LINE,
    MAX_WORKOUT_LINE,
    NOTE_MARKERS,
    NOTE_PHRASES,
    ODDS_ZONE_LINES,
    OWNER_LABELS,
    SEX_CODES,
    SILKS_AFTER_OWNER_MIN_LENGTH,
    SILKS_MIN_LENGTH,
    SILKS_SCAN_LINES,
    STAT_KEYWORDS,
    STAT_LINE_MARKERS,
    SURFACE_CODES,
    WORKOUT_BULLET,
    WORKOUT_SURFACES,
)
from pp_models import JockeyInfo
from pp_utils import alternation, clean, collapse_spaces, label_pattern, non_empty_lines, split_lines

logger = logging.getLogger(__name__)

# ===================== Patterns =====================

HEADER_RE = re.compile(r"(?m)^\s*(\d+)\s+([^(\n]*)(\([^)\n]*\))?")

# Tried in order: "7/2" beats "3.5" beats a bare integer
ODDS_PATTERNS = [
    re.compile(r"\b(\d+\s*/\s*\d+)\b"),
    re.compile(r"\b(\d+\.\d+)\b"),
    re.compile(r"\b(\d+)\b"),
]

_SEX = rf"([{SEX_CODES}]\.)"
# "B. f. 3" on one line
SEX_AGE_RE = re.compile(rf"\b[A-Z][a-zA-Z.]{{0,6}}[ \t]+{_SEX}[ \t]+(\d{{1,2}})\b", re.IGNORECASE)
# bare "f. 3"
SEX_AGE_BARE_RE = re.compile(rf"{_SEX}\s*(\d{{1,2}})", re.IGNORECASE)
# "B.\n\nf.\n\n3" split across lines by the extractor, checked one line at a time
COLOR_LINE_RE = re.compile(r"^[A-Z][a-zA-Z.]{0,6}$", re.IGNORECASE)
SEX_LINE_RE = re.compile(rf"^{_SEX}$", re.IGNORECASE)
AGE_LINE_RE = re.compile(r"^(\d{1,2})\b")

PRIME_POWER_RE = re.compile(r"Prime Power:\s*([0-9.]+\s*(?:\([^)]*\))?)", re.IGNORECASE)
LIFE_RE = re.compile(r"\bLife:[ \t]*([^\n]+)", re.IGNORECASE)
YEAR_LINE_RE = re.compile(r"(?m)^[ \t]*(20\d{2})[ \t]+(.+)$")

JOCKEY_PAREN_RE = re.compile(r"(?m)^([A-Z][A-Z.\-' ]{2,60}?)[ \t]*\(([^)\n]+)\)")
JOCKEY_NAME_ONLY_RE = re.compile(r"^[A-Z][A-Z. ]{2,40}$")
RECORD_TRIPLE_RE = re.compile(r"\b\d+\s+\d+-\d+-\d+")

WORKOUT_RE = re.compile(
    rf"^{re.escape(WORKOUT_BULLET)}?\d{{1,2}}[A-Za-z]{{3}}\b.*(?<![A-Za-z]){alternation(WORKOUT_SURFACES)}(?![A-Za-z]).*$",
    re.IGNORECASE,
)

STAT_KEYWORD_RE = re.compile(alternation(STAT_KEYWORDS), re.IGNORECASE)
NOTE_PHRASE_RE = re.compile(alternation(NOTE_PHRASES), re.IGNORECASE)

SURFACE_LINE_RE = re.compile(rf"(?m)^[ \t]*({alternation(SURFACE_CODES)})\b.*$", re.IGNORECASE)
_SURFACE_CANON = {code.lower(): code for code in SURFACE_CODES}


# ===================== Header =====================


def parse_header(block: str) -> tuple[int | None, str, str]:
    """
    Recover post, name and tag from the first lines of a horse block.

    Expected shape: "3   SECRETARIAT (A1)" -> (3, "SECRETARIAT", "(A1)").
    Returns (None, "", "") when no leading integer is found.
    """
    if not block:
        logger.debug("parse_header: empty block")
        return None, "", ""
    head = "\n".join(split_lines(block)[:HEADER_LINES])
    m = HEADER_RE.search(head)
    if not m:
        return None, "", ""
    return int(m.group(1)), clean(m.group(2)), m.group(3) or ""


# ===================== Key/Value Lines =====================


def first_line_after(label: str, block: str) -> str | None:
    """
    Value of a labelled field.

    Accepts "Label: value" on one line, or the label alone on a line with the
    value on the next non-empty line. Matching is case-insensitive.
    """
    if not block:
        return None
    same_line = re.search(rf"(?mi)^{label_pattern(label)}[ \t]*:[ \t]*(\S.*)$", block)
    if same_line:
        return clean(same_line.group(1))
    next_line = re.search(rf"(?mi)^{label_pattern(label)}(?:[ \t]*:)?[ \t]*\n\s*(\S[^\n]*)", block)
    if next_line:
        return clean(next_line.group(1))
    return None


def parse_owner(block: str) -> str | None:
    for label in OWNER_LABELS:
        owner = first_line_after(label, block)
        if owner:
            return owner
    return None


# ===================== Odds / Sex / Age =====================


def parse_odds(block: str) -> str | None:
    """
    Morning line from the header zone.

    The header line itself is skipped so the post position is never read as
    odds; the next few lines are searched with fractional first.
    """
    if not block:
        logger.debug("parse_odds: empty block")
        return None
    zone = "\n".join(split_lines(block)[1 : 1 + ODDS_ZONE_LINES])
    for pattern in ODDS_PATTERNS:
        m = pattern.search(zone)
        if m:
            return m.group(1).replace(" ", "")
    return None


def _split_sex_age(block: str) -> tuple[str, str] | None:
    lines = non_empty_lines(block)
    for color, sex, age in zip(lines, lines[1:], lines[2:]):
        if not COLOR_LINE_RE.match(color):
            continue
        sex_m = SEX_LINE_RE.match(sex)
        age_m = AGE_LINE_RE.match(age)
        if sex_m and age_m:
            return sex_m.group(1), age_m.group(1)
    return None


def parse_sex_age(block: str) -> tuple[str, str] | None:
    """Returns (sex, age), e.g. ("f", "3") for "B. f. 3"."""
    if not block:
        logger.debug("parse_sex_age: empty block")
        return None
    m = SEX_AGE_RE.search(block)
    found = (m.group(1), m.group(2)) if m else _split_sex_age(block)
    if not found:
        m = SEX_AGE_BARE_RE.search(block)
        if not m:
            return None
        found = m.group(1), m.group(2)
    sex, age = found
    return sex.replace(".", "").lower(), age


# ===================== Ratings & Earnings =====================


def parse_prime_power(block: str) -> str | None:
    if not block:
        return None
    m = PRIME_POWER_RE.search(block)
    return clean(m.group(1)) if m else None


def parse_life(block: str) -> str | None:
    if not block:
        return None
    m = LIFE_RE.search(block)
    return clean(m.group(1)) if m else None


def parse_earnings_by_year(block: str) -> dict[str, str]:
    """Year -> summary line remainder, in order of first appearance."""
    by_year: dict[str, str] = {}
    if not block:
        return by_year
    for m in YEAR_LINE_RE.finditer(block):
        by_year[m.group(1)] = clean(m.group(2))
    return by_year


# ===================== Jockey / Silks =====================


def parse_jockey(block: str) -> JockeyInfo | None:
    """
    Jockey name and record.

    Preferred form is "BARRIOS RICARDO (254 58-42-39 23%)". Otherwise an
    uppercase-only line near the top counts when the next line reads like a
    starts/win-place-show record ("254 58-42-39").
    """
    if not block:
        logger.debug("parse_jockey: empty block")
        return None
    m = JOCKEY_PAREN_RE.search(block)
    if m:
        return JockeyInfo(name=collapse_spaces(m.group(1)), record=clean(m.group(2)))

    lines = split_lines(block)[:JOCKEY_SCAN_LINES]
    for i, line in enumerate(lines):
        candidate = clean(line)
        if not JOCKEY_NAME_ONLY_RE.match(candidate):
            continue
        following = clean(lines[i + 1]) if i + 1 < len(lines) else ""
        if RECORD_TRIPLE_RE.search(following):
            return JockeyInfo(name=collapse_spaces(candidate), record=following)
    return None


def _looks_like_jockey_line(line: str) -> bool:
    return bool(JOCKEY_PAREN_RE.match(line))


def parse_silks(block: str, owner: str | None = None) -> str | None:
    """
    Silks description.

    First pass takes a comma-bearing line from the top of the block. Second
    pass is positional: the first substantial line after the owner text, so
    it only works once the owner has been found.
    """
    if not block:
        return None
    for line in non_empty_lines(block)[:SILKS_SCAN_LINES]:
        if "," in line and len(line) > SILKS_MIN_LENGTH and not _looks_like_jockey_line(line):
            return line

    if owner and owner in block:
        after = block.split(owner, 1)[1]
        following = non_empty_lines(after)
        if following and len(following[0]) > SILKS_AFTER_OWNER_MIN_LENGTH:
            return following[0]
    return None


# ===================== Line Collectors =====================


def parse_surfaces(block: str) -> dict[str, list[str]]:
    """Surface/track record lines grouped by code, in order of appearance."""
    surfaces: dict[str, list[str]] = {}
    if not block:
        return surfaces
    for m in SURFACE_LINE_RE.finditer(block):
        code = _SURFACE_CANON.get(m.group(1).lower(), m.group(1))
        surfaces.setdefault(code, []).append(clean(m.group(0)[:MAX_SURFACE_LINE]))
    return surfaces


def parse_workouts(block: str) -> list[str]:
    if not block:
        logger.debug("parse_workouts: empty block")
        return []
    return [
        ln
        for ln in non_empty_lines(block)
        if len(ln) < MAX_WORKOUT_LINE and WORKOUT_RE.match(ln)
    ]


def parse_stat_lines(block: str) -> list[str]:
    """Lines carrying percentages, sire/sale stats, Prime Power or JKYw angles."""
    if not block:
        return []
    return [
        ln
        for ln in non_empty_lines(block)
        if "%" in ln or STAT_KEYWORD_RE.search(ln) or ln.startswith(STAT_LINE_MARKERS)
    ]


def parse_notes(block: str) -> list[str]:
    """Bulleted QuickPlay comments and stock handicapping phrases."""
    if not block:
        return []
    return [
        ln
        for ln in non_empty_lines(block)
        if ln.startswith(NOTE_MARKERS) or NOTE_PHRASE_RE.search(ln)
    ]
