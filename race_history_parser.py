"""
Race History Parser - Brisnet past-performance running lines
============================================================

After text extraction the PP grid has no reliable column delimiters, so each
running line is located by its leading date token and every field is pulled
out independently by shape or keyword rather than by column offset. Columns
drift; a field may land in the wrong slot. The joined chunk is always kept in
PastPerformanceRow.raw so callers can see what the guess was made from.

Row layout being targeted:
  09Oct25Aqu  6f  :22 :45 1:10  OC40k  ...  86  ...  5  VelazquezJR  3.20  bumped start
  DATE+TRK    DIST  TIMES       TYPE         SPD      FIN JOCKEY       ODDS  COMMENT
"""

import logging
import re

from pp_config import (
    COMMENT_KEYWORDS,
    DISTANCE_GLYPHS,
    MAX_CONTINUATION_LINES,
    PP_SECTION_HEADER,
    RACE_TYPE_CODES,
    SPEED_FIGURE_TAIL,
)
from pp_models import PastPerformanceRow
from pp_utils import alternation, clean, non_empty_lines

logger = logging.getLogger(__name__)

SECTION_RE = re.compile(PP_SECTION_HEADER, re.IGNORECASE)

# "09Oct25Aqu", "13Dec25GP", "10Sep25KD" (ASCII word boundaries: "Aquª" still ends at "Aqu")
DATE_TOKEN_RE = re.compile(r"^(\d{2}[A-Za-z]{3}\d{2}[A-Za-z]*)\b", re.ASCII)
DATE_PREFIX_RE = re.compile(r"^\d{2}[A-Za-z]{3}\d{2}")

DISTANCE_PATTERNS = [
    # Unit-bearing: "6f", "5½f", "1 1/16 m", "1mi", "1ˆ"
    re.compile(
        rf"(?<![\w/.:])(\d+(?:½|\s\d+/\d+)?\s?(?:mi|m|f|{alternation(DISTANCE_GLYPHS)}))(?![A-Za-z0-9])"
    ),
    re.compile(r"\b(\d+(?:[/\d]*|m|f))\b", re.ASCII),
]

TIME_RE = re.compile(r"(?<![\d:])\d{0,2}:\d{2}(?::\d{2})?")
RACE_TYPE_RE = re.compile(
    rf"\b({alternation(RACE_TYPE_CODES, escape=False)})", re.IGNORECASE | re.ASCII
)
SPEED_FIGURE_RE = re.compile(rf"\b(\d{{2,3}})(?=\b[^$]{{0,{SPEED_FIGURE_TAIL}}}$)", re.ASCII)
FINISH_RE = re.compile(r"\b([1-9]|1[0-9]|20)\b", re.ASCII)
LATER_DIGIT_RE = re.compile(r"\b[1-9]", re.ASCII)
JOCKEY_TOKEN_RE = re.compile(
    r"([A-Z][A-Za-z.\-]{2,30}(?:\s[A-Z][A-Za-z.\-]{2,30})?)(?=\s*[A-Z¨(\[*]|$)"
)
ODDS_TOKEN_RE = re.compile(r"(\*?\d+\.\d+|\d+/\d+|\d{1,2}\.\d{2}|\*\d+)")
COMMENT_RE = re.compile(rf"{alternation(COMMENT_KEYWORDS)}[^.;]*", re.IGNORECASE)


# ===================== Sectioning =====================


def isolate_history_section(block: str) -> str:
    """Text from the first "DATE TRK" header on; the whole block when there is none."""
    m = SECTION_RE.search(block or "")
    if not m:
        logger.debug("isolate_history_section: no DATE TRK header, scanning whole block")
        return block or ""
    return block[m.start():]


def chunk_rows(section: str) -> list[str]:
    """
    Group running lines into row chunks.

    Each date-led line opens a chunk; up to MAX_CONTINUATION_LINES following
    lines are appended unless another date line comes first. The cap stops a
    missed date from swallowing the rest of the block.
    """
    lines = non_empty_lines(section)
    chunks = []
    for i, line in enumerate(lines):
        if not DATE_TOKEN_RE.match(line):
            continue
        parts = [line]
        for nxt in lines[i + 1 : i + 1 + MAX_CONTINUATION_LINES]:
            if DATE_TOKEN_RE.match(nxt):
                break
            parts.append(nxt)
        chunks.append(" ".join(parts))
    return chunks


# ===================== Per-field Extractors =====================


def row_date(chunk: str) -> str | None:
    m = DATE_TOKEN_RE.match(chunk)
    return m.group(1) if m else None


def row_track(chunk: str, jockey: str | None) -> str | None:
    # Crude: whatever trails ddMonyy in the leading token, and only when a
    # jockey token suggests this is a real running line
    tokens = chunk.split()
    if not jockey or not tokens:
        return None
    return clean(DATE_PREFIX_RE.sub("", tokens[0], count=1)[:6]) or None


def row_distance(chunk: str) -> str | None:
    for pattern in DISTANCE_PATTERNS:
        m = pattern.search(chunk)
        if m:
            return m.group(1)
    return None


def row_times(chunk: str) -> str | None:
    times = TIME_RE.findall(chunk)
    return " ".join(times) if times else None


def row_race_type(chunk: str) -> str | None:
    m = RACE_TYPE_RE.search(chunk)
    return m.group(1) if m else None


def row_speed_figure(chunk: str) -> str | None:
    """First 2-3 digit number whose remaining tail is short and holds no "$"."""
    m = SPEED_FIGURE_RE.search(chunk)
    return m.group(1) if m else None


def row_finish(chunk: str) -> str | None:
    """
    Finish position: the last standalone 1-20 in the chunk.

    Only accepted when no later word-boundary digit follows it, so "5 110"
    yields nothing rather than "5".
    """
    candidates = list(FINISH_RE.finditer(chunk))
    if not candidates:
        return None
    last = candidates[-1]
    if LATER_DIGIT_RE.search(chunk, last.end()):
        return None
    return last.group(1)


def row_jockey(chunk: str) -> str | None:
    m = JOCKEY_TOKEN_RE.search(chunk)
    return m.group(1) if m else None


def row_odds(chunk: str) -> str | None:
    m = ODDS_TOKEN_RE.search(chunk)
    return m.group(1) if m else None


def row_comment(chunk: str) -> str | None:
    m = COMMENT_RE.search(chunk)
    return clean(m.group(0)) if m else None


# ===================== Row Assembly =====================


def parse_row(chunk: str) -> PastPerformanceRow:
    jockey = row_jockey(chunk)
    return PastPerformanceRow(
        raw=chunk,
        date=row_date(chunk) or "",
        track=row_track(chunk, jockey) or "",
        dist=row_distance(chunk) or "",
        times=row_times(chunk) or "",
        racetype=row_race_type(chunk) or "",
        speed=row_speed_figure(chunk) or "",
        fin=row_finish(chunk) or "",
        jockey=jockey or "",
        odds=row_odds(chunk) or "",
        comment=row_comment(chunk) or "",
    )


def parse_past_performances(block: str) -> list[PastPerformanceRow]:
    if not block:
        logger.debug("parse_past_performances: empty block")
        return []
    return [parse_row(chunk) for chunk in chunk_rows(isolate_history_section(block))]
