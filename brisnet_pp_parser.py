"""
Brisnet Past Performances Parser

Turns the text extracted from a Brisnet PP document into one HorseRecord per
horse. Segmentation lives in pp_segmenter, the per-field extractors in
pp_parsing and race_history_parser; this module assembles their results and
exposes the pipeline entry points plus JSON / DataFrame export.
"""

import json
import logging
import sys
from typing import Any

import pandas as pd

from pp_config import BREEDER_LABEL, DAM_LABEL, SIRE_LABEL, TRAINER_LABEL
from pp_models import HorseRecord, JockeyInfo, RecordSpan
from pp_parsing import (
    first_line_after,
    parse_earnings_by_year,
    parse_header,
    parse_jockey,
    parse_life,
    parse_notes,
    parse_odds,
    parse_owner,
    parse_prime_power,
    parse_sex_age,
    parse_silks,
    parse_stat_lines,
    parse_surfaces,
    parse_workouts,
)
from pp_segmenter import segment_document
from pp_utils import normalize_line_endings
from race_history_parser import parse_past_performances

logger = logging.getLogger(__name__)

RECORD_COLUMNS = [
    "post",
    "name",
    "tag",
    "odds",
    "owner",
    "silks",
    "jockey",
    "jockey_record",
    "trainer",
    "breeder",
    "sex",
    "age",
    "sire",
    "dam",
    "prime_power",
    "life",
    "years",
    "surface_lines",
    "stat_lines",
    "workouts",
    "notes",
    "past_performances",
]

PP_ROW_COLUMNS = [
    "post",
    "name",
    "date",
    "track",
    "dist",
    "times",
    "racetype",
    "speed",
    "fin",
    "jockey",
    "odds",
    "comment",
    "raw",
]


# ===================== Record Assembly =====================


def _as_span(span: RecordSpan | str | None) -> RecordSpan:
    if isinstance(span, RecordSpan):
        return span
    return RecordSpan(post=None, name=None, raw=normalize_line_endings(span).strip())


def _assemble(span: RecordSpan) -> HorseRecord:
    raw = span.raw
    header_post, header_name, tag = parse_header(raw)
    post = span.post if span.post is not None else header_post
    name = span.name or header_name

    owner = parse_owner(raw)
    sex_age = parse_sex_age(raw)
    sex, age = sex_age if sex_age else ("", "")

    return HorseRecord(
        post=post,
        name=name or "",
        tag=tag,
        owner=owner or "",
        silks=parse_silks(raw, owner) or "",
        odds=parse_odds(raw) or "",
        jockey=parse_jockey(raw) or JockeyInfo(),
        trainer=first_line_after(TRAINER_LABEL, raw) or "",
        breeder=first_line_after(BREEDER_LABEL, raw) or "",
        sex=sex,
        age=age,
        sire=first_line_after(SIRE_LABEL, raw) or "",
        dam=first_line_after(DAM_LABEL, raw) or "",
        prime_power=parse_prime_power(raw) or "",
        life=parse_life(raw) or "",
        by_year=parse_earnings_by_year(raw),
        surfaces=parse_surfaces(raw),
        stat_lines=parse_stat_lines(raw),
        workouts=parse_workouts(raw),
        notes=parse_notes(raw),
        past_performances=parse_past_performances(raw),
        raw=raw,
    )


def assemble_record(span: RecordSpan | str | None) -> HorseRecord:
    """
    Build one HorseRecord from a span (or a bare block of text).

    Never raises: an unexpected failure is logged and a record carrying only
    post/name/raw is returned so one bad block cannot sink the document.
    """
    span = _as_span(span)
    try:
        return _assemble(span)
    except Exception as e:
        logger.warning("assemble_record: failed to parse %r: %s", span.name, e)
        return HorseRecord(post=span.post, name=span.name or "", raw=span.raw)


def parse_document(text: str | None) -> list[HorseRecord]:
    """Segment the document and assemble every span, in document order."""
    if not text:
        logger.debug("parse_document: empty text")
        return []
    records = [assemble_record(span) for span in segment_document(text)]
    logger.info("parse_document: parsed %d horses", len(records))
    return records


# ===================== Export =====================


def parse_brisnet_pp_to_json(pp_text: str | None, indent: int = 2) -> str:
    """
    Parse Brisnet PP text into a JSON array of horse records.

    Args:
        pp_text: Raw text extracted from a Brisnet PP
        indent: JSON indentation

    Returns:
        JSON string
    """
    return json.dumps([r.to_dict() for r in parse_document(pp_text)], indent=indent, ensure_ascii=False)


def records_to_dataframe(records: list[HorseRecord]) -> pd.DataFrame:
    """One row per horse: scalar fields plus counts for the collected lines."""
    rows: list[dict[str, Any]] = []
    for r in records:
        rows.append(
            {
                "post": r.post,
                "name": r.name,
                "tag": r.tag,
                "odds": r.odds,
                "owner": r.owner,
                "silks": r.silks,
                "jockey": r.jockey.name,
                "jockey_record": r.jockey.record,
                "trainer": r.trainer,
                "breeder": r.breeder,
                "sex": r.sex,
                "age": r.age,
                "sire": r.sire,
                "dam": r.dam,
                "prime_power": r.prime_power,
                "life": r.life,
                "years": len(r.by_year),
                "surface_lines": sum(len(v) for v in r.surfaces.values()),
                "stat_lines": len(r.stat_lines),
                "workouts": len(r.workouts),
                "notes": len(r.notes),
                "past_performances": len(r.past_performances),
            }
        )
    df = pd.DataFrame(rows, columns=RECORD_COLUMNS)
    # Keep missing posts as <NA> instead of promoting the column to float
    df["post"] = df["post"].astype("Int64")
    return df


def past_performances_to_dataframe(records: list[HorseRecord]) -> pd.DataFrame:
    rows = []
    for r in records:
        for pp in r.past_performances:
            rows.append({"post": r.post, "name": r.name, **{k: getattr(pp, k) for k in PP_ROW_COLUMNS[2:]}})
    df = pd.DataFrame(rows, columns=PP_ROW_COLUMNS)
    df["post"] = df["post"].astype("Int64")
    return df


# Convenience function for command-line use
def main(argv: list[str] | None = None) -> int:
    """Parse a PP text file and print the records as JSON."""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print("usage: brisnet_pp_parser.py <pp_text_file>", file=sys.stderr)
        return 2

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    path = args[0]
    try:
        with open(path, "r", encoding="utf-8") as f:
            pp_text = f.read()
    except FileNotFoundError:
        print(f"File not found: {path}", file=sys.stderr)
        return 2

    print(parse_brisnet_pp_to_json(pp_text))
    return 0


if __name__ == "__main__":
    sys.exit(main())
