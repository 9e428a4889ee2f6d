"""
pp_field_validator.py - Parsed Field Coverage Audit
===================================================
Every extractor is best-effort and reports failure as an empty field, so the
only way to judge how well a document parsed is to count which fields came
back empty. This module does that counting for one record or a whole card.

Usage:
    from pp_field_validator import field_coverage, log_coverage_report
    records = parse_document(text)
    log_coverage_report(records)
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from pp_config import LOW_COVERAGE_THRESHOLD
from pp_models import HorseRecord

logger = logging.getLogger(__name__)

# HorseRecord fields audited, grouped the same way the record is laid out
REPORTED_FIELDS: list[str] = [
    # ── Identity ──────────────────────────────────────────────────
    "post",
    "name",
    "tag",
    # ── Connections ───────────────────────────────────────────────
    "owner",
    "silks",
    "odds",
    "jockey",
    "trainer",
    "breeder",
    # ── Pedigree ──────────────────────────────────────────────────
    "sex",
    "age",
    "sire",
    "dam",
    # ── Performance ───────────────────────────────────────────────
    "prime_power",
    "life",
    "by_year",
    "surfaces",
    "stat_lines",
    "workouts",
    "notes",
    "past_performances",
]


def _is_populated(record: HorseRecord, field_name: str) -> bool:
    value = getattr(record, field_name)
    if field_name == "jockey":
        return bool(value.name)
    if field_name == "post":
        return value is not None
    return bool(value)


def missing_fields(record: HorseRecord) -> list[str]:
    """Names of the audited fields left at their empty default."""
    return [f for f in REPORTED_FIELDS if not _is_populated(record, f)]


def field_coverage(records: list[HorseRecord]) -> pd.DataFrame:
    """
    Per-field fill counts across records.

    Returns a DataFrame indexed by field with columns
    ``populated`` (int) and ``fill_rate`` (0.0-1.0).
    """
    if not records:
        return pd.DataFrame(
            {"populated": np.zeros(len(REPORTED_FIELDS), dtype=int), "fill_rate": np.zeros(len(REPORTED_FIELDS))},
            index=pd.Index(REPORTED_FIELDS, name="field"),
        )

    filled = np.array([[_is_populated(r, f) for f in REPORTED_FIELDS] for r in records], dtype=bool)
    return pd.DataFrame(
        {"populated": filled.sum(axis=0).astype(int), "fill_rate": filled.mean(axis=0)},
        index=pd.Index(REPORTED_FIELDS, name="field"),
    )


def log_coverage_report(records: list[HorseRecord], threshold: float = LOW_COVERAGE_THRESHOLD) -> list[str]:
    """Log fields filled for fewer than ``threshold`` of records; returns their names."""
    if not records:
        logger.debug("log_coverage_report: no records")
        return []
    coverage = field_coverage(records)
    weak = coverage.index[coverage["fill_rate"] < threshold].tolist()
    if weak:
        logger.warning("Low field coverage (<%.0f%%) across %d horses: %s", threshold * 100, len(records), weak)
    else:
        logger.info("Field coverage OK across %d horses", len(records))
    return weak
