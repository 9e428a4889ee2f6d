"""
Data models for parsed Brisnet past-performance text.

Document -> Anchor -> RecordSpan -> HorseRecord (with PastPerformanceRow
children) is a one-shot forward pipeline; nothing here is mutated once the
assembler hands it back.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

# ===================== Segmentation =====================


@dataclass(frozen=True)
class Anchor:
    """A located record-start signature."""

    offset: int
    post: int
    name: str


@dataclass(frozen=True)
class RecordSpan:
    """Raw text belonging to one horse; post/name are None when not anchored."""

    post: int | None
    name: str | None
    raw: str


# ===================== Parsed Output =====================


@dataclass(frozen=True)
class JockeyInfo:
    name: str = ""
    record: str = ""  # "(254 58-42-39 23%)" contents, or the record line below the name


@dataclass(frozen=True)
class PastPerformanceRow:
    """One running line. Every field is heuristic, so the joined chunk is kept in `raw`."""

    raw: str
    date: str = ""
    track: str = ""
    dist: str = ""
    times: str = ""  # Space-joined fractional and final times
    racetype: str = ""
    speed: str = ""
    fin: str = ""
    jockey: str = ""
    odds: str = ""
    comment: str = ""


@dataclass
class HorseRecord:
    """Structured horse data. Unrecovered fields keep their empty defaults."""

    # Identity
    post: int | None = None
    name: str = ""
    tag: str = ""

    # Connections
    owner: str = ""
    silks: str = ""
    odds: str = ""
    jockey: JockeyInfo = field(default_factory=JockeyInfo)
    trainer: str = ""
    breeder: str = ""

    # Pedigree
    sex: str = ""
    age: str = ""
    sire: str = ""
    dam: str = ""

    # Performance
    prime_power: str = ""
    life: str = ""
    by_year: dict[str, str] = field(default_factory=dict)
    surfaces: dict[str, list[str]] = field(default_factory=dict)
    stat_lines: list[str] = field(default_factory=list)
    workouts: list[str] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    past_performances: list[PastPerformanceRow] = field(default_factory=list)

    raw: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
