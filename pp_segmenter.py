"""
Record Segmenter - splits a Brisnet PP document into per-horse spans
===================================================================

Anchors are tried in order:
  1. Primary:  "3   SECRETARIAT (A1)"  post, 1-3 blanks, name, "(" on one line
  2. Fallback: post alone on a line, blank lines, then a name-only line
  3. Last resort: the whole document as one span with unknown post/name

Overlapping or bogus anchors (a name line that happens to start with a small
number) are kept as found. No de-duplication is attempted.
"""

import logging
import re
from collections.abc import Callable

from pp_config import POST_MAX, POST_MIN
from pp_models import Anchor, RecordSpan
from pp_utils import clean, normalize_line_endings

logger = logging.getLogger(__name__)

_POST = r"([1-9]|1[0-9]|20)"
_NAME_START = r"A-Za-z0-9/'’.\-"
_NAME_CHARS = _NAME_START + r" \t"

# Name words hold no blanks; separators are only blanks
PRIMARY_ANCHOR_RE = re.compile(
    rf"""(?m)^
    {_POST}                             # post position 1-20
    [ \t]{{1,3}}                        # 1-3 blanks
    ([{_NAME_START}]+(?:[ \t]+[{_NAME_START}]+)*)  # horse name, single line
    [ \t]*\(                            # "(" opens the tag
    """,
    re.VERBOSE,
)

FALLBACK_ANCHOR_RE = re.compile(
    rf"""(?m)^
    [ \t]*{_POST}[ \t]*\n               # post alone on its line
    (?:[ \t]*\n)*                       # optional blank lines
    [ \t]*([{_NAME_START}][{_NAME_CHARS}]*)  # name-only line
    (?=\n)
    """,
    re.VERBOSE,
)


def _anchors_from(pattern: re.Pattern, text: str) -> list[Anchor]:
    anchors = []
    for m in pattern.finditer(text):
        post = int(m.group(1))
        if not POST_MIN <= post <= POST_MAX:
            continue
        anchors.append(Anchor(offset=m.start(), post=post, name=clean(m.group(2))))
    return anchors


def find_primary_anchors(text: str) -> list[Anchor]:
    return _anchors_from(PRIMARY_ANCHOR_RE, text)


def find_fallback_anchors(text: str) -> list[Anchor]:
    return _anchors_from(FALLBACK_ANCHOR_RE, text)


ANCHOR_STRATEGIES: tuple[Callable[[str], list[Anchor]], ...] = (
    find_primary_anchors,
    find_fallback_anchors,
)


def select_anchors(text: str) -> list[Anchor]:
    """Return the anchors of the first strategy that finds any."""
    for strategy in ANCHOR_STRATEGIES:
        anchors = strategy(text)
        if anchors:
            logger.debug("select_anchors: %s found %d anchors", strategy.__name__, len(anchors))
            return anchors
    return []


def spans_from_anchors(text: str, anchors: list[Anchor]) -> list[RecordSpan]:
    spans = []
    for i, anchor in enumerate(anchors):
        end = anchors[i + 1].offset if i + 1 < len(anchors) else len(text)
        spans.append(RecordSpan(post=anchor.post, name=anchor.name, raw=clean(text[anchor.offset:end])))
    return spans


def segment_document(text: str | None) -> list[RecordSpan]:
    """
    Split document text into ordered RecordSpans.

    Returns [] only for empty input; a document without any anchor becomes a
    single span with post=None and name=None.
    """
    if not text:
        logger.debug("segment_document: empty text")
        return []

    normalized = normalize_line_endings(text)
    anchors = select_anchors(normalized)
    if not anchors:
        logger.debug("segment_document: no anchors, using whole document as one span")
        return [RecordSpan(post=None, name=None, raw=clean(normalized))]

    return spans_from_anchors(normalized, anchors)
