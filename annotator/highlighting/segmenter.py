"""
Segmenter / Classifier — splits display text into literal and entity spans.

Segmentation is lossless: the span texts concatenate back to the input.
"""
import logging
import re
from typing import Dict, List, Sequence

from annotator.config.styles import DEFAULT_STYLE_TABLE
from annotator.highlighting.pattern_compiler import CompiledMatcher
from annotator.models.entity import EntityRecord
from annotator.models.span import EntitySpan, LiteralSpan, Span
from annotator.models.style import StyleTable

logger = logging.getLogger(__name__)


def _build_lookup(entities: Sequence[EntityRecord]) -> Dict[str, EntityRecord]:
    lookup: Dict[str, EntityRecord] = {}
    for record in entities:
        lookup.setdefault(record.name.strip().casefold(), record)
    return lookup


def _classify(
    match: re.Match,
    matcher: CompiledMatcher,
    lookup: Dict[str, EntityRecord],
    style_table: StyleTable,
) -> EntitySpan:
    text = match.group(0)
    record = lookup.get(text.casefold())
    if record is None:
        # Case folding that the regex engine treats differently (e.g. "ß").
        record = matcher.record_for(match)

    entity_type, style = style_table.resolve(record.type)
    return EntitySpan(
        text=text,
        entity_type=entity_type,
        label=style.label,
        style=style,
        entity_name=record.name,
        start=match.start(),
        end=match.end(),
    )


def segment(
    display_text: str,
    matcher: CompiledMatcher,
    entities: Sequence[EntityRecord],
    style_table: StyleTable = DEFAULT_STYLE_TABLE,
) -> List[Span]:
    """
    Segment *display_text* into literal and entity spans.

    Args:
        display_text: Text to annotate.
        matcher: Matcher compiled from *entities*.
        entities: Entity records used to recover each match's type; the
                  first record equal to the match ignoring case wins.
        style_table: Type → style mapping. Unknown types use its default.

    Returns:
        Spans in text order. Empty input gives []; no match gives a single
        LiteralSpan covering the whole text. Empty literals are omitted.
    """
    if not display_text:
        return []

    lookup = _build_lookup(entities)
    spans: List[Span] = []
    cursor = 0

    for match in matcher.finditer(display_text):
        start, end = match.span()
        if start > cursor:
            spans.append(LiteralSpan(text=display_text[cursor:start], start=cursor, end=start))
        spans.append(_classify(match, matcher, lookup, style_table))
        cursor = end

    if cursor < len(display_text):
        spans.append(LiteralSpan(text=display_text[cursor:], start=cursor, end=len(display_text)))

    logger.debug(
        "Segmented %d chars into %d spans (%d entity)",
        len(display_text),
        len(spans),
        sum(1 for s in spans if isinstance(s, EntitySpan)),
    )
    return spans
