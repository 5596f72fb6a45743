"""
Annotation Pipeline — main entry point for entity highlighting.

Executes the 3-stage flow:
    1. Entity extraction from the context string
    2. Matcher compilation (skipped when no entity was found)
    3. Segmentation / classification of the display text

When extraction yields no usable entity name the display text comes back as
one literal span; this is the single fallback path and never raises.
"""
import logging
import time
from contextlib import nullcontext
from typing import List, Optional, Tuple

from annotator.config import settings
from annotator.config.constants import ANNOTATOR_VERSION
from annotator.config.styles import DEFAULT_STYLE_TABLE
from annotator.extraction.context_parser import extract_entities, extract_relationships
from annotator.highlighting.metrics import AnnotationMetrics
from annotator.highlighting.pattern_compiler import NoEntitiesError, compile_matcher
from annotator.highlighting.segmenter import segment
from annotator.models.entity import EntityRecord
from annotator.models.span import EntitySpan, LiteralSpan, Span
from annotator.models.style import StyleTable

logger = logging.getLogger(__name__)


def _preview(text: str) -> str:
    limit = settings.MAX_TEXT_LOG_CHARS
    return text if len(text) <= limit else text[:limit] + "…"


def _literal_fallback(display_text: str) -> List[Span]:
    if not display_text:
        return []
    return [LiteralSpan(text=display_text, start=0, end=len(display_text))]


def _stage(metrics: Optional[AnnotationMetrics], name: str):
    return metrics.timed_stage(name) if metrics is not None else nullcontext()


def _annotate_spans(
    entities: List[EntityRecord],
    display_text: str,
    style_table: StyleTable,
    metrics: Optional[AnnotationMetrics] = None,
) -> Tuple[List[Span], bool]:
    """Return (spans, fallback_applied)."""
    if not entities:
        return _literal_fallback(display_text), True

    try:
        with _stage(metrics, "compile"):
            matcher = compile_matcher(entities)
    except NoEntitiesError:
        logger.warning("No usable entity name among %d extracted", len(entities))
        return _literal_fallback(display_text), True

    with _stage(metrics, "segment"):
        return segment(display_text, matcher, entities, style_table), False


def build_annotations(
    context_text: str,
    display_text: str,
    style_table: Optional[StyleTable] = None,
) -> List[Span]:
    """
    Annotate *display_text* with the entities declared in *context_text*.

    Args:
        context_text: Knowledge-graph excerpt (entity declarations and
                      relationship lines).
        display_text: Text to segment, e.g. one chat message.
        style_table: Type → style mapping. Defaults to DEFAULT_STYLE_TABLE.

    Returns:
        Lossless span list. A context without entities gives a single
        LiteralSpan equal to *display_text* ([] for empty text).
    """
    if style_table is None:
        style_table = DEFAULT_STYLE_TABLE
    entities = extract_entities(context_text)
    spans, _ = _annotate_spans(entities, display_text, style_table)
    return spans


def annotate(
    context_text: str,
    display_text: str,
    style_table: Optional[StyleTable] = None,
    metrics: Optional[AnnotationMetrics] = None,
) -> dict:
    """
    Full annotation run returning a JSON-ready document.

    Same composition as build_annotations(), plus the extracted entities and
    relationships, diagnostics and processing metadata.

    Returns:
        Dict conforming to ANNOTATION_OUTPUT_SCHEMA.
    """
    start_time = time.monotonic()

    if style_table is None:
        style_table = DEFAULT_STYLE_TABLE
    display_text = display_text or ""

    logger.debug("Annotating text: %s", _preview(display_text))

    with _stage(metrics, "extract"):
        entities = extract_entities(context_text)
        relationships = extract_relationships(context_text)

    spans, fallback_applied = _annotate_spans(entities, display_text, style_table, metrics)

    warnings: List[str] = []
    if not entities:
        warnings.append("no entities found in context; display text returned as literal")
    elif fallback_applied:
        warnings.append("no usable entity name; display text returned as literal")

    entity_spans = sum(1 for s in spans if isinstance(s, EntitySpan))
    if not fallback_applied and not entity_spans:
        warnings.append(f"none of {len(entities)} entities occur in display text")

    if metrics is not None:
        metrics.record_extraction(len(entities))
        metrics.record_spans(spans)
        if fallback_applied:
            metrics.record_fallback()

    elapsed_ms = int((time.monotonic() - start_time) * 1000)

    return {
        "entities": [
            {**e.to_dict(), "classification": style_table.resolve(e.type)[0]}
            for e in entities
        ],
        "relationships": [r.to_dict() for r in relationships],
        "spans": [s.to_dict() for s in spans],
        "diagnostics": {
            "warnings": warnings,
            "fallback_applied": fallback_applied,
        },
        "processing_metadata": {
            "annotator_version": ANNOTATOR_VERSION,
            "duration_ms": elapsed_ms,
            "entities_extracted": len(entities),
            "entity_spans": entity_spans,
            "literal_spans": len(spans) - entity_spans,
        },
    }
