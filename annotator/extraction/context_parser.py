"""
Context Parser — harvests entities from a knowledge-graph context string.

Two sequential passes over the same text, sharing one de-duplication state:
    1. Declarations:   "Entity: <name> (<type>)"
    2. Relationships:  "<source> → <KIND> → <target>"
                       "<source> --[<KIND> (strong)]--> <target> | notes"
       Endpoints not already collected are added with the default type.

Declarations run first, so an explicit classification always wins over a
relationship mention of the same name.
"""
import logging
import re
from typing import Iterator, List, Set

from annotator.config.constants import (
    DECLARATION_LABEL,
    DEFAULT_ENTITY_TYPE,
    LIST_BULLETS,
    MIN_ENDPOINT_LENGTH,
    RELATION_ARROW,
)
from annotator.models.entity import EntityRecord, RelationshipRecord

logger = logging.getLogger(__name__)

_DECLARATION_PATTERN = re.compile(
    re.escape(DECLARATION_LABEL) + r"([^(\n]*)\(([^)\n]*)\)",
    re.IGNORECASE,
)

_RELATION_KIND = re.compile(r"[A-Z_]+")

# Serialized graph form, e.g. "- Aurora --[BLOCKS (strong)]--> Launch | "notes""
_GRAPH_RELATION = re.compile(
    r"^(?P<source>.+?)--\[(?P<kind>[A-Z_]+)(?:\s*\([^)\]]*\))?\]-->(?P<target>.+)$"
)


class _EntityCollector:
    """Ordered, case-insensitively de-duplicated entity accumulator."""

    def __init__(self) -> None:
        self._records: List[EntityRecord] = []
        self._seen: Set[str] = set()

    def __contains__(self, name: str) -> bool:
        return name.casefold() in self._seen

    def add(self, name: str, entity_type: str) -> bool:
        record = EntityRecord(name=name, type=entity_type)
        if record.key in self._seen:
            return False
        self._seen.add(record.key)
        self._records.append(record)
        return True

    @property
    def records(self) -> List[EntityRecord]:
        return list(self._records)


def _clean_endpoint(raw: str) -> str:
    """Strip list bullets, "(annotation)" suffixes and "| notes" tails."""
    text = raw.strip().lstrip(LIST_BULLETS).strip()
    for stop in ("(", "|"):
        if stop in text:
            text = text[: text.index(stop)]
    return text.strip()


def _parse_arrow_line(line: str) -> List[RelationshipRecord]:
    parts = line.split(RELATION_ARROW)
    # endpoint → KIND → endpoint [→ KIND → endpoint ...]; a trailing fragment
    # that does not form another triple ends the chain.
    relationships: List[RelationshipRecord] = []
    for i in range(1, len(parts) - 1, 2):
        kind = parts[i].strip()
        if not _RELATION_KIND.fullmatch(kind):
            break
        relationships.append(
            RelationshipRecord(
                source=_clean_endpoint(parts[i - 1]),
                kind=kind,
                target=_clean_endpoint(parts[i + 1]),
            )
        )
    return relationships


def _parse_graph_line(line: str) -> List[RelationshipRecord]:
    match = _GRAPH_RELATION.match(line.strip())
    if match is None:
        return []
    return [
        RelationshipRecord(
            source=_clean_endpoint(match.group("source")),
            kind=match.group("kind"),
            target=_clean_endpoint(match.group("target")),
        )
    ]


def _iter_relationships(context: str) -> Iterator[RelationshipRecord]:
    for line in context.splitlines():
        if RELATION_ARROW in line:
            yield from _parse_arrow_line(line)
        elif "]-->" in line:
            yield from _parse_graph_line(line)


def _is_endpoint_candidate(name: str) -> bool:
    return len(name) > MIN_ENDPOINT_LENGTH and ":" not in name


def _collect_declarations(context: str, collector: _EntityCollector) -> None:
    for match in _DECLARATION_PATTERN.finditer(context):
        name = match.group(1).strip()
        entity_type = match.group(2).strip().lower()
        if not name or not entity_type:
            continue
        collector.add(name, entity_type)


def _collect_relationship_endpoints(context: str, collector: _EntityCollector) -> None:
    for relationship in _iter_relationships(context):
        for name in (relationship.source, relationship.target):
            if _is_endpoint_candidate(name) and name not in collector:
                collector.add(name, DEFAULT_ENTITY_TYPE)


def extract_entities(context: str) -> List[EntityRecord]:
    """
    Extract the canonical entity list from a context string.

    Never raises: empty or unstructured input yields an empty list.

    Args:
        context: Knowledge-graph excerpt (declarations and relationship lines).

    Returns:
        EntityRecords in discovery order: declarations first, then
        relationship endpoints in line order, source before target.
    """
    if not isinstance(context, str) or not context.strip():
        return []

    collector = _EntityCollector()
    _collect_declarations(context, collector)
    declared = len(collector.records)
    _collect_relationship_endpoints(context, collector)

    records = collector.records
    logger.debug(
        "Extracted %d entities (%d declared, %d from relationships)",
        len(records),
        declared,
        len(records) - declared,
    )
    return records


def extract_relationships(context: str) -> List[RelationshipRecord]:
    """
    Parse the relationship lines of a context string, in line order.

    Endpoints are cleaned but not length-filtered. Lines whose middle tokens
    are not UPPER_CASE relation kinds, and relationships with an empty
    endpoint, are ignored.
    """
    if not isinstance(context, str) or not context.strip():
        return []
    return [r for r in _iter_relationships(context) if r.source and r.target]
