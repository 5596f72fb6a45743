"""
Pattern Compiler — one case-insensitive whole-token matcher per entity list.

Alternatives are emitted in extraction order. Python's alternation is
first-match-wins at a given start position, so when names overlap
("Data" / "Data Science") the earliest-declared entity wins.
"""
import logging
import re
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Set, Tuple

from annotator.models.entity import EntityRecord

logger = logging.getLogger(__name__)


class NoEntitiesError(ValueError):
    """No usable entity name to build a matcher from."""


@dataclass(frozen=True)
class CompiledMatcher:
    """Immutable compiled alternation over an entity list."""

    pattern: re.Pattern
    entities: Tuple[EntityRecord, ...]

    def finditer(self, text: str) -> Iterator[re.Match]:
        """Non-overlapping matches, left to right."""
        return self.pattern.finditer(text)

    def record_for(self, match: re.Match) -> EntityRecord:
        """The entity whose alternative produced *match*."""
        return self.entities[int(match.lastgroup[1:])]

    def __len__(self) -> int:
        return len(self.entities)


def _usable_entities(entities: Sequence[EntityRecord]) -> List[EntityRecord]:
    usable: List[EntityRecord] = []
    seen: Set[str] = set()
    dropped = 0

    for record in entities:
        name = record.name.strip()
        if not name:
            dropped += 1
            continue
        if name.casefold() in seen:
            continue
        seen.add(name.casefold())
        usable.append(record if name == record.name else EntityRecord(name=name, type=record.type))

    if dropped:
        logger.warning("Dropped %d empty entity name(s) before compilation", dropped)
    return usable


def compile_matcher(entities: Sequence[EntityRecord]) -> CompiledMatcher:
    """
    Build the entity matcher.

    Each name is literal-escaped and wrapped in its own named group (e0, e1,
    ...) so a match maps back to its record. The alternation is anchored so a
    match is never part of a larger alphanumeric token ("AI" does not match
    inside "CHAIN").

    Args:
        entities: Extracted entity records, in precedence order.

    Returns:
        CompiledMatcher, reusable across any number of segmentation calls.

    Raises:
        NoEntitiesError: if no non-empty entity name remains.
    """
    usable = _usable_entities(entities)
    if not usable:
        raise NoEntitiesError("Cannot compile a matcher without entity names")

    alternation = "|".join(
        f"(?P<e{i}>{re.escape(record.name)})" for i, record in enumerate(usable)
    )
    pattern = re.compile(rf"(?<!\w)(?:{alternation})(?!\w)", re.IGNORECASE)

    logger.debug("Compiled matcher over %d entity name(s)", len(usable))
    return CompiledMatcher(pattern=pattern, entities=tuple(usable))
