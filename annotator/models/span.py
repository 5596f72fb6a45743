"""
Span models — the output of segmentation.

A segmentation is a list of LiteralSpan / EntitySpan in text order whose
texts concatenate back to the original display text.
"""
from dataclasses import dataclass
from typing import List, Union

from annotator.models.style import EntityStyle


@dataclass(frozen=True)
class LiteralSpan:
    """Untouched display text."""

    text: str
    start: int
    end: int

    def to_dict(self) -> dict:
        return {
            "kind": "literal",
            "text": self.text,
            "start": self.start,
            "end": self.end,
        }


@dataclass(frozen=True)
class EntitySpan:
    """Display text matched to an entity, with its resolved classification."""

    text: str                # exact matched substring, display-text casing
    entity_type: str         # resolved style-table key ("default" if unknown)
    label: str
    style: EntityStyle
    entity_name: str         # name as stored in the EntityRecord
    start: int
    end: int

    def to_dict(self) -> dict:
        return {
            "kind": "entity",
            "text": self.text,
            "start": self.start,
            "end": self.end,
            "entity_type": self.entity_type,
            "entity_name": self.entity_name,
            "label": self.label,
            "style": self.style.model_dump(),
        }

    def __repr__(self) -> str:
        return f"EntitySpan('{self.text}', {self.entity_type}, [{self.start},{self.end}])"


Span = Union[LiteralSpan, EntitySpan]


def join_spans(spans: List[Span]) -> str:
    """Reconstruct the display text from a segmentation."""
    return "".join(span.text for span in spans)
