"""
Entity and relationship records harvested from a knowledge-graph context string.
"""
from dataclasses import dataclass
from enum import Enum

from annotator.config.constants import DEFAULT_ENTITY_TYPE, RELATIONSHIP_LABELS


class EntityType(str, Enum):
    """Built-in entity classifications. DEFAULT is the unclassified fallback."""

    PROJECT = "project"
    BLOCKER = "blocker"
    EMOTION = "emotion"
    PATTERN = "pattern"
    WIN = "win"
    SKILL = "skill"
    PERSON = "person"
    TOOL = "tool"
    HABIT = "habit"
    GOAL = "goal"
    DEFAULT = DEFAULT_ENTITY_TYPE


@dataclass(frozen=True)
class EntityRecord:
    """A named entity with its (lower-cased) classification tag."""

    name: str
    type: str = DEFAULT_ENTITY_TYPE

    @property
    def key(self) -> str:
        """Case-insensitive identity used for de-duplication and lookup."""
        return self.name.casefold()

    def to_dict(self) -> dict:
        return {"name": self.name, "type": self.type}

    def __repr__(self) -> str:
        return f"EntityRecord('{self.name}', {self.type})"


@dataclass(frozen=True)
class RelationshipRecord:
    """A directed relationship line: source --KIND--> target."""

    source: str
    kind: str
    target: str

    @property
    def label(self) -> str:
        return RELATIONSHIP_LABELS.get(self.kind, self.kind.lower().replace("_", " "))

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "kind": self.kind,
            "target": self.target,
            "label": self.label,
        }
