"""
Constants used across the annotator.
Versioned and pinned for determinism.
"""
from typing import Dict

ANNOTATOR_VERSION: str = "1.0.0"

# Unclassified fallback type; see models.entity.EntityType for the known set.
DEFAULT_ENTITY_TYPE: str = "default"

# =============================================================================
# Relationship kinds -> display labels
# =============================================================================
RELATIONSHIP_LABELS: Dict[str, str] = {
    "BLOCKS": "blocks",
    "ENABLES": "enables",
    "REQUIRES": "requires",
    "TRIGGERS": "triggers",
    "LEADS_TO": "leads to",
    "RELATED_TO": "related to",
    "PART_OF": "part of",
    "USES": "uses",
    "IMPROVES": "improves",
    "CONFLICTS_WITH": "conflicts with",
}

# =============================================================================
# Context parsing
# =============================================================================
DECLARATION_LABEL: str = "Entity:"
RELATION_ARROW: str = "→"

# Relationship endpoints must be strictly longer than this.
MIN_ENDPOINT_LENGTH: int = 2

# List bullets stripped from the start of a relationship line.
LIST_BULLETS: str = "-*•"
