"""
Shared test fixtures for the annotator test suite.
"""
import pytest
from prometheus_client import CollectorRegistry

from annotator.config.styles import DEFAULT_STYLE_TABLE
from annotator.highlighting.metrics import AnnotationMetrics
from annotator.models.entity import EntityRecord
from annotator.models.style import EntityStyle


# ==========================================================================
# Context strings
# ==========================================================================

@pytest.fixture
def aurora_context():
    return "Entity: Aurora (project)\nAurora → BLOCKS → Launch"


@pytest.fixture
def graph_context():
    """Context as serialized by the graph retrieval service."""
    return (
        "## KNOWLEDGE GRAPH CONTEXT\n"
        "\n"
        "### Entities from your personal knowledge graph:\n"
        "Entity: Procrastination (pattern)\n"
        "Entity: AWS Certification (goal)\n"
        "Entity: Overwhelm (emotion)\n"
        "\n"
        "### Connections in your graph:\n"
        "- Overwhelm --[TRIGGERS (strong)]--> Procrastination\n"
        "- Procrastination --[BLOCKS]--> AWS Certification | \"keeps slipping\"\n"
        "- Deep Work --[IMPROVES (weak)]--> Focus Sessions\n"
    )


# ==========================================================================
# Entities
# ==========================================================================

@pytest.fixture
def aurora_entities():
    return [
        EntityRecord("Aurora", "project"),
        EntityRecord("Launch", "default"),
    ]


# ==========================================================================
# Styles & metrics
# ==========================================================================

@pytest.fixture
def course_style_table():
    return DEFAULT_STYLE_TABLE.with_overrides({
        "course": EntityStyle(label="Course", color="#0EA5E9"),
    })


@pytest.fixture
def metrics():
    return AnnotationMetrics(registry=CollectorRegistry())
