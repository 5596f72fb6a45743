"""
Unit tests for entity extraction from context strings.
Tests: declarations, relationship endpoints, de-duplication, relationships.
"""
import time

import pytest

from annotator.extraction.context_parser import extract_entities, extract_relationships
from annotator.models.entity import EntityRecord, RelationshipRecord


class TestDeclarations:
    """Tests for the "Entity: <name> (<type>)" pass."""

    def test_single_declaration(self):
        entities = extract_entities("Entity: Aurora (project)")
        assert entities == [EntityRecord("Aurora", "project")]

    def test_declarations_in_order(self):
        context = "Entity: Aurora (project)\nEntity: Maya (person)\nEntity: Figma (tool)"
        names = [e.name for e in extract_entities(context)]
        assert names == ["Aurora", "Maya", "Figma"]

    def test_name_and_type_trimmed_type_lowercased(self):
        entities = extract_entities("Entity:   Deep Work   (  HABIT )")
        assert entities == [EntityRecord("Deep Work", "habit")]

    def test_inline_declarations(self):
        context = "Known: Entity: Rust (skill), Entity: Burnout (blocker)."
        assert extract_entities(context) == [
            EntityRecord("Rust", "skill"),
            EntityRecord("Burnout", "blocker"),
        ]

    def test_empty_type_discarded(self):
        assert extract_entities("Entity: Aurora ()") == []

    def test_empty_name_discarded(self):
        assert extract_entities("Entity:  (project)") == []

    def test_unknown_type_kept_as_tag(self):
        entities = extract_entities("Entity: Calculus II (course)")
        assert entities[0].type == "course"


class TestDeduplication:

    def test_case_insensitive_duplicate_first_wins(self):
        context = "Entity: Aurora (project)\nEntity: AURORA (blocker)"
        entities = extract_entities(context)
        assert len(entities) == 1
        assert entities[0] == EntityRecord("Aurora", "project")

    def test_declaration_beats_relationship_endpoint(self):
        context = "Launch → REQUIRES → Budget\nEntity: Launch (goal)"
        entities = extract_entities(context)
        assert entities[0] == EntityRecord("Launch", "goal")
        assert EntityRecord("Launch", "default") not in entities

    def test_endpoint_seen_twice_added_once(self):
        context = "Aurora → BLOCKS → Launch\nlaunch → REQUIRES → Budget"
        names = [e.name for e in extract_entities(context)]
        assert names == ["Aurora", "Launch", "Budget"]


class TestRelationshipEndpoints:

    def test_endpoints_harvested_as_default(self):
        entities = extract_entities("Zoe → MENTORS → Lee (type)")
        assert entities == [
            EntityRecord("Zoe", "default"),
            EntityRecord("Lee", "default"),
        ]

    def test_short_endpoints_excluded(self):
        assert extract_entities("Jo → X → Al") == []

    def test_only_short_side_excluded(self):
        names = [e.name for e in extract_entities("Jo → KNOWS → Alice")]
        assert names == ["Alice"]

    def test_relation_kind_never_an_entity(self):
        names = [e.name for e in extract_entities("Overwhelm → LEADS_TO → Procrastination")]
        assert "LEADS_TO" not in names

    def test_lowercase_kind_not_a_relationship(self):
        assert extract_entities("Hell No → maybe → Hyperfocus Gold") == []

    def test_two_part_arrow_not_a_relationship(self):
        assert extract_entities("ADHD Compatibility: Hell No → Hyperfocus Gold") == []

    def test_list_bullet_stripped(self):
        names = [e.name for e in extract_entities("- Aurora → BLOCKS → Launch")]
        assert names == ["Aurora", "Launch"]

    def test_label_like_endpoint_rejected(self):
        names = [e.name for e in extract_entities("Note: stress → TRIGGERS → Doomscrolling")]
        assert names == ["Doomscrolling"]

    def test_chain_line(self):
        names = [e.name for e in extract_entities("Sleep → IMPROVES → Focus → ENABLES → Thesis")]
        assert names == ["Sleep", "Focus", "Thesis"]

    def test_trailing_fragment_keeps_leading_triple(self):
        names = [e.name for e in extract_entities("Aurora → BLOCKS → Launch → see notes")]
        assert names == ["Aurora", "Launch"]

    def test_chain_stops_at_first_bad_kind(self):
        context = "Sleep → IMPROVES → Focus → maybe → Thesis → ENABLES → Career"
        names = [e.name for e in extract_entities(context)]
        assert names == ["Sleep", "Focus"]

    def test_graph_serialized_form(self, graph_context):
        entities = extract_entities(graph_context)
        assert entities == [
            EntityRecord("Procrastination", "pattern"),
            EntityRecord("AWS Certification", "goal"),
            EntityRecord("Overwhelm", "emotion"),
            EntityRecord("Deep Work", "default"),
            EntityRecord("Focus Sessions", "default"),
        ]


class TestExtractionFallback:

    @pytest.mark.parametrize("context", ["", "   \n ", "just some prose, no structure", None])
    def test_unstructured_context_gives_empty_list(self, context):
        assert extract_entities(context) == []

    def test_aurora_scenario(self, aurora_context):
        assert extract_entities(aurora_context) == [
            EntityRecord("Aurora", "project"),
            EntityRecord("Launch", "default"),
        ]


class TestExtractRelationships:

    def test_arrow_relationship(self):
        assert extract_relationships("Aurora → BLOCKS → Launch (project)") == [
            RelationshipRecord("Aurora", "BLOCKS", "Launch"),
        ]

    def test_graph_relationships(self, graph_context):
        relationships = extract_relationships(graph_context)
        assert [(r.source, r.kind, r.target) for r in relationships] == [
            ("Overwhelm", "TRIGGERS", "Procrastination"),
            ("Procrastination", "BLOCKS", "AWS Certification"),
            ("Deep Work", "IMPROVES", "Focus Sessions"),
        ]

    def test_short_endpoints_kept(self):
        assert extract_relationships("Jo → KNOWS → Al") == [RelationshipRecord("Jo", "KNOWS", "Al")]

    def test_empty_endpoint_dropped(self):
        assert extract_relationships("→ BLOCKS → Launch") == []

    def test_empty_context(self):
        assert extract_relationships("") == []


class TestMalformedInputPerformance:
    """Unterminated declarations and relations must not backtrack for long."""

    @pytest.mark.parametrize("context", [
        "Entity:" + " " * 50_000,
        "Entity:" + " " * 50_000 + "x",
        "Entity: Aurora (" + " " * 50_000,
        "- " + " " * 50_000 + "--[BLOCKS]-> Launch ]-->",
    ])
    def test_returns_quickly(self, context):
        start = time.monotonic()
        assert extract_entities(context) == []
        assert time.monotonic() - start < 1.0
