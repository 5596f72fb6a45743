"""
Unit tests for entity, relationship and span models.
"""
import pytest

from annotator.config.styles import DEFAULT_STYLE_TABLE
from annotator.models.entity import EntityRecord, EntityType, RelationshipRecord
from annotator.models.span import EntitySpan, LiteralSpan, join_spans


class TestEntityRecord:

    def test_default_type(self):
        assert EntityRecord("Launch").type == EntityType.DEFAULT.value

    def test_key_is_case_insensitive(self):
        assert EntityRecord("Aurora").key == EntityRecord("AURORA").key

    def test_frozen(self):
        record = EntityRecord("Aurora", "project")
        with pytest.raises(AttributeError):
            record.name = "Other"  # type: ignore[misc]

    def test_to_dict(self):
        assert EntityRecord("Aurora", "project").to_dict() == {"name": "Aurora", "type": "project"}


class TestRelationshipRecord:

    def test_known_label(self):
        assert RelationshipRecord("A", "LEADS_TO", "B").label == "leads to"

    def test_unknown_label_derived(self):
        assert RelationshipRecord("A", "MENTORS_WEEKLY", "B").label == "mentors weekly"

    def test_to_dict(self):
        assert RelationshipRecord("Aurora", "BLOCKS", "Launch").to_dict() == {
            "source": "Aurora",
            "kind": "BLOCKS",
            "target": "Launch",
            "label": "blocks",
        }


class TestSpans:

    def test_literal_to_dict(self):
        assert LiteralSpan("hi ", 0, 3).to_dict() == {"kind": "literal", "text": "hi ", "start": 0, "end": 3}

    def test_entity_to_dict(self):
        style = DEFAULT_STYLE_TABLE["project"]
        span = EntitySpan("aurora", "project", "Project", style, "Aurora", 3, 9)
        data = span.to_dict()
        assert data["kind"] == "entity"
        assert data["entity_name"] == "Aurora"
        assert data["style"]["label"] == "Project"

    def test_join_spans(self):
        style = DEFAULT_STYLE_TABLE["default"]
        spans = [
            LiteralSpan("Ask ", 0, 4),
            EntitySpan("Lee", "default", style.label, style, "Lee", 4, 7),
        ]
        assert join_spans(spans) == "Ask Lee"
        assert join_spans([]) == ""
