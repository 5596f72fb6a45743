"""
JSON Schemas for style-table configuration files and annotation output.

Two schemas:
1. STYLE_TABLE_SCHEMA       — what a style override file must contain
2. ANNOTATION_OUTPUT_SCHEMA — the document produced by annotate()
"""

# =============================================================================
# 1. Style Table Schema (caller-supplied overrides)
# =============================================================================
_STYLE_ENTRY_SCHEMA: dict = {
    "type": "object",
    "additionalProperties": False,
    "required": ["label"],
    "properties": {
        "label": {
            "type": "string",
            "minLength": 1,
            "description": "Short human-readable type name shown in the tooltip",
        },
        "color": {
            "type": "string",
            "pattern": "^#[0-9A-Fa-f]{6}$",
        },
        "background": {"type": "string"},
        "text": {"type": "string"},
        "border": {"type": "string"},
    },
}

STYLE_TABLE_SCHEMA: dict = {
    "type": "object",
    "propertyNames": {
        "pattern": "^[a-z][a-z0-9_]*$",
        "description": "Entity type keys are lower-case tags",
    },
    "additionalProperties": _STYLE_ENTRY_SCHEMA,
}


# =============================================================================
# 2. Annotation Output Schema
# =============================================================================
ANNOTATION_OUTPUT_SCHEMA: dict = {
    "type": "object",
    "required": ["entities", "relationships", "spans", "diagnostics", "processing_metadata"],
    "properties": {
        "entities": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name", "type", "classification"],
                "properties": {
                    "name": {"type": "string", "minLength": 1},
                    "type": {
                        "type": "string",
                        "minLength": 1,
                        "description": "Tag as declared in the context",
                    },
                    "classification": {
                        "type": "string",
                        "minLength": 1,
                        "description": "Style-table key the tag resolves to; matches entity_type of its spans",
                    },
                },
            },
        },
        "relationships": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["source", "kind", "target", "label"],
                "properties": {
                    "source": {"type": "string"},
                    "kind": {"type": "string", "pattern": "^[A-Z_]+$"},
                    "target": {"type": "string"},
                    "label": {"type": "string"},
                },
            },
        },
        "spans": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["kind", "text", "start", "end"],
                "properties": {
                    "kind": {"type": "string", "enum": ["literal", "entity"]},
                    "text": {"type": "string", "minLength": 1},
                    "start": {"type": "integer", "minimum": 0},
                    "end": {"type": "integer", "minimum": 0},
                    "entity_type": {"type": "string"},
                    "entity_name": {"type": "string"},
                    "label": {"type": "string"},
                    "style": {
                        "type": "object",
                        "required": ["label", "color", "background", "text", "border"],
                    },
                },
                "if": {"properties": {"kind": {"const": "entity"}}},
                "then": {"required": ["entity_type", "entity_name", "label", "style"]},
            },
        },
        "diagnostics": {
            "type": "object",
            "required": ["warnings", "fallback_applied"],
            "properties": {
                "warnings": {"type": "array", "items": {"type": "string"}},
                "fallback_applied": {"type": "boolean"},
            },
        },
        "processing_metadata": {
            "type": "object",
            "required": [
                "annotator_version",
                "duration_ms",
                "entities_extracted",
                "entity_spans",
                "literal_spans",
            ],
            "properties": {
                "annotator_version": {"type": "string"},
                "duration_ms": {"type": "integer", "minimum": 0},
                "entities_extracted": {"type": "integer", "minimum": 0},
                "entity_spans": {"type": "integer", "minimum": 0},
                "literal_spans": {"type": "integer", "minimum": 0},
            },
        },
    },
}
