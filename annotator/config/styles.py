"""
Entity style table — built-in configuration plus file-based overrides.

DEFAULT_STYLE_TABLE covers every built-in EntityType. Callers extend it
either in code (StyleTable.with_overrides) or with a JSON file validated
against STYLE_TABLE_SCHEMA (load_style_table).
"""
import json
import logging
from pathlib import Path

from jsonschema import ValidationError, validate
from pydantic import ValidationError as ModelValidationError

from annotator.config.schemas import STYLE_TABLE_SCHEMA
from annotator.models.entity import EntityType
from annotator.models.style import EntityStyle, StyleTable

logger = logging.getLogger(__name__)


class StyleTableError(ValueError):
    """Raised when a style override file cannot be loaded."""


def _style(label: str, color: str, tone: str) -> EntityStyle:
    return EntityStyle(
        label=label,
        color=color,
        background=f"bg-{tone}/20",
        text=f"text-{tone}",
        border=f"border-{tone}/40",
    )


DEFAULT_STYLE_TABLE: StyleTable = StyleTable({
    EntityType.PROJECT.value: _style("Project", "#8B5CF6", "violet-500"),
    EntityType.BLOCKER.value: _style("Blocker", "#EF4444", "red-500"),
    EntityType.EMOTION.value: _style("Emotion", "#F59E0B", "amber-500"),
    EntityType.PATTERN.value: _style("Pattern", "#06B6D4", "cyan-500"),
    EntityType.WIN.value: _style("Win", "#10B981", "emerald-500"),
    EntityType.SKILL.value: _style("Skill", "#3B82F6", "blue-500"),
    EntityType.PERSON.value: _style("Person", "#EC4899", "pink-500"),
    EntityType.TOOL.value: _style("Tool", "#6366F1", "indigo-500"),
    EntityType.HABIT.value: _style("Habit", "#14B8A6", "teal-500"),
    EntityType.GOAL.value: _style("Goal", "#F97316", "orange-500"),
    EntityType.DEFAULT.value: EntityStyle(label="Knowledge Graph"),
})


def load_style_table(path: str | Path, base: StyleTable = DEFAULT_STYLE_TABLE) -> StyleTable:
    """
    Load style overrides from a JSON file and merge them over *base*.

    File format::

        {
            "course": {"label": "Course", "color": "#0EA5E9"},
            "default": {"label": "Context"}
        }

    Raises:
        StyleTableError: unreadable file, invalid JSON, or schema violation.
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            overrides = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Cannot read style table '%s': %s", path, e)
        raise StyleTableError(f"Cannot read style table '{path}': {e}") from e

    try:
        validate(instance=overrides, schema=STYLE_TABLE_SCHEMA)
    except ValidationError as e:
        logger.warning("Style table '%s' violates schema: %s", path, e.message)
        raise StyleTableError(f"Schema violation in '{path}': {e.message}") from e

    try:
        table = base.with_overrides(overrides)
    except ModelValidationError as e:
        raise StyleTableError(f"Invalid style entry in '{path}': {e}") from e

    logger.info("Loaded %d style override(s) from %s", len(overrides), path)
    return table
