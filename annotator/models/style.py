"""
Typed style models consumed by the presentation layer.

EntityStyle is the display metadata attached to every EntitySpan; StyleTable
is the immutable type-key → EntityStyle mapping used at classification time.
"""
from __future__ import annotations

import re
from collections.abc import Mapping
from types import MappingProxyType
from typing import Iterator, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from annotator.config.constants import DEFAULT_ENTITY_TYPE

_HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")


class EntityStyle(BaseModel):
    """Display metadata for one entity classification."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(..., min_length=1, description="Short type name shown in the tooltip.")
    color: str = Field("#94A3B8", description="Accent colour as #RRGGBB.")
    background: str = Field("bg-primary/20", description="Background style key.")
    text: str = Field("text-primary", description="Text style key.")
    border: str = Field("border-primary/40", description="Border style key.")

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: str) -> str:
        if not _HEX_COLOR.match(v):
            raise ValueError(f"color must be a #RRGGBB hex string, got '{v}'")
        return v.upper()


class StyleTable(Mapping[str, EntityStyle]):
    """
    Immutable mapping of entity type keys to styles.

    A "default" entry is mandatory: every unknown type resolves to it.
    Extend with with_overrides(), which returns a new table.
    """

    def __init__(self, styles: Mapping[str, EntityStyle]):
        normalized = {key.strip().lower(): style for key, style in styles.items()}
        if DEFAULT_ENTITY_TYPE not in normalized:
            raise ValueError(f"style table must define a '{DEFAULT_ENTITY_TYPE}' entry")
        self._styles = MappingProxyType(normalized)

    def __getitem__(self, key: str) -> EntityStyle:
        return self._styles[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._styles)

    def __len__(self) -> int:
        return len(self._styles)

    def resolve(self, entity_type: str | None) -> Tuple[str, EntityStyle]:
        """Return (key, style) for *entity_type*, falling back to the default entry."""
        key = (entity_type or "").strip().lower()
        style = self._styles.get(key)
        if style is None:
            return DEFAULT_ENTITY_TYPE, self._styles[DEFAULT_ENTITY_TYPE]
        return key, style

    def with_overrides(self, overrides: Mapping[str, EntityStyle | dict]) -> "StyleTable":
        merged = dict(self._styles)
        for key, style in overrides.items():
            if not isinstance(style, EntityStyle):
                style = EntityStyle.model_validate(style)
            merged[key.strip().lower()] = style
        return StyleTable(merged)

    def to_dict(self) -> dict:
        return {key: style.model_dump() for key, style in self._styles.items()}

    def __repr__(self) -> str:
        return f"StyleTable({sorted(self._styles)})"
