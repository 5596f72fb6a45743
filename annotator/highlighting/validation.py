"""
Validation — annotation output conformance checks.

Implements:
- Schema conformance (jsonschema)
- Span contiguity (each span starts where the previous one ended)
- Losslessness (span texts reconstruct the display text)
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from jsonschema import ValidationError, validate

from annotator.config.schemas import ANNOTATION_OUTPUT_SCHEMA

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Outcome of validating one annotate() document."""

    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    output: Optional[dict] = None       # the document, only when valid
    lossless: Optional[bool] = None     # None when no display text was given


def _check_spans(spans: List[dict], errors: List[str]) -> None:
    cursor = 0
    for i, span in enumerate(spans):
        if span["start"] != cursor:
            errors.append(f"span {i}: starts at {span['start']}, expected {cursor}")
        if span["end"] - span["start"] != len(span["text"]):
            errors.append(
                f"span {i}: [{span['start']},{span['end']}] does not fit text of length {len(span['text'])}"
            )
        cursor = span["end"]


def validate_annotation_output(
    output: dict,
    display_text: Optional[str] = None,
) -> ValidationResult:
    """
    Validate an annotate() document.

    Stages:
        1. Schema conformance
        2. Span contiguity
        3. Losslessness against *display_text* (when given)

    Returns:
        ValidationResult with valid flag, errors, warnings, and the document.
    """
    errors: List[str] = []
    warnings: List[str] = []

    # ------------------------------------------------------------------
    # Stage 1: Schema validation
    # ------------------------------------------------------------------
    try:
        validate(instance=output, schema=ANNOTATION_OUTPUT_SCHEMA)
    except ValidationError as e:
        errors.append(f"Schema violation: {e.message}")
        return ValidationResult(valid=False, errors=errors, warnings=warnings)

    # ------------------------------------------------------------------
    # Stage 2: Contiguity
    # ------------------------------------------------------------------
    spans = output["spans"]
    _check_spans(spans, errors)

    # ------------------------------------------------------------------
    # Stage 3: Losslessness
    # ------------------------------------------------------------------
    lossless = None
    if display_text is not None:
        lossless = "".join(span["text"] for span in spans) == display_text
        if not lossless:
            errors.append("span texts do not reconstruct the display text")

    warnings.extend(output["diagnostics"]["warnings"])

    if errors:
        logger.warning("Annotation output invalid: %s", errors)
        return ValidationResult(valid=False, errors=errors, warnings=warnings, lossless=lossless)

    return ValidationResult(
        valid=True,
        errors=errors,
        warnings=warnings,
        output=output,
        lossless=lossless,
    )
