"""
Command-line runner for the entity annotation engine.

Reads:
  - a context file (knowledge-graph excerpt)
  - a display-text file (message to annotate)

Produces:
  - annotation JSON (stdout, or --output FILE)

Usage:
  python run_annotation.py --context graph_context.txt --text message.txt -o result.json
"""
import argparse
import json
import logging
import sys
from pathlib import Path

from annotator.config import settings
from annotator.config.styles import DEFAULT_STYLE_TABLE, StyleTableError, load_style_table
from annotator.highlighting.pipeline import annotate
from annotator.highlighting.validation import validate_annotation_output

# ---------------------------------------------------------------------------
# Setup logging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger("run_annotation")


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Annotate text with knowledge-graph entities.")
    parser.add_argument("--context", required=True, type=Path, help="Context file (graph excerpt).")
    parser.add_argument("--text", required=True, type=Path, help="Display text file.")
    parser.add_argument("-o", "--output", type=Path, help="Output JSON file (default: stdout).")
    parser.add_argument(
        "--styles",
        type=Path,
        default=Path(settings.ENTITY_STYLE_TABLE_PATH) if settings.ENTITY_STYLE_TABLE_PATH else None,
        help="JSON style overrides (default: $ENTITY_STYLE_TABLE_PATH).",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = _parse_args(argv)

    context_text = args.context.read_text(encoding="utf-8")
    display_text = args.text.read_text(encoding="utf-8")
    logger.info("context           : %d chars", len(context_text))
    logger.info("display text      : %d chars", len(display_text))

    style_table = DEFAULT_STYLE_TABLE
    if args.styles is not None:
        try:
            style_table = load_style_table(args.styles)
        except StyleTableError as e:
            logger.error("%s", e)
            return 2

    result = annotate(context_text, display_text, style_table=style_table)

    validation = validate_annotation_output(result, display_text)
    if not validation.valid:
        logger.error("Annotation output failed validation: %s", validation.errors)
        return 1
    for warning in validation.warnings:
        logger.warning("%s", warning)

    meta = result["processing_metadata"]
    logger.info("entities          : %d", meta["entities_extracted"])
    logger.info("entity spans      : %d", meta["entity_spans"])
    logger.info("literal spans     : %d", meta["literal_spans"])

    payload = json.dumps(result, ensure_ascii=False, indent=2)
    if args.output is not None:
        args.output.write_text(payload + "\n", encoding="utf-8")
        logger.info("Output saved to: %s", args.output)
    else:
        print(payload)
    return 0


if __name__ == "__main__":
    sys.exit(main())
