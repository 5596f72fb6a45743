"""
Prometheus Metrics — annotation observability.

Counters and a latency histogram for:
- Entities extracted per context
- Spans emitted, by kind (literal / entity)
- No-entity fallbacks
- Stage processing latency (extract / compile / segment)

Metrics live on a CollectorRegistry owned by the caller; nothing is
registered globally.

Usage
-----
    from prometheus_client import REGISTRY
    from annotator.highlighting.metrics import AnnotationMetrics

    metrics = AnnotationMetrics(registry=REGISTRY)
    result = annotate(context_text, display_text, metrics=metrics)
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Generator, Iterable

from prometheus_client import CollectorRegistry, Counter, Histogram

from annotator.models.span import EntitySpan, Span


class AnnotationMetrics:
    """Annotation counters registered on *registry* (a fresh one by default)."""

    def __init__(self, registry: CollectorRegistry | None = None):
        self.registry = registry if registry is not None else CollectorRegistry()

        self.entities_extracted = Counter(
            "annotator_entities_extracted_total",
            "Total entities extracted from context strings",
            registry=self.registry,
        )
        self.spans_emitted = Counter(
            "annotator_spans_emitted_total",
            "Total spans emitted by segmentation, by kind",
            ["kind"],
            registry=self.registry,
        )
        self.fallbacks = Counter(
            "annotator_fallbacks_total",
            "Annotations returned as a single literal span (no usable entity)",
            registry=self.registry,
        )
        self.stage_latency = Histogram(
            "annotator_stage_seconds",
            "Processing time per annotation stage in seconds",
            ["stage"],
            buckets=(0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5),
            registry=self.registry,
        )

    def record_extraction(self, count: int) -> None:
        self.entities_extracted.inc(count)

    def record_spans(self, spans: Iterable[Span]) -> None:
        for span in spans:
            kind = "entity" if isinstance(span, EntitySpan) else "literal"
            self.spans_emitted.labels(kind=kind).inc()

    def record_fallback(self) -> None:
        self.fallbacks.inc()

    @contextmanager
    def timed_stage(self, stage: str) -> Generator[None, None, None]:
        """
        Context manager that records stage latency.

        Usage::

            with metrics.timed_stage("segment"):
                spans = segment(...)
        """
        with self.stage_latency.labels(stage=stage).time():
            yield
