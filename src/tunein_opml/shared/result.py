"""Metrics collected while reading a document."""

from dataclasses import dataclass


@dataclass
class ReadMetrics:
    """Counters for a single assembly run."""

    events_processed: int = 0
    outlines_created: int = 0
    max_depth: int = 0
    processing_time_ms: float = 0.0

    @property
    def events_per_second(self) -> float:
        """Calculate events processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.events_processed * 1000.0) / self.processing_time_ms

    def record_depth(self, depth: int) -> None:
        """Track the deepest outline nesting seen so far."""
        if depth > self.max_depth:
            self.max_depth = depth

    def to_dict(self) -> dict:
        """Convert metrics to a dictionary for structured logging."""
        return {
            "events_processed": self.events_processed,
            "outlines_created": self.outlines_created,
            "max_depth": self.max_depth,
            "processing_time_ms": round(self.processing_time_ms, 3),
        }
