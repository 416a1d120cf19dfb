"""
Stage timing for the palette extraction pipeline.

Each extraction owns its own StageTimings; nothing is aggregated across calls.
"""

import time
from contextlib import contextmanager
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Iterator, List, Optional

import psutil
from loguru import logger


@dataclass
class StageMetrics:
    """Timing and memory sample for one pipeline stage."""
    stage: str
    duration_ms: float
    memory_mb: float
    fields: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None


@dataclass
class StageTimings:
    """Per-extraction collection of stage metrics."""
    stages: List[StageMetrics] = field(default_factory=list)

    def record(self, metrics: StageMetrics) -> None:
        self.stages.append(metrics)

    @property
    def total_ms(self) -> float:
        return sum(s.duration_ms for s in self.stages)

    @property
    def peak_memory_mb(self) -> float:
        return max((s.memory_mb for s in self.stages), default=0.0)

    def duration_of(self, stage: str) -> float:
        """Duration of a named stage in ms, 0.0 if it never ran."""
        for s in self.stages:
            if s.stage == stage:
                return s.duration_ms
        return 0.0

    def as_dict(self) -> Dict[str, Any]:
        return {
            "total_duration_ms": self.total_ms,
            "memory_peak_mb": self.peak_memory_mb,
            "stages": [asdict(s) for s in self.stages],
        }


def current_memory_mb() -> float:
    """Resident set size of this process in MB."""
    return psutil.Process().memory_info().rss / 1024 / 1024


@contextmanager
def performance_monitor(stage: str, timings: Optional[StageTimings] = None,
                        **fields: Any) -> Iterator[None]:
    """Context manager timing a pipeline stage.

    Logs completion at DEBUG (failures at ERROR, then re-raises) and appends a
    StageMetrics record to ``timings`` when one is given.
    """
    start = time.perf_counter()
    error_msg = None

    try:
        yield
    except Exception as e:
        error_msg = str(e)
        raise
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        metrics = StageMetrics(
            stage=stage,
            duration_ms=duration_ms,
            memory_mb=current_memory_mb(),
            fields=dict(fields),
            error=error_msg,
        )
        if timings is not None:
            timings.record(metrics)

        if error_msg:
            logger.error(f"Stage {stage} failed after {duration_ms:.1f}ms: {error_msg}")
        else:
            logger.debug(f"Stage {stage} completed in {duration_ms:.1f}ms "
                         f"(memory: {metrics.memory_mb:.1f}MB) {fields}")
