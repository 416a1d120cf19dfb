"""
Observability helpers for the palette extraction pipeline.
"""

from .metrics import (
    StageMetrics,
    StageTimings,
    current_memory_mb,
    performance_monitor,
)

__all__ = [
    'StageMetrics',
    'StageTimings',
    'current_memory_mb',
    'performance_monitor',
]
